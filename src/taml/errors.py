"""Error types with formatted source context."""

from __future__ import annotations

from typing import Any

from taml.tokens import Position


def calculate_position(source: str, index: int) -> Position:
    """Map a 0-based offset to a 1-based line and column.

    Offsets past the end of source stop at the last character, so the
    reported column is that of len(source).
    """
    line = 1
    column = 1
    for ch in source[: max(0, index)]:
        if ch == "\n":
            line += 1
            column = 1
        else:
            column += 1
    return Position(line, column, index)


def _source_line(source: str, line: int) -> str:
    lines = source.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


class TamlParseError(Exception):
    """Base class for every positioned TAML error."""

    def __init__(
        self,
        message: str,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
    ) -> None:
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        self.source = source
        super().__init__(message)

    def detailed_message(self) -> str:
        """Return the message with the offending source line and a caret."""
        if self.source is None:
            return self.message

        line_num = str(self.line)
        pointer = " " * max(0, self.column - 1) + "^"
        return (
            f"{self.message}\n"
            f"\n"
            f"{line_num} | {_source_line(self.source, self.line)}\n"
            f"{' ' * len(line_num)} | {pointer}\n"
            f"\n"
            f"Position: line {self.line}, column {self.column}"
        )

    def format(self, filename: str = "input.taml") -> str:
        source_line = _source_line(self.source or "", self.line)
        col = self.column

        pad = " " * (col - 1)

        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class InvalidTagError(TamlParseError):
    """Tag name is well-formed but not one of the 37 TAML tags."""

    def __init__(
        self,
        tag_name: str,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
    ) -> None:
        self.tag_name = tag_name
        super().__init__(
            f"Invalid tag name '{tag_name}' at line {line}, column {column}. "
            "Tag names must be one of the 37 valid TAML tags.",
            position,
            line,
            column,
            source,
        )


class UnclosedTagError(TamlParseError):
    """Input ended while a tag was still open."""

    def __init__(
        self,
        tag_name: str,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
    ) -> None:
        self.tag_name = tag_name
        super().__init__(
            f"Unclosed tag '{tag_name}' at line {line}, column {column}. "
            f"Expected '</{tag_name}>' before end of input.",
            position,
            line,
            column,
            source,
        )


class MismatchedTagError(TamlParseError):
    """Closing tag does not match the innermost open tag.

    ``expected`` is ``"(none)"`` when nothing was open.
    """

    def __init__(
        self,
        expected: str,
        actual: str,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Mismatched closing tag at line {line}, column {column}. "
            f"Expected '</{expected}>' but found '</{actual}>'.",
            position,
            line,
            column,
            source,
        )


class MalformedTagError(TamlParseError):
    """Tag delimiters are present but the tag itself is not well-formed."""

    def __init__(
        self,
        content: str,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
    ) -> None:
        self.content = content
        super().__init__(
            f"Malformed tag '{content}' at line {line}, column {column}. "
            "Tags must follow the pattern '<tagName>' or '</tagName>'.",
            position,
            line,
            column,
            source,
        )


class UnexpectedEndOfInputError(TamlParseError):
    def __init__(
        self,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
        context: str | None = None,
    ) -> None:
        self.context = context
        context_msg = f" while {context}" if context else ""
        super().__init__(
            f"Unexpected end of input at line {line}, column {column}{context_msg}.",
            position,
            line,
            column,
            source,
        )


class UnexpectedCharacterError(TamlParseError):
    def __init__(
        self,
        character: str,
        position: int,
        line: int,
        column: int,
        source: str | None = None,
        expected: str | None = None,
    ) -> None:
        self.character = character
        self.expected = expected
        expected_msg = f" Expected {expected}." if expected else ""
        super().__init__(
            f"Unexpected character '{character}' at line {line}, column {column}.{expected_msg}",
            position,
            line,
            column,
            source,
        )


class MaxDepthExceededError(Exception):
    """Raised when nesting goes deeper than the configured limit.

    Not a TamlParseError: it guards recursion, it is not a syntax fault.
    """

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth of {max_depth} exceeded")


def create_error_at_position(
    error_cls: type[TamlParseError],
    source: str,
    position: int,
    *args: Any,
    **kwargs: Any,
) -> TamlParseError:
    """Build an error of error_cls with line/column computed from position.

    Variant-specific arguments come first in args; keyword-only extras such
    as ``context`` or ``expected`` go in kwargs.
    """
    pos = calculate_position(source, position)
    return error_cls(
        *args,
        position=position,
        line=pos.line,
        column=pos.column,
        source=source,
        **kwargs,
    )
