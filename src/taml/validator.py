"""Accumulating structural validator over TAML token streams.

Unlike the parser, the validator does not stop at the first fault. It walks
the tokens once, records every unknown, mismatched, extra, or unclosed tag,
and keeps going. A mismatched closing tag does not pop the stack, so the tag
it failed to close is also reported as unclosed at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from taml.errors import (
    InvalidTagError,
    MismatchedTagError,
    TamlParseError,
    UnclosedTagError,
)
from taml.tags import is_valid_tag
from taml.tokenizer import tokenize
from taml.tokens import CloseTagToken, EndToken, OpenTagToken, Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    errors: list[TamlParseError] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class NestingResult:
    valid: bool
    unclosed_tags: list[str]
    mismatched_tags: list[tuple[str, str]]  # (expected, actual)


class IssueKind(Enum):
    UNCLOSED = "unclosed"
    EXTRA = "extra"
    MISMATCHED = "mismatched"


@dataclass(frozen=True, slots=True)
class ClosureIssue:
    kind: IssueKind
    tag_name: str
    position: int


@dataclass(frozen=True, slots=True)
class ClosureResult:
    valid: bool
    issues: list[ClosureIssue]


@dataclass(frozen=True, slots=True)
class ValidatorState:
    """Snapshot of the validator after (or during) a run."""

    position: int
    current_token: Token | None
    tag_stack: tuple[str, ...]
    error_count: int


class Validator:
    """Check tag structure of a token sequence, collecting every error."""

    def __init__(self, source: str = "") -> None:
        self._source = source
        self._tokens: Sequence[Token] = ()
        self._pos = 0
        self._tag_stack: list[tuple[str, OpenTagToken]] = []
        self._errors: list[TamlParseError] = []

    def validate_tokens(self, tokens: Sequence[Token]) -> ValidationResult:
        self._tokens = tokens
        self._pos = 0
        self._tag_stack = []
        self._errors = []

        while self._pos < len(tokens):
            tok = tokens[self._pos]
            if isinstance(tok, EndToken):
                break
            if isinstance(tok, OpenTagToken):
                self._open_tag(tok)
            elif isinstance(tok, CloseTagToken):
                self._close_tag(tok)
            self._pos += 1

        for name, tok in self._tag_stack:
            self._errors.append(
                UnclosedTagError(name, tok.start, tok.line, tok.column, self._source)
            )

        logger.debug("validated %d tokens: %d errors", len(tokens), len(self._errors))
        return ValidationResult(valid=not self._errors, errors=list(self._errors))

    def debug_info(self) -> ValidatorState:
        current = self._tokens[self._pos] if self._pos < len(self._tokens) else None
        return ValidatorState(
            position=self._pos,
            current_token=current,
            tag_stack=tuple(name for name, _ in self._tag_stack),
            error_count=len(self._errors),
        )

    def _open_tag(self, tok: OpenTagToken) -> None:
        if not is_valid_tag(tok.tag_name):
            self._errors.append(
                InvalidTagError(tok.tag_name, tok.start, tok.line, tok.column, self._source)
            )
            return
        self._tag_stack.append((tok.tag_name, tok))

    def _close_tag(self, tok: CloseTagToken) -> None:
        if not is_valid_tag(tok.tag_name):
            self._errors.append(
                InvalidTagError(tok.tag_name, tok.start, tok.line, tok.column, self._source)
            )
            return

        if not self._tag_stack:
            expected = "(none)"
        else:
            expected = self._tag_stack[-1][0]
            if expected == tok.tag_name:
                self._tag_stack.pop()
                return

        # The stack is left untouched; later tokens keep matching against it.
        self._errors.append(
            MismatchedTagError(
                expected, tok.tag_name, tok.start, tok.line, tok.column, self._source
            )
        )


def validate_tokens(tokens: Sequence[Token], source: str = "") -> ValidationResult:
    """Convenience function: run a Validator over tokens."""
    return Validator(source).validate_tokens(tokens)


def validate_source(source: str) -> ValidationResult:
    """Tokenize source and validate its structure.

    Lexical faults stop tokenizing, so they come back as the only error.
    """
    try:
        tokens = tokenize(source)
    except TamlParseError as exc:
        return ValidationResult(valid=False, errors=[exc])
    return validate_tokens(tokens, source)


def validate_tag_name(tag_name: str) -> bool:
    return is_valid_tag(tag_name)


def validate_nesting(tokens: Sequence[Token]) -> NestingResult:
    """Report nesting problems as bare tag names, without positions."""
    stack: list[str] = []
    mismatched: list[tuple[str, str]] = []

    for tok in tokens:
        if isinstance(tok, OpenTagToken):
            if is_valid_tag(tok.tag_name):
                stack.append(tok.tag_name)
        elif isinstance(tok, CloseTagToken):
            if not is_valid_tag(tok.tag_name):
                continue
            if not stack:
                mismatched.append(("(none)", tok.tag_name))
            elif stack[-1] == tok.tag_name:
                stack.pop()
            else:
                mismatched.append((stack[-1], tok.tag_name))

    return NestingResult(
        valid=not stack and not mismatched,
        unclosed_tags=stack,
        mismatched_tags=mismatched,
    )


def validate_tag_closure(tokens: Sequence[Token]) -> ClosureResult:
    """Report closure problems by kind with the offending tag's offset."""
    stack: list[tuple[str, int]] = []
    issues: list[ClosureIssue] = []

    for tok in tokens:
        if isinstance(tok, OpenTagToken):
            if is_valid_tag(tok.tag_name):
                stack.append((tok.tag_name, tok.start))
        elif isinstance(tok, CloseTagToken):
            if not is_valid_tag(tok.tag_name):
                continue
            if not stack:
                issues.append(ClosureIssue(IssueKind.EXTRA, tok.tag_name, tok.start))
            elif stack[-1][0] == tok.tag_name:
                stack.pop()
            else:
                issues.append(ClosureIssue(IssueKind.MISMATCHED, tok.tag_name, tok.start))

    issues.extend(ClosureIssue(IssueKind.UNCLOSED, name, start) for name, start in stack)
    return ClosureResult(valid=not issues, issues=issues)
