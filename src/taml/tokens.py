"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, TypeAlias


class TokenType(Enum):
    OPEN_TAG = auto()  # <name>
    CLOSE_TAG = auto()  # </name>
    TEXT = auto()  # run of characters up to the next '<'
    END = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class OpenTagToken:
    """An opening tag; value is the raw '<name>' slice."""

    type: ClassVar[TokenType] = TokenType.OPEN_TAG

    tag_name: str
    value: str
    start: int
    end: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class CloseTagToken:
    """A closing tag; value is the raw '</name>' slice."""

    type: ClassVar[TokenType] = TokenType.CLOSE_TAG

    tag_name: str
    value: str
    start: int
    end: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class TextToken:
    """Text with entities decoded in content and left as-is in value."""

    type: ClassVar[TokenType] = TokenType.TEXT

    content: str
    value: str
    start: int
    end: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class EndToken:
    """Terminal sentinel positioned at len(source)."""

    type: ClassVar[TokenType] = TokenType.END

    start: int
    end: int
    line: int
    column: int

    @property
    def value(self) -> str:
        return ""


Token: TypeAlias = OpenTagToken | CloseTagToken | TextToken | EndToken


def is_open_tag_token(token: Token) -> bool:
    return isinstance(token, OpenTagToken)


def is_close_tag_token(token: Token) -> bool:
    return isinstance(token, CloseTagToken)


def is_text_token(token: Token) -> bool:
    return isinstance(token, TextToken)


def is_end_token(token: Token) -> bool:
    return isinstance(token, EndToken)


def is_tag_name(candidate: str) -> bool:
    """Return True if candidate is one or more ASCII letters."""
    return candidate.isascii() and candidate.isalpha()
