"""TAML tokenizer: converts source text into a flat token stream."""

from __future__ import annotations

import logging

from taml.errors import (
    InvalidTagError,
    MalformedTagError,
    TamlParseError,
    UnexpectedEndOfInputError,
    create_error_at_position,
)
from taml.tags import is_valid_tag
from taml.tokens import (
    CloseTagToken,
    EndToken,
    OpenTagToken,
    Position,
    TextToken,
    Token,
    is_tag_name,
)

logger = logging.getLogger(__name__)

# Entities decoded in text runs; anything else after '&' is literal.
_ENTITIES = (("&lt;", "<"), ("&amp;", "&"))


class Tokenizer:
    """Tokenize TAML source text into a list of tokens ending with an EndToken."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens = []

        while self._pos < len(self._source):
            if self._peek() == "<":
                self._lex_tag()
            else:
                self._lex_text()

        self._tokens.append(EndToken(self._pos, self._pos, self._line, self._col))
        logger.debug(
            "tokenized %d characters into %d tokens", len(self._source), len(self._tokens)
        )
        return self._tokens

    def position_info(self) -> Position:
        """Current cursor offset with its line and column."""
        return self._current_pos()

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self, count: int = 1) -> str:
        chunk = self._source[self._pos : self._pos + count]
        for ch in chunk:
            if ch == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        self._pos += len(chunk)
        return chunk

    def _error(
        self, error_cls: type[TamlParseError], offset: int, *args: object, **kwargs: object
    ) -> TamlParseError:
        return create_error_at_position(error_cls, self._source, offset, *args, **kwargs)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _lex_tag(self) -> None:
        start = self._current_pos()
        self._advance()  # consume '<'

        closing = self._peek() == "/"
        if closing:
            self._advance()

        name_start = self._pos
        while self._pos < len(self._source) and self._peek() != ">":
            self._advance()
        name = self._source[name_start : self._pos]

        if not is_tag_name(name):
            # Include the '>' in the reported content when there is one.
            content = self._source[start.offset : self._pos + 1]
            raise self._error(MalformedTagError, start.offset, content)

        if self._pos >= len(self._source):
            raise self._error(UnexpectedEndOfInputError, self._pos, context="parsing tag")

        self._advance()  # consume '>'

        if not is_valid_tag(name):
            raise self._error(InvalidTagError, start.offset, name)

        value = self._source[start.offset : self._pos]
        token_cls = CloseTagToken if closing else OpenTagToken
        self._tokens.append(
            token_cls(name, value, start.offset, self._pos, start.line, start.column)
        )

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _lex_text(self) -> None:
        start = self._current_pos()
        chars: list[str] = []
        while self._pos < len(self._source):
            ch = self._peek()
            if ch == "<":
                break
            if ch == "&":
                decoded = self._match_entity()
                if decoded is not None:
                    chars.append(decoded)
                    continue
            chars.append(self._advance())

        value = self._source[start.offset : self._pos]
        self._tokens.append(
            TextToken("".join(chars), value, start.offset, self._pos, start.line, start.column)
        )

    def _match_entity(self) -> str | None:
        """Consume a recognized entity at the cursor and return its character."""
        for entity, char in _ENTITIES:
            if self._source.startswith(entity, self._pos):
                self._advance(len(entity))
                return char
        return None


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Tokenizer(source).tokenize()
