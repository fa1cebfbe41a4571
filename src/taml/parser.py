"""TAML parser: converts a token stream into an AST."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from taml.ast import (
    Document,
    Element,
    Text,
    create_document,
    create_element,
    create_text,
    strip_positions,
)
from taml.errors import (
    MaxDepthExceededError,
    MismatchedTagError,
    TamlParseError,
    UnclosedTagError,
    create_error_at_position,
)
from taml.tokenizer import tokenize
from taml.tokens import CloseTagToken, EndToken, OpenTagToken, TextToken, Token
from taml.validator import ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Options accepted by parse() and parse_safe()."""

    max_depth: int = DEFAULT_MAX_DEPTH
    include_positions: bool = True


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parse_safe(): exactly one of ast and error is set."""

    success: bool
    ast: Document | None = None
    error: Exception | None = None


@dataclass(frozen=True, slots=True)
class ParserState:
    """Snapshot of the parser cursor for diagnostics."""

    position: int
    current_token: Token | None
    tag_stack: tuple[str, ...]


class Parser:
    """Recursive descent parser for TAML token streams."""

    def __init__(self, source: str, options: ParseOptions | None = None) -> None:
        self._source = source
        self._options = options or ParseOptions()
        self._tokens: list[Token] = []
        self._pos = 0
        self._tag_stack: list[tuple[str, OpenTagToken]] = []

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _error(
        self, error_cls: type[TamlParseError], offset: int, *args: object
    ) -> TamlParseError:
        return create_error_at_position(error_cls, self._source, offset, *args)

    def debug_info(self) -> ParserState:
        return ParserState(
            position=self._pos,
            current_token=self._peek(),
            tag_stack=tuple(name for name, _ in self._tag_stack),
        )

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self) -> Document:
        self._tokens = tokenize(self._source)
        self._pos = 0
        self._tag_stack = []

        # A closing tag with nothing open ends the top-level sequence; the
        # tokens after it are dropped. validate_source reports it instead.
        children = self._parse_nodes(0)

        if self._tag_stack:
            name, open_tok = self._tag_stack[-1]
            raise self._error(UnclosedTagError, open_tok.start, name)

        doc = create_document(children, 0, len(self._source))
        if not self._options.include_positions:
            doc = strip_positions(doc)
        return doc

    def _parse_nodes(self, depth: int) -> list[Element | Text]:
        """Parse siblings until an EndToken or a CloseTagToken."""
        if depth > self._options.max_depth:
            logger.debug("aborting parse at depth %d", depth)
            raise MaxDepthExceededError(self._options.max_depth)

        nodes: list[Element | Text] = []
        while True:
            tok = self._peek()
            if tok is None or isinstance(tok, (EndToken, CloseTagToken)):
                return nodes
            if isinstance(tok, OpenTagToken):
                nodes.append(self._parse_element(tok, depth))
            elif isinstance(tok, TextToken):
                self._pos += 1
                nodes.append(create_text(tok.content, tok.start, tok.end))
            else:
                raise TypeError(f"unexpected token {tok!r}")

    def _parse_element(self, open_tok: OpenTagToken, depth: int) -> Element:
        self._pos += 1  # consume open tag
        self._tag_stack.append((open_tok.tag_name, open_tok))

        children = self._parse_nodes(depth + 1)

        close_tok = self._peek()
        if not isinstance(close_tok, CloseTagToken):
            raise self._error(UnclosedTagError, open_tok.start, open_tok.tag_name)

        if close_tok.tag_name != open_tok.tag_name:
            raise self._error(
                MismatchedTagError, close_tok.start, open_tok.tag_name, close_tok.tag_name
            )

        self._pos += 1
        self._tag_stack.pop()
        return create_element(open_tok.tag_name, children, open_tok.start, close_tok.end)


def parse(source: str, options: ParseOptions | None = None) -> Document:
    """Parse TAML source into a Document, raising on the first fault."""
    return Parser(source, options).parse()


def parse_safe(source: str, options: ParseOptions | None = None) -> ParseResult:
    """Like parse(), but return a ParseResult instead of raising."""
    try:
        ast = parse(source, options)
    except (TamlParseError, MaxDepthExceededError, RecursionError) as exc:
        return ParseResult(success=False, error=exc)
    return ParseResult(success=True, ast=ast)


def validate_syntax(source: str) -> ValidationResult:
    """Check source by parsing it; reports at most the first fault.

    MaxDepthExceededError is not a syntax fault and propagates.
    """
    try:
        parse(source)
    except TamlParseError as exc:
        return ValidationResult(valid=False, errors=[exc])
    return ValidationResult(valid=True, errors=[])
