"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from taml.ast import Document, Element, Text
from taml.parser import ParseOptions, parse
from taml.tokenizer import tokenize
from taml.tokens import EndToken, Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding End)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing End for convenience
        return [t for t in tokens if not isinstance(t, EndToken)]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Document."""

    def _parse(source: str, **options) -> Document:
        return parse(source, ParseOptions(**options))

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the raw token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_element(node: Element | Text, tag_name: str, num_children: int | None = None) -> None:
    """Assert basic properties of an Element node."""
    assert isinstance(node, Element), f"Expected Element, got {type(node).__name__}"
    assert node.tag_name == tag_name, f"Expected tag '{tag_name}', got '{node.tag_name}'"
    if num_children is not None:
        assert len(node.children) == num_children, (
            f"Expected {num_children} children, got {len(node.children)}"
        )


def nest(tags: list[str], inner: str = "text") -> str:
    """Wrap inner in the given tags, first tag outermost."""
    for tag in reversed(tags):
        inner = f"<{tag}>{inner}</{tag}>"
    return inner
