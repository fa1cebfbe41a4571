"""AST node types for parsed TAML documents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Text:
    """Decoded text content."""

    content: str
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Element:
    """A styled span: open tag, children, matching close tag."""

    tag_name: str
    children: tuple[Element | Text, ...]
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Document:
    """Root document node."""

    children: tuple[Element | Text, ...]
    start: int
    end: int


Node: TypeAlias = Document | Element | Text


def create_document(children: Iterable[Element | Text], start: int, end: int) -> Document:
    return Document(tuple(children), start, end)


def create_element(
    tag_name: str, children: Iterable[Element | Text], start: int, end: int
) -> Element:
    return Element(tag_name, tuple(children), start, end)


def create_text(content: str, start: int, end: int) -> Text:
    return Text(content, start, end)


def is_document(node: Node) -> bool:
    return isinstance(node, Document)


def is_element(node: Node) -> bool:
    return isinstance(node, Element)


def is_text(node: Node) -> bool:
    return isinstance(node, Text)


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all of its descendants in document order."""
    yield node
    if isinstance(node, (Document, Element)):
        for child in node.children:
            yield from walk(child)


def get_all_text(node: Node) -> str:
    """Concatenate the content of every Text node under node."""
    return "".join(n.content for n in walk(node) if isinstance(n, Text))


def get_elements_with_tag(node: Node, tag_name: str) -> list[Element]:
    return [n for n in walk(node) if isinstance(n, Element) and n.tag_name == tag_name]


def strip_positions(doc: Document) -> Document:
    """Return a copy of doc with every start/end set to 0."""
    return Document(tuple(_strip(c) for c in doc.children), 0, 0)


def _strip(node: Element | Text) -> Element | Text:
    if isinstance(node, Text):
        return Text(node.content, 0, 0)
    return Element(node.tag_name, tuple(_strip(c) for c in node.children), 0, 0)
