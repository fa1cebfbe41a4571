"""AST and token dumps for --debug and --tokens."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from taml.ast import Document, Element, Text
from taml.tokens import CloseTagToken, OpenTagToken, TextToken, Token


def dump_ast(doc: Document, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write(f"Document [{doc.start}, {doc.end}]\n")
    for child in doc.children:
        _dump_node(child, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Element | Text, depth: int, f: TextIO) -> None:
    if isinstance(node, Text):
        f.write(f"{_indent(depth)}Text({node.content!r}) [{node.start}, {node.end}]\n")
        return
    f.write(f"{_indent(depth)}Element <{node.tag_name}> [{node.start}, {node.end}]\n")
    for child in node.children:
        _dump_node(child, depth + 1, f)


def dump_tokens(tokens: Sequence[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line, prefixed with its line:column."""
    for tok in tokens:
        loc = f"{tok.line}:{tok.column}"
        if isinstance(tok, OpenTagToken):
            desc = f"OPEN_TAG {tok.tag_name}"
        elif isinstance(tok, CloseTagToken):
            desc = f"CLOSE_TAG {tok.tag_name}"
        elif isinstance(tok, TextToken):
            desc = f"TEXT {tok.content!r}"
        else:
            desc = "END"
        file.write(f"{loc:<8} {desc}\n")
