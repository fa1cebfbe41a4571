"""Minimal LSP server for TAML, diagnostics only."""

from __future__ import annotations

import logging

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from taml import __version__
from taml.errors import MaxDepthExceededError, TamlParseError
from taml.parser import parse
from taml.validator import validate_source

logger = logging.getLogger(__name__)

server = LanguageServer("taml-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _error_diagnostic(exc: TamlParseError) -> Diagnostic:
    line = exc.line - 1
    col = exc.column - 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="taml",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check a TAML document and publish one diagnostic per error."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source

    result = validate_source(source)
    diagnostics = [_error_diagnostic(err) for err in result.errors]

    if result.valid:
        # Structure is fine; only the nesting limit can still fail.
        try:
            parse(source)
        except MaxDepthExceededError as exc:
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=0, character=0),
                        end=Position(line=0, character=0),
                    ),
                    message=str(exc),
                    severity=DiagnosticSeverity.Warning,
                    source="taml",
                )
            )

    logger.debug("publishing %d diagnostics for %s", len(diagnostics), uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
