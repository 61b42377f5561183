"""Minimal LSP server for scenario trees: diagnostics only."""

from __future__ import annotations

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

from scenariotree import __version__
from scenariotree.errors import LexError, ParseError
from scenariotree.parser import parse
from scenariotree.tokens import Span

server = LanguageServer(
    "scenariotree-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _utf16_character(lines: list[str], line: int, chars: int) -> int:
    """Count the UTF-16 code units in the first *chars* characters of a line."""
    text = lines[line - 1] if 0 < line <= len(lines) else ""
    units = len(text[:chars].encode("utf-16-le")) // 2
    return units + max(0, chars - len(text))


def _to_range(span: Span, source: str) -> Range:
    """Convert an inclusive 1-based span to a 0-based, end-exclusive LSP range.

    Columns count characters; LSP positions count UTF-16 code units.
    """
    lines = source.split("\n")
    start = _utf16_character(lines, span.start.line, span.start.column - 1)
    end = _utf16_character(lines, span.end.line, span.end.column)
    return Range(
        start=Position(line=span.start.line - 1, character=start),
        end=Position(line=span.end.line - 1, character=end),
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex and parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse(doc.source)
    except (LexError, ParseError) as exc:
        diagnostics.append(
            Diagnostic(
                range=_to_range(exc.span, doc.source),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="scenariotree",
            )
        )

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
