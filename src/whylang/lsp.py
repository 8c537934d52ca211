"""Minimal LSP server for WhyLang — diagnostics only."""

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

from whylang import __version__
from whylang.document import Document
from whylang.errors import ParseError, TokenizerError
from whylang.parser import parse

log = logging.getLogger(__name__)

server = LanguageServer(
    "whylang-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _position(document: Document, offset: int) -> Position:
    """Convert a byte offset to an LSP position (UTF-16 code units)."""
    line, byte_col = document.line_map.map_offset(offset)
    prefix = document.line_text(line)[:byte_col].decode("utf-8", errors="replace")
    return Position(line=line, character=len(prefix.encode("utf-16-le")) // 2)


def _diagnostic(document: Document, exc: ParseError) -> Diagnostic:
    assert exc.span is not None
    start = _position(document, exc.span.start)
    end = _position(document, exc.span.end)
    # Text errors reach here wrapped in a TokenizerError
    code = "lex" if isinstance(exc.__cause__, TokenizerError) else "parse"
    return Diagnostic(
        range=Range(start=start, end=end),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        code=code,
        source="whylang",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the open document and publish its diagnostics."""
    text_doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    document = Document(filename, text_doc.source)
    diagnostics: list[Diagnostic] = []

    try:
        parse(document.content)
    except ParseError as exc:
        diagnostics.append(_diagnostic(document, exc))

    log.debug("%s: %d diagnostic(s)", uri, len(diagnostics))
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
