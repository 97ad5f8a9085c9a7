"""
PukiMO Language Server entry point.

This server provides basic language features for PukiMO source files using
`pygls`. It reuses the PukiMO lexer and parser, through `pukimo.symbols`, to
build a simple symbol index supporting definition lookup, hover information,
and document symbols.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    DefinitionParams,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from pukimo.symbols import CONSTANT, FUNCTION, Symbol, index_symbols

logger = logging.getLogger(__name__)

SYMBOL_KINDS = {
    FUNCTION: SymbolKind.Function,
    CONSTANT: SymbolKind.Constant,
}


class PukiLanguageServer(LanguageServer):
    """Language server for PukiMO source files."""

    def __init__(self) -> None:
        super().__init__("puki-ls", "v0.1.1")
        self.symbols_by_uri: Dict[str, List[Symbol]] = {}
        self.global_symbols: Dict[str, List[Symbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all `.puki` files under the current workspace."""
        root = self.workspace.root_path
        if root:
            for path in Path(root).rglob("*.puki"):
                try:
                    text = path.read_text(encoding="utf-8")
                except OSError as e:
                    logger.warning("Failed to read %s: %s", path, e)
                    continue
                self.update_index(path.as_uri(), text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> None:
        """Parse ``text`` and update the symbol index for ``uri``."""
        self.symbols_by_uri[uri] = index_symbols(text, uri)
        self._rebuild_global_index()

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, uri: str, position: Position) -> Optional[Symbol]:
        """Return the first indexed symbol named by the word at ``position``."""
        doc = self.workspace.get_text_document(uri)
        word = doc.word_at_position(position)
        if not word:
            return None
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None


def _symbol_range(sym: Symbol) -> Range:
    return Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))


lang_server = PukiLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: PukiLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    ls.update_index(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: PukiLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    if params.content_changes:
        ls.update_index(params.text_document.uri, params.content_changes[-1].text)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: PukiLanguageServer, params: DefinitionParams):
    """Return the definition location for the symbol under the cursor."""
    sym = ls.lookup(params.text_document.uri, params.position)
    if sym is None:
        return None
    return Location(uri=sym.uri, range=_symbol_range(sym))


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: PukiLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    sym = ls.lookup(params.text_document.uri, params.position)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: PukiLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    result: List[DocumentSymbol] = []
    for sym in ls.symbols_by_uri.get(params.text_document.uri, []):
        rng = _symbol_range(sym)
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=SYMBOL_KINDS.get(sym.kind, SymbolKind.Variable),
                range=rng,
                selection_range=rng,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
