"""
ASE Script Language Server.

This server provides basic language features for ASE scripts using
`pygls`. It reuses the lexer and parser to report the first syntax error of a
document as a diagnostic and to build a symbol index of method definitions
and top-level variables, supporting definition lookup, hover information and
document symbols.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
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
from pygls.server import LanguageServer

from asescript.exceptions import SyntaxException
from asescript.lexer import tokenize
from asescript.nodes import Assignment, Block, MethodDef, format_expr
from asescript.parser import Parser

logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".ase"


@dataclass
class ScriptSymbol:
    """Represents a top-level symbol in an ASE script."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str


def parse_text(text: str, uri: str) -> Block:
    """Parse ``text``, raising :class:`SyntaxException` on failure."""
    return Parser(tokenize(text), uri).parse()


def collect_symbols(uri: str, program: Block) -> List[ScriptSymbol]:
    """
    Extract method definitions and top-level assignments from ``program``.

    Symbol lines are zero-based, as the protocol expects. Only the first
    assignment to a variable is recorded.
    """
    symbols: List[ScriptSymbol] = []
    seen_vars: set[str] = set()
    for node in program.statements:
        if isinstance(node, MethodDef):
            params = ", ".join(param.name for param in node.params)
            detail = f"Method {node.name}({params})"
            symbols.append(ScriptSymbol(node.name, SymbolKind.Method, uri, node.line - 1, detail))
        elif isinstance(node, Assignment) and node.name not in seen_vars:
            seen_vars.add(node.name)
            detail = f"{node.name} = {format_expr(node.value)}"
            symbols.append(ScriptSymbol(node.name, SymbolKind.Variable, uri, node.line - 1, detail))
    return symbols


def collect_diagnostics(text: str, uri: str = "<document>") -> List[Diagnostic]:
    """Return a diagnostic for the first syntax error in ``text``, if any."""
    try:
        parse_text(text, uri)
    except SyntaxException as e:
        return [syntax_diagnostic(e, text)]
    return []


def syntax_diagnostic(error: SyntaxException, text: str) -> Diagnostic:
    """Build a diagnostic spanning the line a syntax error was raised on."""
    lines = text.splitlines() or [""]
    line = min(max((error.line or 1) - 1, 0), len(lines) - 1)
    rng = Range(Position(line, 0), Position(line, len(lines[line])))
    return Diagnostic(
        range=rng,
        message=error.reason,
        severity=DiagnosticSeverity.Error,
        source="ase",
    )


class ScriptLanguageServer(LanguageServer):
    """Language server for ASE scripts."""

    def __init__(self) -> None:
        super().__init__("ase-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[ScriptSymbol]] = {}
        self.global_symbols: Dict[str, List[ScriptSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all `.ase` files under the current workspace."""
        root = self.workspace.root_path
        if not root:
            self.indexed_workspace = True
            return
        for path in Path(root).rglob(f"*{SCRIPT_SUFFIX}"):
            uri = path.as_uri()
            if uri in self.symbols_by_uri:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                logger.warning("Failed to read %s: %s", path, e)
                continue
            self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """
        Parse ``text``, update the symbol index for ``uri`` and return its
        diagnostics.

        A document that fails to parse keeps its previous symbols.
        """
        try:
            program = parse_text(text, uri)
        except SyntaxException as e:
            return [syntax_diagnostic(e, text)]
        self.symbols_by_uri[uri] = collect_symbols(uri, program)
        self._rebuild_global_index()
        return []

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, word: str) -> Optional[ScriptSymbol]:
        """Return the first indexed symbol named ``word``."""
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None

    def refresh(self, uri: str, text: str) -> None:
        """Re-index a document and publish its diagnostics."""
        self.publish_diagnostics(uri, self.update_index(uri, text))


lang_server = ScriptLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: ScriptLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    ls.refresh(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: ScriptLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    if params.content_changes:
        ls.refresh(params.text_document.uri, params.content_changes[-1].text)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: ScriptLanguageServer, params: DefinitionParams) -> Optional[Location]:
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(word)
    if sym is None:
        return None
    rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))
    return Location(uri=sym.uri, range=rng)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: ScriptLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: ScriptLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    result: List[DocumentSymbol] = []
    for sym in symbols:
        rng = Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=sym.kind,
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
