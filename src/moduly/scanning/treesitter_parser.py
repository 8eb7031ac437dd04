"""Tree-sitter parser wrapper.

Provides a unified parse/walk interface over the JavaScript, TypeScript and
TSX grammars. The rest of the package only depends on two operations:

    tree = parser.parse(code_bytes, "typescript")   # raises ParsingError
    for node in walk(tree, {"call_expression"}):
        ...

tree-sitter parsers are not thread-safe, so each thread lazily gets its own
parser objects while the compiled Language objects are shared.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Optional

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..exceptions import ParsingError
from ..logging_config import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from tree_sitter import Node, Tree


_GRAMMAR_FACTORIES = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_languages: dict[str, Any] = {}
_languages_lock = threading.Lock()


def get_supported_languages() -> list[str]:
    """Get list of grammar names this parser can handle."""
    return list(_GRAMMAR_FACTORIES)


def _get_language(name: str) -> Any:
    with _languages_lock:
        lang = _languages.get(name)
        if lang is None:
            # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
            lang = tree_sitter.Language(_GRAMMAR_FACTORIES[name]())
            _languages[name] = lang
        return lang


class TreeSitterParser:
    """Per-thread tree-sitter parsers for the JS/TS grammar family."""

    def __init__(self) -> None:
        self._local = threading.local()

    def _parser_for(self, language: str) -> Any:
        parsers: Optional[dict[str, Any]] = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers

        parser = parsers.get(language)
        if parser is None:
            parser = tree_sitter.Parser(_get_language(language))
            parsers[language] = parser
        return parser

    def is_language_supported(self, language: Optional[str]) -> bool:
        return language in _GRAMMAR_FACTORIES

    def parse(self, code: bytes, language: Optional[str], path: str = "<memory>") -> Tree:
        """Parse code and return a syntax tree.

        Malformed input still yields a (partial) tree; tree-sitter marks the
        broken regions with ERROR nodes and the walkers simply skip them.

        Args:
            code: Source code as bytes
            language: Grammar name ("javascript", "typescript", "tsx")
            path: File path, only used in error details

        Raises:
            ParsingError: If the language is unsupported or parsing fails
        """
        if not self.is_language_supported(language):
            raise ParsingError(path, str(language), "unsupported language")

        try:
            tree = self._parser_for(language).parse(code)  # type: ignore[arg-type]
        except (ValueError, TypeError, RuntimeError) as e:
            raise ParsingError(path, str(language), str(e))

        if tree is None:
            raise ParsingError(path, str(language), "parser returned no tree")
        return tree

    def parse_text(self, text: str, language: Optional[str], path: str = "<memory>") -> Tree:
        """Parse a str, encoding it as UTF-8 first."""
        try:
            code = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParsingError(path, str(language), f"encoding error: {e}")
        return self.parse(code, language, path)


def walk(tree: Tree, kinds: Optional[Iterable[str]] = None) -> Iterator[Node]:
    """Yield nodes in depth-first pre-order, optionally filtered by node type.

    Pre-order matches source order, so callers that collect results from
    the walk get them in the order they appear in the file.
    """
    wanted = frozenset(kinds) if kinds is not None else None
    cursor = tree.walk()
    visited_children = False

    while True:
        if not visited_children:
            node = cursor.node
            if node is not None and (wanted is None or node.type in wanted):
                yield node
            if not cursor.goto_first_child():
                visited_children = True
        elif cursor.goto_next_sibling():
            visited_children = False
        elif not cursor.goto_parent():
            break


def node_text(node: Optional[Node]) -> str:
    """Decoded source text of a node ('' for None)."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def node_line(node: Node) -> int:
    """1-based line number of a node's start."""
    return node.start_point[0] + 1
