"""Import extraction from JavaScript/TypeScript syntax trees.

Recognized shapes, reported in source order with duplicates kept:

    import x from "a"            import "a"
    export { y } from "b"        export * from "c"
    require("d")                 import("e")

``require``/``import()`` calls whose first argument is not a plain string
literal cannot be resolved statically and are ignored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .treesitter_parser import node_text, walk

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

_IMPORT_NODE_TYPES = ("import_statement", "export_statement", "call_expression")


def is_relative_specifier(specifier: str) -> bool:
    """Relative specifiers start with '.' or '/'; everything else is a package."""
    return specifier.startswith(".") or specifier.startswith("/")


def string_literal_value(node: Optional[Node]) -> Optional[str]:
    """Value of a ``string`` node without its quotes, else None."""
    if node is None or node.type != "string":
        return None
    text = node_text(node)
    if len(text) < 2:
        return None
    return text[1:-1]


def _first_argument(call: Node) -> Optional[Node]:
    args = call.child_by_field_name("arguments")
    # Tagged templates put a template_string in the arguments slot
    if args is None or args.type != "arguments":
        return None
    named = args.named_children
    return named[0] if named else None


def extract_imports_from_tree(tree: Tree) -> list[str]:
    """Collect raw specifiers from an already-parsed tree."""
    specifiers: list[str] = []

    for node in walk(tree, _IMPORT_NODE_TYPES):
        if node.type in ("import_statement", "export_statement"):
            value = string_literal_value(node.child_by_field_name("source"))
            if value is not None:
                specifiers.append(value)
            continue

        callee = node.child_by_field_name("function")
        if callee is None:
            continue
        is_require = callee.type == "identifier" and node_text(callee) == "require"
        is_dynamic_import = callee.type == "import"
        if not (is_require or is_dynamic_import):
            continue

        value = string_literal_value(_first_argument(node))
        if value is not None:
            specifiers.append(value)

    return specifiers
