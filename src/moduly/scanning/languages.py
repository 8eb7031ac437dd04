"""Extension to grammar mapping for the JavaScript/TypeScript family."""

from pathlib import PurePosixPath
from typing import Optional

# Extensions the tree-sitter grammars understand. Plain JavaScript files may
# contain JSX, so .js and .jsx share the javascript grammar.
EXTENSION_GRAMMARS: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

SCRIPT_EXTENSIONS = frozenset(EXTENSION_GRAMMARS)


def extension_of(path: str) -> str:
    """Return the lowercase-preserving suffix of a relative POSIX path ('' if none)."""
    return PurePosixPath(path).suffix


def detect_language(path: str) -> Optional[str]:
    """Return the grammar name for a path, or None for non-script files."""
    return EXTENSION_GRAMMARS.get(extension_of(path))


def is_script(path: str) -> bool:
    return extension_of(path) in SCRIPT_EXTENSIONS
