"""Scanning: file enumeration, loading, line counting and import extraction."""

from .enumerator import enumerate_files
from .imports import extract_imports_from_tree, is_relative_specifier
from .languages import detect_language, is_script
from .loc import LocStats, count_lines
from .source import SourceFile, load_sources
from .treesitter_parser import TreeSitterParser, walk

__all__ = [
    "enumerate_files",
    "extract_imports_from_tree",
    "is_relative_specifier",
    "detect_language",
    "is_script",
    "LocStats",
    "count_lines",
    "SourceFile",
    "load_sources",
    "TreeSitterParser",
    "walk",
]
