"""Line counting: blank, comment and code lines per file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommentSyntax:
    single: str = ""
    block_start: str = ""
    block_end: str = ""


_C_STYLE = CommentSyntax("//", "/*", "*/")

COMMENT_SYNTAX: dict[str, CommentSyntax] = {
    ".js": _C_STYLE,
    ".jsx": _C_STYLE,
    ".ts": _C_STYLE,
    ".tsx": _C_STYLE,
    ".css": CommentSyntax("", "/*", "*/"),
    ".scss": _C_STYLE,
    ".html": CommentSyntax("", "<!--", "-->"),
    ".json": CommentSyntax(),
    ".md": CommentSyntax(),
    ".py": CommentSyntax("#", '"""', '"""'),
    ".yaml": CommentSyntax("#"),
    ".yml": CommentSyntax("#"),
}


@dataclass
class LocStats:
    total_lines: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0


def count_lines(content: str, extension: str) -> LocStats:
    """Classify every line of ``content`` as blank, comment or code.

    Unknown extensions use C-style comments. A line that opens a block
    comment counts as a comment line, as does every line until the block
    is closed.
    """
    syntax = COMMENT_SYNTAX.get(extension, _C_STYLE)
    lines = content.split("\n")
    stats = LocStats(total_lines=len(lines))
    in_block = False

    for raw_line in lines:
        line = raw_line.strip()

        if not line:
            stats.blank_lines += 1
            continue

        if in_block:
            stats.comment_lines += 1
            if syntax.block_end and syntax.block_end in line:
                in_block = False
            continue

        if syntax.block_start and line.startswith(syntax.block_start):
            stats.comment_lines += 1
            closed = syntax.block_end and line.find(syntax.block_end, len(syntax.block_start)) != -1
            if not closed:
                in_block = True
            continue

        if syntax.single and line.startswith(syntax.single):
            stats.comment_lines += 1
            continue

        stats.code_lines += 1

    return stats
