"""Tests for line classification."""

from moduly.scanning.loc import count_lines


class TestCountLines:
    def test_js_line_kinds(self):
        content = "// header\nconst a = 1;\n\n/* block\n   still block */\nconst b = 2;"
        stats = count_lines(content, ".js")
        assert stats.total_lines == 6
        assert stats.code_lines == 2
        assert stats.comment_lines == 3
        assert stats.blank_lines == 1

    def test_trailing_newline_counts_as_blank_line(self):
        stats = count_lines("a();\n", ".ts")
        assert stats.total_lines == 2
        assert stats.blank_lines == 1

    def test_single_line_block_comment(self):
        stats = count_lines("/* one-liner */\nx();", ".ts")
        assert stats.comment_lines == 1
        assert stats.code_lines == 1

    def test_jsdoc_block(self):
        content = "/**\n * Docs\n */\nexport function f() {}"
        stats = count_lines(content, ".ts")
        assert stats.comment_lines == 3
        assert stats.code_lines == 1

    def test_python_hash_comments(self):
        stats = count_lines("# comment\nx = 1", ".py")
        assert stats.comment_lines == 1
        assert stats.code_lines == 1

    def test_html_comments(self):
        stats = count_lines("<!-- nav -->\n<div></div>", ".html")
        assert stats.comment_lines == 1
        assert stats.code_lines == 1

    def test_json_has_no_comments(self):
        stats = count_lines('{\n  "//": "not a comment"\n}', ".json")
        assert stats.comment_lines == 0
        assert stats.code_lines == 3

    def test_css_has_no_line_comments(self):
        stats = count_lines("// not a comment in css\na { color: red; }", ".css")
        assert stats.comment_lines == 0

    def test_empty_content(self):
        stats = count_lines("", ".js")
        assert stats.total_lines == 1
        assert stats.blank_lines == 1
        assert stats.code_lines == 0
