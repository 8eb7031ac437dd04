"""Tests for project file enumeration and loading."""

import pytest

from moduly.config import AnalysisConfig
from moduly.exceptions import InvalidPathError
from moduly.scanning.enumerator import enumerate_files
from moduly.scanning.source import SourceFile, load_source, load_sources


def _enumerate(root):
    config = AnalysisConfig()
    return enumerate_files(root, config.extensions, config.exclude_dirs, config.exclude_files)


class TestEnumerateFiles:
    def test_sorted_relative_posix_paths(self, project):
        project.file("src/b.ts")
        project.file("src/a.ts")
        project.file("src/lib/c.js")
        project.file("index.js")
        assert _enumerate(project.root) == ["index.js", "src/a.ts", "src/b.ts", "src/lib/c.js"]

    def test_excluded_directories_are_not_entered(self, project):
        project.file("node_modules/react/index.js")
        project.file("dist/bundle.js")
        project.file(".git/hooks/pre-commit.js")
        project.file(".moduly/report.json")
        project.file("src/app.ts")
        assert _enumerate(project.root) == ["src/app.ts"]

    def test_hidden_files_and_directories_skipped(self, project):
        project.file(".eslintrc.js", "module.exports = {};\n")
        project.file(".prettierrc.json", "{}")
        project.file(".github/workflows/ci.yml", "token: abcdefghijklmnop\n")
        project.file(".vscode/settings.json", "{}")
        project.file("src/a.ts")
        assert _enumerate(project.root) == ["src/a.ts"]

    def test_lockfiles_and_unknown_extensions_skipped(self, project):
        project.file("package-lock.json", "{}")
        project.file("yarn.lock")
        project.file("logo.png")
        project.file("package.json", "{}")
        assert _enumerate(project.root) == ["package.json"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            _enumerate(tmp_path / "nope")

    def test_root_is_a_file(self, project):
        path = project.file("a.js")
        with pytest.raises(InvalidPathError):
            _enumerate(path)


class TestLoadSources:
    def test_preserves_order_and_reads_text(self, project):
        project.file("a.ts", "export const a = 1;\n")
        project.file("b.ts", "export const b = 2;\n")
        sources = load_sources(project.root, ["b.ts", "a.ts"], workers=2)
        assert [s.path for s in sources] == ["b.ts", "a.ts"]
        assert sources[1].text == "export const a = 1;\n"
        assert sources[1].size == len("export const a = 1;\n")

    def test_unreadable_file_keeps_its_slot(self, project):
        """A vanished file is returned with no text instead of failing the run."""
        source = load_source(project.root, "gone.ts")
        assert source == SourceFile(path="gone.ts")
        assert not source.readable

    def test_invalid_utf8_is_replaced(self, project):
        (project.root / "bin.js").write_bytes(b"const x = '\xff';\n")
        source = load_source(project.root, "bin.js")
        assert source.readable
        assert "�" in source.text

    def test_extension(self):
        assert SourceFile(path="src/App.test.tsx").extension == ".tsx"
        assert SourceFile(path="Makefile").extension == ""
