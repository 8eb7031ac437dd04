"""Shared test fixtures for Moduly tests."""

import json
import os
from pathlib import Path

import pytest

from moduly.scanning.treesitter_parser import TreeSitterParser


class ProjectBuilder:
    """Writes a throwaway JS/TS project under a temporary directory."""

    def __init__(self, root: Path):
        self.root = root

    def file(self, rel_path: str, content: str = "") -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def manifest(self, dependencies=None, dev_dependencies=None, name="demo") -> Path:
        data = {
            "name": name,
            "dependencies": dependencies or {},
            "devDependencies": dev_dependencies or {},
        }
        return self.file("package.json", json.dumps(data, indent=2))


@pytest.fixture
def project(tmp_path):
    """Empty project directory with helpers to populate it."""
    root = tmp_path / "demo-app"
    root.mkdir()
    return ProjectBuilder(root)


@pytest.fixture(scope="session")
def parser():
    """Shared tree-sitter parser."""
    return TreeSitterParser()


@pytest.fixture
def moduly_home(tmp_path, monkeypatch):
    """Redirect persisted settings into a temporary directory."""
    home = tmp_path / "moduly-home"
    monkeypatch.setenv("MODULY_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Keep user/project TOML files and MODULY_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("MODULY_"):
            monkeypatch.delenv(key, raising=False)
    fake_home = tmp_path / "fake-home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.chdir(tmp_path)
