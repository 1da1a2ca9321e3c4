"""Shared pytest fixtures for codemetrics tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from codemetrics.config import CodemetricsConfig
from codemetrics.router import Router
from tests.helpers.factories import write_file as write


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A small project: 4 counted files (9 lines) plus excluded noise."""
    root = tmp_path / "sample"
    write(root / "src" / "app.ts", "if (ready) {\n  start();\n}\n")
    write(root / "src" / "util.py", "def double(x):\n    return x * 2\n")
    write(root / "src" / "nested" / "data.json", '{"a": 1}\n')
    write(root / "README.md", "# Sample\n\nHello")
    # Excluded by the ignore globs or the hidden-entry policy
    write(root / ".git" / "HEAD", "ref: refs/heads/main\n")
    write(root / "node_modules" / "dep" / "index.js", "module.exports = 1;\n")
    write(root / "dist" / "bundle.js", "bundle();\n")
    write(root / "build" / "out.txt", "out\n")
    write(root / "server.log", "started\n")
    write(root / ".env", "SECRET=1\n")
    return root.resolve()


@pytest.fixture
def config(sample_project: Path) -> CodemetricsConfig:
    return CodemetricsConfig(root=sample_project)


@pytest.fixture
def router(config: CodemetricsConfig) -> Router:
    return Router(config)
