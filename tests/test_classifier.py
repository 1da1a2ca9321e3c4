"""Tests for extension-based language classification."""

from pathlib import Path

import pytest

from codemetrics.scanner import classify


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("app.ts", "typescript"),
        ("App.TS", "typescript"),
        ("component.tsx", "typescript"),
        ("types.d.ts", "typescript"),
        ("index.js", "javascript"),
        ("package.json", "json"),
        ("README.md", "markdown"),
        ("ci.yml", "yaml"),
        ("ci.YAML", "yaml"),
        ("index.html", "html"),
        ("site.css", "css"),
        ("main.py", "python"),
        ("MAIN.PY", "python"),
        ("Main.java", "java"),
        ("engine.cc", "cpp"),
        ("engine.cxx", "cpp"),
    ],
)
def test_known_extensions(path: str, expected: str) -> None:
    assert classify(path) == expected


@pytest.mark.parametrize("path", ["Makefile", "LICENSE", ".bashrc", "archive.tar.gz", "notes.txt"])
def test_unknown_or_missing_extension_is_other(path: str) -> None:
    assert classify(path) == "other"


def test_uses_only_the_final_component() -> None:
    assert classify("/repo/some.dir/Dockerfile") == "other"
    assert classify(Path("/repo/src.py/module.ts")) == "typescript"
