"""Map file extensions to language tags."""

from __future__ import annotations

import os

from codemetrics.scanner.types import LanguageTag

_LANGUAGE_BY_SUFFIX: dict[str, LanguageTag] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".json": "json",
    ".md": "markdown",
    ".markdown": "markdown",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
}


def classify(path: str | os.PathLike[str]) -> LanguageTag:
    """Return the language tag for *path*, judged by extension alone."""
    suffix = os.path.splitext(os.fspath(path))[1].lower()
    return _LANGUAGE_BY_SUFFIX.get(suffix, "other")
