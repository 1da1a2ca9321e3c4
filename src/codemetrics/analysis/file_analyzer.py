"""Analyze a single file: line counts and complexity."""

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime, timezone

from codemetrics.analysis.complexity import (
    complexity_level,
    count_code_lines,
    count_lines,
    estimate,
)
from codemetrics.analysis.types import FileAnalysis
from codemetrics.errors import FileUnreadableError
from codemetrics.scanner.classifier import classify
from codemetrics.scanner.scanner import read_text

logger = logging.getLogger(__name__)


def analyze_text(path: str, text: str) -> FileAnalysis:
    """Build a FileAnalysis from text already in memory."""
    language = classify(path)
    score = estimate(text)
    return FileAnalysis(
        path=path,
        language_tag=language,
        line_count=count_lines(text),
        code_line_count=count_code_lines(text, language),
        character_count=len(text),
        complexity_score=score,
        complexity_level=complexity_level(score),
        analyzed_at=datetime.now(timezone.utc),
    )


def analyze_file(path: str) -> FileAnalysis:
    """Read *path* in full and compute its metrics.

    Raises FileUnreadableError if the file is missing, not a regular file,
    or cannot be read.
    """
    try:
        st = os.stat(path)
        if not stat.S_ISREG(st.st_mode):
            raise FileUnreadableError(path, "not a regular file")
        text = read_text(path)
    except OSError as exc:
        logger.warning("Could not read file %s: %s", path, exc)
        raise FileUnreadableError(path, exc.strerror or str(exc)) from exc

    return analyze_text(path, text)
