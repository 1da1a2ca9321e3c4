"""analyze_path tool: metrics for a file or a whole directory."""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from pathlib import Path

from codemetrics.analysis.file_analyzer import analyze_file
from codemetrics.errors import FileUnreadableError, InvalidPathError
from codemetrics.report import render_directory_report, render_file_analysis
from codemetrics.scanner.scanner import scan_tree

logger = logging.getLogger(__name__)


def resolve_path(raw: str, root: Path) -> str:
    """Resolve *raw* against *root* unless it is already absolute.

    Raises InvalidPathError for strings that cannot name a filesystem path.
    Existence is not checked here.
    """
    if not raw or not raw.strip() or "\x00" in raw:
        raise InvalidPathError(raw)
    try:
        candidate = Path(raw)
        if not candidate.is_absolute():
            candidate = root / candidate
        return os.path.normpath(candidate)
    except (ValueError, RuntimeError) as exc:
        raise InvalidPathError(raw) from exc


async def analyze_path(path: str, root: Path) -> str:
    """Analyze a file or directory (recursively) for metrics.

    Directories produce a DirectoryReport, regular files a FileAnalysis;
    both are returned as JSON text. The target's kind is checked at call time.
    """
    full_path = resolve_path(path, root)

    try:
        st = await asyncio.to_thread(os.stat, full_path)
    except OSError as exc:
        raise FileUnreadableError(full_path, exc.strerror or str(exc)) from exc

    if stat.S_ISDIR(st.st_mode):
        logger.info("Analyzing directory %s", full_path)
        report = await asyncio.to_thread(scan_tree, full_path)
        return render_directory_report(report)

    if not stat.S_ISREG(st.st_mode):
        raise FileUnreadableError(full_path, "not a regular file")

    logger.info("Analyzing file %s", full_path)
    analysis = await asyncio.to_thread(analyze_file, full_path)
    return render_file_analysis(analysis)
