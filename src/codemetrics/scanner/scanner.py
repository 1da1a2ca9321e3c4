"""Recursive directory scan producing file records and aggregate totals."""

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime, timezone
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator

from codemetrics.analysis.complexity import count_lines
from codemetrics.errors import ScanError
from codemetrics.scanner.classifier import classify
from codemetrics.scanner.types import DirectoryReport, FileRecord

logger = logging.getLogger(__name__)

IGNORE_GLOBS: tuple[str, ...] = (
    "**/.git/**",
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.next/**",
    "**/*.log",
)


def is_ignored(rel_path: str) -> bool:
    """Return True when a root-relative POSIX path is excluded from scans.

    Dot-prefixed segments are always excluded. ``**/<name>/**`` globs exclude
    any path with a matching segment (the directory itself included);
    ``**/<glob>`` globs are matched against the last segment.
    """
    parts = [p for p in rel_path.split("/") if p]
    if any(part.startswith(".") for part in parts):
        return True

    for pattern in IGNORE_GLOBS:
        segment = pattern.removeprefix("**/")
        if segment.endswith("/**"):
            segment = segment.removesuffix("/**")
            if any(fnmatchcase(part, segment) for part in parts):
                return True
        elif parts and fnmatchcase(parts[-1], segment):
            return True
    return False


def read_text(path: str) -> str:
    """Read a file as UTF-8, replacing undecodable bytes."""
    with open(path, encoding="utf-8", errors="replace", newline="") as handle:
        return handle.read()


def stat_entry(path: str) -> FileRecord:
    """Stat one filesystem entry and build its record.

    Directories get their sorted child listing. Regular files are read to
    count lines; other file kinds get a line count of zero. Raises OSError
    when the entry cannot be stat'ed, listed or read.
    """
    st = os.stat(path)
    is_directory = stat.S_ISDIR(st.st_mode)

    line_count: int | None = None
    children: list[str] | None = None
    if is_directory:
        children = sorted(os.path.join(path, name) for name in os.listdir(path))
    elif stat.S_ISREG(st.st_mode):
        line_count = count_lines(read_text(path))
    else:
        line_count = 0

    name = os.path.basename(path)
    return FileRecord(
        path=path,
        name=name,
        extension=os.path.splitext(name)[1],
        language_tag=classify(path),
        size_bytes=st.st_size,
        last_modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        line_count=line_count,
        is_directory=is_directory,
        children=children,
    )


def scan_tree(root: str | os.PathLike[str]) -> DirectoryReport:
    """Scan *root* recursively and aggregate per-file metrics.

    Only a missing or unreadable root is fatal. Nested entries that fail to
    stat, list or read are logged and skipped. No caching: every call is a fresh scan.
    """
    root_path = Path(root).expanduser().resolve()
    root_str = str(root_path)

    try:
        root_record = stat_entry(root_str)
    except OSError as exc:
        raise ScanError(root_str, exc.strerror or str(exc)) from exc
    if not root_record.is_directory:
        raise ScanError(root_str, "not a directory")

    logger.info("Scanning project structure at %s", root_str)

    files: list[FileRecord] = []
    directory_paths: list[str] = []
    # Depth-first, pre-order; an explicit stack keeps deep trees off the call stack.
    stack: list[tuple[str, Iterator[str]]] = [("", iter(root_record.children or []))]
    while stack:
        rel_dir, pending = stack[-1]
        child = next(pending, None)
        if child is None:
            stack.pop()
            continue

        name = os.path.basename(child)
        rel_path = f"{rel_dir}/{name}" if rel_dir else name
        if is_ignored(rel_path):
            continue

        try:
            record = stat_entry(child)
        except OSError as exc:
            logger.warning("Skipping %s: %s", child, exc)
            continue

        if not record.is_directory:
            files.append(record)
            continue

        directory_paths.append(child)
        if os.path.islink(child):
            logger.debug("Not following symlinked directory %s", child)
            continue
        stack.append((rel_path, iter(record.children or [])))

    return DirectoryReport.from_scan(root_str, files, directory_paths)
