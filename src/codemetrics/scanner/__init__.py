"""Filesystem scanning: classification, per-entry records and tree reports."""

from codemetrics.scanner.types import DirectoryReport, FileRecord, LanguageTag
from codemetrics.scanner.classifier import classify
from codemetrics.scanner.scanner import IGNORE_GLOBS, is_ignored, read_text, scan_tree, stat_entry

__all__ = [
    "IGNORE_GLOBS",
    "DirectoryReport",
    "FileRecord",
    "LanguageTag",
    "classify",
    "is_ignored",
    "read_text",
    "scan_tree",
    "stat_entry",
]
