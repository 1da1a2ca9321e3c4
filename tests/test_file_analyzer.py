"""Tests for single-file analysis."""

from __future__ import annotations

from pathlib import Path

import pytest

from codemetrics.analysis.file_analyzer import analyze_file, analyze_text
from codemetrics.errors import FileUnreadableError
from tests.helpers.factories import write_file

TEN_LINES = "\n".join([
    "function check(a, b) {",
    "  if (a) {",
    "    run();",
    "  }",
    "  if (b && a) {",
    "    stop();",
    "  }",
    "  return 1;",
    "}",
    "// end",
]) + "\n"


def test_ten_line_file_with_two_ifs_and_one_and(tmp_path: Path) -> None:
    target = write_file(tmp_path / "check.ts", TEN_LINES)

    analysis = analyze_file(str(target))

    assert analysis.path == str(target)
    assert analysis.language_tag == "typescript"
    assert analysis.line_count == 10
    assert analysis.code_line_count == 9
    assert analysis.character_count == len(TEN_LINES)
    assert analysis.complexity_score == 4
    assert analysis.complexity_level == "low"


def test_critical_file(tmp_path: Path) -> None:
    target = write_file(tmp_path / "branchy.py", "x = a and b\n" + "if (x): pass\n" * 25)
    analysis = analyze_file(str(target))
    assert analysis.complexity_score == 26
    assert analysis.complexity_level == "critical"


def test_missing_file_raises_unreadable(tmp_path: Path) -> None:
    with pytest.raises(FileUnreadableError) as excinfo:
        analyze_file(str(tmp_path / "nope.py"))
    assert excinfo.value.path == str(tmp_path / "nope.py")


def test_directory_is_not_a_regular_file(tmp_path: Path) -> None:
    with pytest.raises(FileUnreadableError, match="not a regular file"):
        analyze_file(str(tmp_path))


def test_read_failure_raises_unreadable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = write_file(tmp_path / "locked.ts", "x\n")

    def deny(path: str) -> str:
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr("codemetrics.analysis.file_analyzer.read_text", deny)
    with pytest.raises(FileUnreadableError, match="Permission denied"):
        analyze_file(str(target))


def test_analyze_text_wire_format() -> None:
    wire = analyze_text("/repo/a.js", "while (true) {}\n").to_wire()
    assert wire["path"] == "/repo/a.js"
    assert wire["languageTag"] == "javascript"
    assert wire["complexityScore"] == 2
    assert wire["complexityLevel"] == "low"
    assert set(wire) == {
        "path",
        "languageTag",
        "lineCount",
        "codeLineCount",
        "characterCount",
        "complexityScore",
        "complexityLevel",
        "analyzedAt",
    }
