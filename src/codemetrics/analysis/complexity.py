"""Text-level metrics: line counts and a token-count cyclomatic complexity.

The complexity score is a textual heuristic, not a parse-based metric. Every
decision token is counted wherever it appears, including inside string
literals and comments, so a file that talks about ``if (`` in its docs scores
higher than it should. ``else if (`` is counted twice: once as a branch
chain and once as a plain ``if (``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from codemetrics.scanner.types import LanguageTag

ComplexityLevel = Literal["low", "medium", "high", "critical"]

DECISION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bif\s*\("),
    re.compile(r"\belse\s+if\s*\("),
    re.compile(r"\bwhile\s*\("),
    re.compile(r"\bfor\s*\("),
    re.compile(r"\bcase\s+"),
    re.compile(r"\bcatch\s*\("),
    re.compile(r"&&"),
    re.compile(r"\|\|"),
    re.compile(r"\?"),
)

# (upper bound inclusive, level); anything above the last bound is critical.
_LEVEL_BOUNDS: tuple[tuple[int, ComplexityLevel], ...] = (
    (5, "low"),
    (10, "medium"),
    (20, "high"),
)

_C_STYLE_PREFIXES = ("//", "/*", "*")

COMMENT_PREFIXES: dict[LanguageTag, tuple[str, ...]] = {
    "typescript": _C_STYLE_PREFIXES,
    "javascript": _C_STYLE_PREFIXES,
    "java": _C_STYLE_PREFIXES,
    "cpp": _C_STYLE_PREFIXES,
    "python": ("#",),
    "html": ("<!--",),
    "css": ("/*", "*"),
}


def estimate(text: str) -> int:
    """Return 1 plus the number of decision-point tokens found in *text*."""
    score = 1
    for pattern in DECISION_PATTERNS:
        score += len(pattern.findall(text))
    return score


def complexity_level(score: int) -> ComplexityLevel:
    """Band a complexity score: <=5 low, <=10 medium, <=20 high, else critical."""
    for bound, level in _LEVEL_BOUNDS:
        if score <= bound:
            return level
    return "critical"


def count_lines(text: str) -> int:
    """Count line terminators, plus a trailing line that has none."""
    if not text:
        return 0
    lines = text.count("\n")
    if not text.endswith("\n"):
        lines += 1
    return lines


def count_code_lines(text: str, language: LanguageTag) -> int:
    """Count non-blank lines that do not start with a comment prefix."""
    prefixes = COMMENT_PREFIXES.get(language, ())
    count = 0
    # "\n" only, as count_lines counts; never more code lines than lines.
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if prefixes and stripped.startswith(prefixes):
            continue
        count += 1
    return count
