"""Types for single-file analysis."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from codemetrics.analysis.complexity import ComplexityLevel
from codemetrics.scanner.types import LanguageTag, WireModel


class FileAnalysis(WireModel):
    """Metrics for one file."""

    path: str
    language_tag: LanguageTag
    line_count: int = Field(ge=0)
    code_line_count: int = Field(ge=0)
    character_count: int = Field(ge=0)
    complexity_score: int = Field(ge=1)
    complexity_level: ComplexityLevel
    analyzed_at: datetime
