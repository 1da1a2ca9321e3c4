"""Types for filesystem scanning."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Coarse classification by extension. "other" is the unclassified tag.
LanguageTag = Literal[
    "typescript",
    "javascript",
    "json",
    "markdown",
    "yaml",
    "html",
    "css",
    "python",
    "java",
    "cpp",
    "other",
]


class WireModel(BaseModel):
    """Frozen model serialised with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Unset optional fields are dropped so kind-specific keys only appear
    # where they apply (lineCount on files, children on directories).
    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class FileRecord(WireModel):
    """A single filesystem entry."""

    path: str
    name: str
    extension: str
    language_tag: LanguageTag
    size_bytes: int = Field(ge=0)
    last_modified: datetime
    line_count: int | None = Field(default=None, ge=0)
    is_directory: bool = False
    children: list[str] | None = None

    @model_validator(mode="after")
    def _check_kind_fields(self) -> FileRecord:
        if self.is_directory:
            if self.line_count is not None:
                raise ValueError("directories carry no line count")
            if self.children is None:
                raise ValueError("directories must list their children")
        else:
            if self.line_count is None:
                raise ValueError("files must carry a line count")
            if self.children is not None:
                raise ValueError("files have no children")
        return self


class DirectoryReport(WireModel):
    """Aggregate over one directory scan."""

    root_path: str
    total_file_count: int = Field(ge=0)
    total_line_count: int = Field(ge=0)
    language_histogram: dict[str, int]
    directory_paths: list[str]
    files: list[FileRecord]
    generated_at: datetime

    @model_validator(mode="after")
    def _check_totals(self) -> DirectoryReport:
        if self.total_file_count != len(self.files):
            raise ValueError("total_file_count must equal the number of files")
        if self.total_line_count != sum(f.line_count or 0 for f in self.files):
            raise ValueError("total_line_count must equal the summed line counts")
        if any(f.is_directory for f in self.files):
            raise ValueError("directories are reported in directory_paths, not files")
        return self

    @classmethod
    def from_scan(
        cls,
        root_path: str,
        files: list[FileRecord],
        directory_paths: list[str],
    ) -> DirectoryReport:
        """Fold totals and the language histogram over the scanned files."""
        histogram: dict[str, int] = {}
        total_lines = 0
        for record in files:
            histogram[record.language_tag] = histogram.get(record.language_tag, 0) + 1
            total_lines += record.line_count or 0

        return cls(
            root_path=root_path,
            total_file_count=len(files),
            total_line_count=total_lines,
            language_histogram=histogram,
            directory_paths=directory_paths,
            files=files,
            generated_at=datetime.now(timezone.utc),
        )
