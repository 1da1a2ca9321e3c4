"""Render scan and analysis results into the payloads handed to clients."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone

from codemetrics.analysis.types import FileAnalysis
from codemetrics.scanner.types import DirectoryReport, FileRecord


def render_directory_report(report: DirectoryReport) -> str:
    return report.to_json()


def render_file_analysis(analysis: FileAnalysis) -> str:
    return analysis.to_json()


def render_documentation_json(project_name: str, report: DirectoryReport) -> str:
    """JSON envelope: ``{project, structure, generatedAt}``."""
    envelope = {
        "project": project_name,
        "structure": report.to_wire(),
        "generatedAt": datetime.now(timezone.utc).isoformat(),
    }
    return json.dumps(envelope, indent=2)


def render_markdown(project_name: str, report: DirectoryReport, tree_limit: int = 20) -> str:
    """Fixed-section Markdown document describing a scanned project."""
    generated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    sections = [
        f"# {project_name} Documentation",
        "",
        "## Project Overview",
        "",
        f"- **Total Files:** {report.total_file_count}",
        f"- **Total Lines:** {report.total_line_count}",
        f"- **Languages:** {', '.join(report.language_histogram)}",
        "",
        "## File Structure",
        "",
        _file_tree(report.root_path, report.files, tree_limit),
        "",
        "## Language Distribution",
        "",
        _language_distribution(report.language_histogram),
        "",
        "---",
        f"*Documentation generated on {generated}*",
    ]
    return "\n".join(sections)


def render_review_prompt(report: DirectoryReport) -> str:
    return (
        "Review this codebase:\n"
        f"- Files: {report.total_file_count}\n"
        f"- Lines: {report.total_line_count}\n"
        f"- Languages: {', '.join(report.language_histogram)}"
    )


def _file_tree(root: str, files: list[FileRecord], limit: int) -> str:
    tree = ["```"]
    for record in files[:limit]:
        relative = os.path.relpath(record.path, root).replace(os.sep, "/")
        tree.append(f"├── ./{relative}")
    hidden = len(files) - limit
    if hidden > 0:
        tree.append(f"└── ... and {hidden} more files")
    tree.append("```")
    return "\n".join(tree)


def _language_distribution(histogram: dict[str, int]) -> str:
    entries = sorted(histogram.items(), key=lambda item: (-item[1], item[0]))
    return "\n".join(f"- **{language}:** {count} files" for language, count in entries)
