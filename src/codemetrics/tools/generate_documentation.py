"""generate_documentation tool: project documentation from a fresh scan."""

from __future__ import annotations

import asyncio
from typing import Literal

from codemetrics.config import CodemetricsConfig
from codemetrics.report import render_documentation_json, render_markdown
from codemetrics.scanner.scanner import scan_tree


async def generate_documentation(
    project_name: str,
    config: CodemetricsConfig,
    format: Literal["markdown", "json"] = "markdown",
) -> str:
    """Scan the configured root and render Markdown docs or a JSON envelope."""
    report = await asyncio.to_thread(scan_tree, config.root)
    if format == "json":
        return render_documentation_json(project_name, report)
    return render_markdown(project_name, report, config.tree_listing_limit)
