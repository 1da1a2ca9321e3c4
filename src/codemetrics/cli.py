"""codemetrics CLI: thin wrapper over the tools and the stdio server."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from codemetrics.config import load_config
from codemetrics.errors import CodemetricsError


def setup_logging() -> None:
    """Log to stderr; stdout is reserved for protocol traffic.

    CODEMETRICS_LOG_LEVEL=DEBUG to enable debug output.
    """
    log_level = os.environ.get("CODEMETRICS_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codemetrics",
        description="Line counts, complexity and directory statistics over MCP",
    )
    sub = parser.add_subparsers(dest="command")

    serve_p = sub.add_parser("serve", help="Run the MCP server on stdio (default)")
    serve_p.add_argument("--root", default=None, help="Project root (default: cwd)")

    analyze_p = sub.add_parser("analyze", help="Analyze a file or directory")
    analyze_p.add_argument("path", help="File or directory, relative to the root or absolute")
    analyze_p.add_argument("--root", default=None, help="Project root (default: cwd)")

    docs_p = sub.add_parser("docs", help="Generate project documentation")
    docs_p.add_argument("project_name", help="Project name used in the title")
    docs_p.add_argument("--format", choices=["markdown", "json"], default="markdown")
    docs_p.add_argument("--root", default=None, help="Project root (default: cwd)")

    return parser


def cli_main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    setup_logging()
    args = build_parser().parse_args(argv)

    if args.command in (None, "serve"):
        from codemetrics.server import serve

        serve(getattr(args, "root", None))
        return

    config = load_config(args.root)
    try:
        if args.command == "analyze":
            from codemetrics.tools.analyze_path import analyze_path

            output = asyncio.run(analyze_path(args.path, config.root))
        else:
            from codemetrics.tools.generate_documentation import generate_documentation

            output = asyncio.run(generate_documentation(args.project_name, config, args.format))
    except CodemetricsError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        return

    print(output)
