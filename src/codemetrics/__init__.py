"""codemetrics: code metrics for a local codebase, served over MCP."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("codemetrics-mcp")
except PackageNotFoundError:
    __version__ = "unknown"


_CLI_COMMANDS = {"serve", "analyze", "docs"}


def main() -> None:
    """Entry point: run MCP server by default, CLI if subcommand given."""
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "--version":
        print(f"codemetrics {__version__}")
        return

    from codemetrics.cli import cli_main

    if len(sys.argv) > 1 and (sys.argv[1] in _CLI_COMMANDS or sys.argv[1] in ("--help", "-h")):
        cli_main()
    else:
        cli_main(["serve", *sys.argv[1:]])
