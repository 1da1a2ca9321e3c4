"""Entry point for `python -m codemetrics`.

Usage:
  python -m codemetrics [--root PATH]                    → Start MCP server
  python -m codemetrics analyze <path> [--root PATH]     → Metrics for a file or directory
  python -m codemetrics docs <name> [--format json]      → Project documentation
"""

from codemetrics import main

if __name__ == "__main__":
    main()
