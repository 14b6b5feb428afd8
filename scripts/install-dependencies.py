#!/usr/bin/env python3
"""
Install MCP server dependencies from the directory this script lives in.

Copy this script next to the server's package.json and run it with no
arguments. The project directory is resolved from the script's own
location, so it can be run from anywhere.
"""
from pathlib import Path

import click

from mcp_installer.cli import run


@click.command()
@click.option("--check-only", is_flag=True, help="Only check that the runtimes are installed")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
def install_dependencies(check_only, verbose):
    """Install dependencies for the MCP server next to this script."""
    run(check_only=check_only, verbose=verbose, anchor=Path(__file__))


if __name__ == "__main__":
    install_dependencies()
