"""
Command-line interface for the MCP server dependency installer.

Checks the Node.js runtime and npm, installs the project's dependencies
and smoke tests the server.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import __version__
from .config import resolve_project_dir
from .logging_setup import configure_logging
from .orchestrator import Orchestrator
from .output import Reporter

console = Console(soft_wrap=True)


@click.command()
@click.version_option(version=__version__, prog_name="mcp-installer")
@click.option(
    "--project-dir",
    "-d",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory containing package.json (default: current directory)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Installer configuration file (default: mcp-installer.yaml in the project)",
)
@click.option("--check-only", is_flag=True, help="Only check that the runtimes are installed")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
def main(
    project_dir: Optional[str],
    config_path: Optional[str],
    check_only: bool,
    verbose: bool,
):
    """
    Install MCP server dependencies.

    Verifies Node.js and npm, runs 'npm install' in the project directory
    and smoke tests the server with 'node server.js --test'.
    """
    run(project_dir=project_dir, config_path=config_path, check_only=check_only, verbose=verbose)


def run(
    project_dir: Optional[str] = None,
    config_path: Optional[str] = None,
    check_only: bool = False,
    verbose: bool = False,
    anchor: Optional[Path] = None,
) -> None:
    """
    Resolve the project directory and hand control to the Orchestrator.

    Args:
        project_dir: Explicit project directory
        config_path: Explicit configuration file
        check_only: Only run the runtime checks
        verbose: Enable debug logging
        anchor: File whose directory is the default project directory
    """
    configure_logging(verbose)

    directory = resolve_project_dir(project_dir, anchor=anchor)
    reporter = Reporter(console)

    orchestrator = Orchestrator(
        project_dir=directory,
        config_path=config_path,
        reporter=reporter,
    )
    orchestrator.main(check_only=check_only)


if __name__ == "__main__":
    main()
