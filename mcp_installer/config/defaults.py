"""
Default settings for the MCP server installer.

These mirror the values the installer uses when no configuration file is
present in the project directory.
"""

from typing import Any, Dict, List

CONFIG_FILENAMES = ["mcp-installer.yaml", "mcp-installer.yml"]

PROJECT_DIR_ENV = "MCP_INSTALLER_PROJECT_DIR"

NODE_RUNTIME: Dict[str, Any] = {
    "name": "node",
    "display_name": "Node.js",
    "version_args": ["--version"],
    "install_url": "https://nodejs.org/",
    "install_hint": "Please install Node.js (v18+):",
    "min_version": "18",
    "version_prefix": "v",
}

NPM_PACKAGE_MANAGER: Dict[str, Any] = {
    "name": "npm",
    "display_name": "npm",
    "version_args": ["--version"],
    "install_url": "https://docs.npmjs.com/downloading-and-installing-node-js-and-npm",
    "install_hint": "npm ships with Node.js; reinstall Node.js or install npm separately:",
    "version_prefix": "v",
}

DEFAULT_NEXT_STEPS: List[str] = [
    "Add MCP config to Claude Desktop",
    "Restart Claude Desktop",
    "Verify toolkit functions are available",
]

DEFAULT_DOCS_HINT = "See MCP_SETUP_INSTRUCTIONS.md for details"

DEFAULT_SMOKE_TIMEOUT_MS = 5000
