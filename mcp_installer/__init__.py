"""
MCP Server Dependency Installer

Verifies the Node.js toolchain, installs an MCP server's npm dependencies
and smoke tests the server.
"""

__version__ = "1.0.0"
