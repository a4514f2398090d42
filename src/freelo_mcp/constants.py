"""Global constants for the Freelo MCP server."""

from . import __version__

SERVER_NAME = "freelo-mcp"
"""Name advertised to MCP clients."""

TOOL_PREFIX = "freelo_"
"""Prefix carried by every registered tool name."""

FREELO_API_URL = "https://api.freelo.io/v1"
"""Base URL of the Freelo REST API."""

DEFAULT_USER_AGENT = f"freelo-mcp/{__version__}"
"""User-Agent sent to Freelo and to the audit webhook unless overridden."""

DEFAULT_TIMEOUT = 30.0
"""HTTP timeout for Freelo API requests in seconds."""

DEFAULT_AUDIT_LOG = "./audit.jsonl"
"""Default JSONL destination for audit entries."""

WEBHOOK_TIMEOUT = 10.0
"""HTTP timeout for audit webhook notifications in seconds."""

READONLY_FLAGS = ("--readonly", "-r")
"""Command-line switches that force restricted mode."""
