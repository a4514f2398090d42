"""Freelo MCP Server — Freelo project management API exposed as MCP tools."""

__version__ = "1.0.0"
