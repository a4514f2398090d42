"""Exception hierarchy for the Freelo MCP server.

Configuration defects are fatal at startup, remote-call failures surface
to the tool caller with context, and audit failures never leave the
audit logger.
"""

from __future__ import annotations

from typing import Any

from fastmcp.exceptions import ToolError


class FreeloMcpError(Exception):
    """Base exception for all Freelo MCP errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class ConfigurationError(FreeloMcpError):
    """Raised for tool configuration defects (duplicate names, overlapping sets)."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, tool_name: str | None = None, **kwargs: Any):
        super().__init__(message, "CONFIGURATION_ERROR", tool_name=tool_name, **kwargs)


class BackendError(FreeloMcpError):
    """Raised when a backend operation fails."""

    error_code = "BACKEND_ERROR"

    def __init__(self, message: str, backend_name: str | None = None, **kwargs: Any):
        super().__init__(message, "BACKEND_ERROR", backend_name=backend_name, **kwargs)


class FreeloApiError(BackendError):
    """Raised when the Freelo API returns an error or is unreachable."""

    error_code = "FREELO_API_ERROR"

    def __init__(self, message: str, status_code: int | None = None, **kwargs: Any):
        super().__init__(message, "freelo-api", status_code=status_code, **kwargs)
        self.error_code = "FREELO_API_ERROR"


class ToolExecutionError(FreeloMcpError, ToolError):
    """Raised when a tool execution fails.

    Subclasses FastMCP's ``ToolError`` so the message reaches the caller verbatim.
    """

    error_code = "TOOL_EXECUTION_ERROR"

    def __init__(self, message: str, tool_name: str | None = None, **kwargs: Any):
        super().__init__(message, "TOOL_EXECUTION_ERROR", tool_name=tool_name, **kwargs)


__all__ = [
    "FreeloMcpError",
    "ConfigurationError",
    "BackendError",
    "FreeloApiError",
    "ToolExecutionError",
]
