"""Tests for the exception hierarchy and logging setup."""

from __future__ import annotations

import logging
import sys

from fastmcp.exceptions import ToolError

from freelo_mcp.exceptions import (
    BackendError,
    ConfigurationError,
    FreeloApiError,
    FreeloMcpError,
    ToolExecutionError,
)
from freelo_mcp.logging_config import (
    RequestIdFilter,
    create_logger,
    request_id_ctx,
    setup_logging,
)


class TestExceptions:
    def test_api_error_is_backend_error(self) -> None:
        err = FreeloApiError("HTTP 500: boom", status_code=500)
        assert isinstance(err, BackendError)
        assert err.to_dict() == {
            "error": True,
            "error_type": "FreeloApiError",
            "error_code": "FREELO_API_ERROR",
            "message": "HTTP 500: boom",
            "backend_name": "freelo-api",
            "status_code": 500,
        }

    def test_tool_error_reaches_fastmcp(self) -> None:
        err = ToolExecutionError("Failed to fetch note: HTTP 404", tool_name="freelo_get_note")
        assert isinstance(err, ToolError)
        assert isinstance(err, FreeloMcpError)
        assert str(err) == "Failed to fetch note: HTTP 404"
        assert err.tool_name == "freelo_get_note"

    def test_configuration_error(self) -> None:
        err = ConfigurationError("duplicate", tool_name="freelo_x")
        assert err.to_dict()["error_code"] == "CONFIGURATION_ERROR"
        assert err.to_dict()["tool_name"] == "freelo_x"


class TestLogging:
    def test_setup_logs_to_stderr(self) -> None:
        root = setup_logging("DEBUG")
        try:
            (handler,) = root.handlers
            assert isinstance(handler, logging.StreamHandler)
            assert handler.stream is sys.stderr
            assert root.level == logging.DEBUG
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers.clear()
            root.setLevel(logging.WARNING)

    def test_request_id_filter(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        RequestIdFilter().filter(record)
        assert record.request_id == "-"

        token = request_id_ctx.set("abc123")
        try:
            record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
            RequestIdFilter().filter(record)
            assert record.request_id == "abc123"
        finally:
            request_id_ctx.reset(token)

    def test_adapter_adds_request_id(self) -> None:
        logger = create_logger("freelo_mcp.test")
        token = request_id_ctx.set("r-1")
        try:
            _, kwargs = logger.process("hello", {})
        finally:
            request_id_ctx.reset(token)
        assert kwargs["extra"] == {"request_id": "r-1"}
