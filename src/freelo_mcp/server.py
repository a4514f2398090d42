"""Freelo MCP Server — entry point."""

from __future__ import annotations

from dotenv import load_dotenv
from fastmcp import FastMCP

from . import __version__
from .audit import AuditLogger, get_audit_logger
from .config import Settings, get_settings
from .constants import SERVER_NAME
from .logging_config import create_logger, setup_logging
from .mode import Mode, get_mode
from .tools import (
    TOOL_REGISTRY,
    get_enabled_tools,
    is_tool_enabled,
    register_tool_with_metadata,
    validate_classification,
)

logger = create_logger(__name__)

_INSTRUCTIONS = "MCP Server for Freelo API - readonly mode, audit logging, reduced toolset."
_READONLY_INSTRUCTIONS = (
    " Running in READONLY mode: only tools that read data are available."
)


def create_server(
    mode: Mode | None = None,
    audit: AuditLogger | None = None,
    settings: Settings | None = None,
) -> FastMCP:
    """Create and configure the Freelo MCP server.

    Args:
        mode: Which tool families to expose. Defaults to the process mode.
        audit: Audit logger for every tool call. Defaults to the shared logger.
        settings: Process settings. Defaults to the environment.
    """
    mode = mode or get_mode()
    settings = settings or get_settings()
    audit = audit or get_audit_logger()

    validate_classification()

    if not settings.credentials.complete:
        logger.warning(
            "FREELO_EMAIL or FREELO_API_KEY not set. Tools will fail without credentials."
        )

    instructions = _INSTRUCTIONS + (_READONLY_INSTRUCTIONS if mode.readonly else "")
    mcp = FastMCP(SERVER_NAME, instructions=instructions, version=__version__)

    logger.info(f"{SERVER_NAME} v{__version__} starting...")
    logger.info(
        f"Mode: {'READONLY' if mode.readonly else 'FULL'} ({len(get_enabled_tools(mode))} tools)"
    )
    if audit.enabled:
        logger.info(f"Audit: enabled ({audit.config.log_path})")
    else:
        logger.info("Audit: disabled")

    for spec in TOOL_REGISTRY.values():
        if not is_tool_enabled(spec.operation, mode):
            continue
        register_tool_with_metadata(
            mcp,
            spec.name,
            spec.description,
            spec.handler,
            output_contract=spec.output_contract,
            annotations=spec.annotations,
            audit=audit,
        )

    logger.info("Server ready")
    return mcp


def main() -> None:
    """CLI entry point."""
    load_dotenv()
    setup_logging(get_settings().log_level)
    server = create_server(get_mode())
    server.run()


if __name__ == "__main__":
    main()
