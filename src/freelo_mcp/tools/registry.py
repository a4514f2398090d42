"""Tool registry — the catalogue of Freelo tools and their installation.

Domain modules declare their tools with ``register_tool`` at import time.
``server.create_server`` decides which of them to expose and installs each
one with ``register_tool_with_metadata``, which attaches annotations and
the output schema and routes every call through the audit logger.
"""

from __future__ import annotations

import inspect
import typing
import weakref
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import ToolAnnotations
from pydantic_core import to_jsonable_python

from ..audit import AuditLogger, get_audit_logger
from ..constants import TOOL_PREFIX
from ..exceptions import ConfigurationError, ToolExecutionError
from ..logging_config import create_logger
from .annotations import get_annotations, get_tool_title, merge_annotations
from .contracts import OutputContract
from .normalize import InvocationResult, coerce_result, normalize_result, to_tool_result

logger = create_logger(__name__)

Handler = Callable[..., Any]
AnnotationOverrides = ToolAnnotations | Mapping[str, Any] | None

# ── Catalogue ───────────────────────────────────────────────────────


@dataclass
class ToolSpec:
    """Declarative specification for a single Freelo tool."""

    name: str
    description: str
    handler: Handler
    category: str = "general"
    output_contract: OutputContract | None = None
    annotations: AnnotationOverrides = None

    @property
    def operation(self) -> str:
        """Operation name without the ``freelo_`` prefix."""
        return self.name.removeprefix(TOOL_PREFIX)


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    description: str,
    handler: Handler,
    *,
    category: str = "general",
    output_contract: OutputContract | None = None,
    annotations: AnnotationOverrides = None,
) -> None:
    """Register a tool in the global catalogue."""
    if name in TOOL_REGISTRY:
        raise ConfigurationError(f"Tool {name!r} is declared twice", tool_name=name)
    TOOL_REGISTRY[name] = ToolSpec(
        name=name,
        description=description,
        handler=handler,
        category=category,
        output_contract=output_contract,
        annotations=annotations,
    )


def get_categories() -> dict[str, list[ToolSpec]]:
    """Return tools grouped by category."""
    categories: dict[str, list[ToolSpec]] = {}
    for tool in TOOL_REGISTRY.values():
        categories.setdefault(tool.category, []).append(tool)
    return categories


# ── Installation ────────────────────────────────────────────────────


@dataclass(frozen=True)
class RegisteredTool:
    """A tool as installed on a server."""

    name: str
    title: str
    description: str
    annotations: ToolAnnotations
    output_contract: OutputContract | None
    handler: Handler


# Names installed per server instance.
_installed: weakref.WeakKeyDictionary[FastMCP, set[str]] = weakref.WeakKeyDictionary()


def _forwarded_signature(handler: Handler) -> tuple[inspect.Signature, dict[str, Any]]:
    """The handler's signature with every annotation resolved to a real type."""
    hints = typing.get_type_hints(handler, include_extras=True)
    signature = inspect.signature(handler)
    params = [
        param.replace(annotation=hints.get(param.name, param.annotation))
        for param in signature.parameters.values()
    ]
    annotations = {p.name: p.annotation for p in params if p.annotation is not p.empty}
    return signature.replace(parameters=params, return_annotation=signature.empty), annotations


def _call_wrapper(
    name: str,
    handler: Handler,
    output_contract: OutputContract | None,
    audit: AuditLogger | None,
) -> Callable[..., Awaitable[ToolResult]]:
    signature, annotations = _forwarded_signature(handler)

    async def tool_fn(*args: Any, **kwargs: Any) -> ToolResult:
        bound = signature.bind(*args, **kwargs)
        params = to_jsonable_python(bound.arguments, fallback=str)

        async def invoke() -> InvocationResult:
            raw = handler(*bound.args, **bound.kwargs)
            if inspect.isawaitable(raw):
                raw = await raw
            result = coerce_result(raw)
            if result.is_error:
                raise ToolExecutionError(result.text or f"Tool {name} failed", tool_name=name)
            return result

        audit_logger = audit if audit is not None else get_audit_logger()
        result = await audit_logger.with_logging(name, params, invoke)
        return to_tool_result(normalize_result(result, output_contract))

    tool_fn.__name__ = name
    tool_fn.__qualname__ = name
    tool_fn.__doc__ = handler.__doc__
    tool_fn.__signature__ = signature  # type: ignore[attr-defined]
    tool_fn.__annotations__ = annotations
    return tool_fn


def register_tool_with_metadata(
    server: FastMCP,
    name: str,
    description: str,
    handler: Handler,
    *,
    output_contract: OutputContract | None = None,
    annotations: AnnotationOverrides = None,
    title: str | None = None,
    audit: AuditLogger | None = None,
) -> RegisteredTool:
    """Install ``handler`` on ``server`` as an annotated, audited tool.

    The input schema comes from the handler's annotated signature. The
    output schema comes from ``output_contract``. Each call writes one
    audit entry, and its result is normalized to the contract after the
    entry is written.

    Args:
        server: FastMCP server to install on.
        name: Registered tool name, e.g. ``freelo_get_projects``.
        description: Tool description shown to clients.
        handler: Sync or async callable implementing the tool.
        output_contract: Declared shape of the structured output.
        annotations: Overrides merged key by key over the derived annotations.
        title: Human-readable title. Derived from ``name`` when omitted.
        audit: Audit logger. The process-wide logger when omitted.

    Raises:
        ConfigurationError: If ``name`` is empty or already installed on ``server``.
    """
    if not name:
        raise ConfigurationError("Tool name must not be empty")
    names = _installed.setdefault(server, set())
    if name in names:
        raise ConfigurationError(f"Tool {name!r} is already registered", tool_name=name)

    tool_annotations = merge_annotations(get_annotations(name), annotations)
    tool_title = title or get_tool_title(name)
    tool_fn = _call_wrapper(name, handler, output_contract, audit)

    server.tool(
        tool_fn,
        name=name,
        title=tool_title,
        description=description,
        annotations=tool_annotations,
        output_schema=output_contract.json_schema() if output_contract else None,
    )
    names.add(name)
    logger.debug(f"Registered tool {name}")

    return RegisteredTool(
        name=name,
        title=tool_title,
        description=description,
        annotations=tool_annotations,
        output_contract=output_contract,
        handler=tool_fn,
    )


def register_tool_legacy(
    server: FastMCP,
    name: str,
    description: str,
    handler: Handler,
) -> RegisteredTool:
    """Older registration entry point; same behavior without contract or overrides."""
    return register_tool_with_metadata(server, name, description, handler)
