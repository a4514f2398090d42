"""Result normalization — make tool output match its declared contract.

Handlers return API data; the wrapper coerces it into an
``InvocationResult`` and, after the audit entry is written, normalizes it
against the tool's ``OutputContract``. Normalization substitutes values
and never raises.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from .contracts import ITEMS_KEY, ContractKind, OutputContract


@dataclass(frozen=True)
class InvocationResult:
    """Outcome of one handler invocation, before protocol conversion."""

    content: list[dict[str, Any]] = field(default_factory=list)
    structured_content: Any = None
    is_error: bool = False

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(
            str(block.get("text", "")) for block in self.content if block.get("type") == "text"
        )


def text_block(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


def format_response(data: Any) -> InvocationResult:
    """Wrap API data as compact JSON text plus the data as structured content."""
    return InvocationResult(
        content=[text_block(json.dumps(data, ensure_ascii=False, default=str))],
        structured_content=data,
    )


def coerce_result(raw: Any) -> InvocationResult:
    """Turn whatever a handler returned into an ``InvocationResult``.

    Accepts an ``InvocationResult`` as-is, a legacy MCP envelope dict
    (``content``/``structuredContent``/``isError``), or a bare payload,
    which becomes structured content with no text.
    """
    if isinstance(raw, InvocationResult):
        return raw
    if isinstance(raw, Mapping) and isinstance(raw.get("content"), list) and (
        "structuredContent" in raw or "isError" in raw
    ):
        return InvocationResult(
            content=[dict(block) for block in raw["content"] if isinstance(block, Mapping)],
            structured_content=raw.get("structuredContent"),
            is_error=bool(raw.get("isError", False)),
        )
    return InvocationResult(structured_content=raw)


def _as_collection(payload: Any) -> dict[str, Any]:
    if isinstance(payload, list):
        return {ITEMS_KEY: payload}
    if isinstance(payload, Mapping):
        if isinstance(payload.get(ITEMS_KEY), list):
            return dict(payload)
        if isinstance(payload.get("data"), list):
            return {ITEMS_KEY: payload["data"]}
    return {ITEMS_KEY: []}


def normalize_result(
    result: InvocationResult | None,
    output_contract: OutputContract | None,
) -> InvocationResult | None:
    """Return a copy of ``result`` shaped to ``output_contract``.

    Collections become ``{"items": [...]}``: a bare list is wrapped, an
    ``items`` list is kept, a ``data`` list is moved to ``items``, and
    anything else becomes an empty list. Objects that are not mappings
    (an empty response body, say) become ``{}``. When there is structured content
    but no content blocks, one pretty-printed JSON text block is added.
    Normalizing an already normalized result changes nothing.
    """
    if result is None or output_contract is None or result.is_error:
        return result

    structured = result.structured_content
    match output_contract.kind:
        case ContractKind.COLLECTION:
            structured = _as_collection(structured)
        case ContractKind.OBJECT:
            structured = dict(structured) if isinstance(structured, Mapping) else {}

    content = result.content
    if not content and structured is not None:
        content = [text_block(json.dumps(structured, indent=2, ensure_ascii=False, default=str))]

    return replace(result, content=list(content), structured_content=structured)


def to_tool_result(result: InvocationResult) -> ToolResult:
    """Convert to FastMCP's result type at the protocol boundary."""
    blocks = [
        TextContent(type="text", text=str(block.get("text", "")))
        for block in result.content
        if block.get("type") == "text"
    ]
    structured = result.structured_content
    if isinstance(structured, dict):
        return ToolResult(content=blocks, structured_content=structured)
    return ToolResult(content=blocks)
