"""Helpers shared by the Freelo tool handlers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..exceptions import FreeloApiError, ToolExecutionError
from ..logging_config import create_logger

logger = create_logger(__name__)


async def call_freelo(
    tool_name: str,
    action: str,
    method: str,
    path: str,
    *,
    params: Mapping[str, Any] | None = None,
    json: Any = None,
) -> Any:
    """Call the Freelo API on behalf of a tool.

    Args:
        tool_name: Registered tool name, carried by the raised error.
        action: What the call does, used as "Failed to <action>".
        method: HTTP method.
        path: API path relative to the base URL.
        params: Query parameters (nested values use bracket notation).
        json: JSON request body.

    Raises:
        ToolExecutionError: When the API call fails.
    """
    from ..client import open_client

    try:
        async with open_client() as client:
            return await client.request(method, path, params=params, json=json)
    except FreeloApiError as e:
        logger.error(f"{tool_name}: failed to {action}: {e}")
        raise ToolExecutionError(f"Failed to {action}: {e}", tool_name=tool_name) from e


def unwrap_collection(data: Any, key: str) -> Any:
    """Pull rows out of a paginated ``{"data": {key: [...]}}`` envelope.

    Anything not shaped like that envelope is returned unchanged.
    """
    if isinstance(data, Mapping):
        inner = data.get("data")
        if isinstance(inner, Mapping) and isinstance(inner.get(key), list):
            return inner[key]
    return data


def dump_model(model: BaseModel | None) -> dict[str, Any]:
    """Serialize an input model, dropping unset fields."""
    if model is None:
        return {}
    return model.model_dump(exclude_none=True)
