"""State tools."""

from __future__ import annotations

from .common import call_freelo, unwrap_collection
from .contracts import collection_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import State


async def _get_all_states_handler() -> InvocationResult:
    data = await call_freelo("freelo_get_all_states", "fetch states", "GET", "/states")
    return format_response(unwrap_collection(data, "states"))


register_tool(
    name="freelo_get_all_states",
    description=(
        "Fetches all available task states in Freelo. States represent task lifecycle"
        " (1=active, 2=finished). Essential for state_id filters."
    ),
    handler=_get_all_states_handler,
    category="states",
    output_contract=collection_of(State),
)
