"""Search tools — fulltext search and saved custom filters."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, dump_model, unwrap_collection
from .contracts import collection_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import SearchData, Task


async def _search_elasticsearch_handler(
    search_data: Annotated[SearchData, Field(description="Search data with query and filters")],
) -> InvocationResult:
    """Search tasks, subtasks, projects, tasklists, files and comments.

    Args:
        search_data: Query text plus optional id, state and entity filters.
    """
    data = await call_freelo(
        "freelo_search_elasticsearch", "search", "POST", "/search", json=dump_model(search_data)
    )
    return format_response(data)


async def _get_tasks_by_filter_uuid_handler(
    uuid: Annotated[str, Field(description="UUID of the custom filter")],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_tasks_by_filter_uuid",
        "fetch tasks by filter",
        "GET",
        f"/dashboard/custom-filter/by-uuid/{uuid}/tasks",
    )
    return format_response(unwrap_collection(data, "tasks"))


register_tool(
    name="freelo_search_elasticsearch",
    description=(
        "Performs full-text search across Freelo using Elasticsearch. Searches tasks,"
        " subtasks, projects, tasklists, files, and comments."
    ),
    handler=_search_elasticsearch_handler,
    category="search",
    output_contract=collection_of(),
)

register_tool(
    name="freelo_get_tasks_by_filter_uuid",
    description=(
        "Fetches tasks using a custom filter UUID. Custom filters are pre-configured"
        " task searches with multiple criteria."
    ),
    handler=_get_tasks_by_filter_uuid_handler,
    category="search",
    output_contract=collection_of(Task),
)
