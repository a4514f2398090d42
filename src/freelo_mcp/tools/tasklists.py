"""Tasklist tools."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, unwrap_collection
from .contracts import collection_of, object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import Tasklist


async def _get_project_tasklists_handler(
    project_id: Annotated[
        str, Field(description='Project ID (e.g., "197352"). Get from freelo_get_projects.')
    ],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_project_tasklists",
        "fetch tasklists",
        "GET",
        "/all-tasklists",
        params={"projects_ids": [project_id]},
    )
    return format_response(unwrap_collection(data, "tasklists"))


async def _get_tasklist_details_handler(
    tasklist_id: Annotated[
        str,
        Field(description='Tasklist ID (e.g., "12345"). Get from freelo_get_project_tasklists.'),
    ],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_tasklist_details", "fetch tasklist details", "GET", f"/tasklist/{tasklist_id}"
    )
    return format_response(data)


register_tool(
    name="freelo_get_project_tasklists",
    description=(
        "Fetches all tasklists within a project. Tasklists organize tasks into logical"
        ' groups (e.g., "To Do", "In Progress", "Done"). Use after freelo_get_projects'
        " to drill down into project structure."
    ),
    handler=_get_project_tasklists_handler,
    category="tasklists",
    output_contract=collection_of(Tasklist),
)

register_tool(
    name="freelo_get_tasklist_details",
    description=(
        "Fetches detailed information about a specific tasklist including name,"
        " description, color, workers, and settings."
    ),
    handler=_get_tasklist_details_handler,
    category="tasklists",
    output_contract=object_of(Tasklist),
)
