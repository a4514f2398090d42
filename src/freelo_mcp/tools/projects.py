"""Project tools — owned and shared projects, details and workers."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, unwrap_collection
from .contracts import collection_of, object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import Project, ProjectDetail

ProjectId = Annotated[
    str, Field(description='Project ID (e.g., "197352"). Get from freelo_get_projects.')
]


async def _get_projects_handler() -> InvocationResult:
    """List projects owned by the current user."""
    data = await call_freelo("freelo_get_projects", "fetch projects", "GET", "/projects")
    return format_response(data)


async def _get_all_projects_handler() -> InvocationResult:
    """List every project the user can access, owned or shared."""
    data = await call_freelo("freelo_get_all_projects", "fetch all projects", "GET", "/all-projects")
    return format_response(unwrap_collection(data, "projects"))


async def _get_project_details_handler(project_id: ProjectId) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_project_details", "fetch project details", "GET", f"/project/{project_id}"
    )
    return format_response(data)


async def _get_project_workers_handler(project_id: ProjectId) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_project_workers",
        "fetch project workers",
        "GET",
        f"/project/{project_id}/workers",
    )
    return format_response(data)


register_tool(
    name="freelo_get_projects",
    description=(
        "Fetches your own active projects in Freelo. Returns only projects that you own."
        " For all accessible projects, use freelo_get_all_projects."
    ),
    handler=_get_projects_handler,
    category="projects",
    output_contract=collection_of(Project),
)

register_tool(
    name="freelo_get_all_projects",
    description="Fetches all projects in Freelo - both owned and shared. Supports pagination.",
    handler=_get_all_projects_handler,
    category="projects",
    output_contract=collection_of(Project),
)

register_tool(
    name="freelo_get_project_details",
    description=(
        "Fetches detailed information about a specific project including workers,"
        " tasklists, and settings."
    ),
    handler=_get_project_details_handler,
    category="projects",
    output_contract=object_of(ProjectDetail),
)

register_tool(
    name="freelo_get_project_workers",
    description="Fetches all workers (team members) assigned to a specific project.",
    handler=_get_project_workers_handler,
    category="projects",
)
