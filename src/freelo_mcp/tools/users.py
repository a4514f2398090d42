"""User tools — workspace users and assignable workers."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, unwrap_collection
from .contracts import collection_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import User


async def _get_users_handler() -> InvocationResult:
    data = await call_freelo("freelo_get_users", "fetch users", "GET", "/users")
    return format_response(unwrap_collection(data, "users"))


async def _get_assignable_workers_handler(
    project_id: Annotated[
        str, Field(description='Project ID (e.g., "197352"). Get from freelo_get_projects.')
    ],
    tasklist_id: Annotated[
        str,
        Field(description='Tasklist ID (e.g., "12345"). Get from freelo_get_project_tasklists.'),
    ],
) -> InvocationResult:
    """Users that may be assigned tasks in the given tasklist."""
    data = await call_freelo(
        "freelo_get_assignable_workers",
        "fetch assignable workers",
        "GET",
        f"/project/{project_id}/tasklist/{tasklist_id}/assignable-workers",
    )
    return format_response(unwrap_collection(data, "users"))


register_tool(
    name="freelo_get_users",
    description=(
        "Fetches all users in the Freelo workspace. Returns user list with names, emails,"
        " IDs, and roles. Essential for getting user IDs before assigning tasks."
    ),
    handler=_get_users_handler,
    category="users",
    output_contract=collection_of(User),
)

register_tool(
    name="freelo_get_assignable_workers",
    description=(
        "Fetches users who can be assigned to tasks in a specific tasklist. Use before"
        " creating or assigning tasks to ensure the assignee has access."
    ),
    handler=_get_assignable_workers_handler,
    category="users",
    output_contract=collection_of(User),
)
