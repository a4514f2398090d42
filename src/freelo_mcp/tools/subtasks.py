"""Subtask tools."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, unwrap_collection
from .contracts import collection_of, object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import Subtask, SubtaskData
from .tasks import task_payload

ParentTaskId = Annotated[
    str, Field(description='Parent task ID (e.g., "25368707"). Get from freelo_get_all_tasks.')
]


async def _get_subtasks_handler(task_id: ParentTaskId) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_subtasks", "fetch subtasks", "GET", f"/task/{task_id}/subtasks"
    )
    return format_response(unwrap_collection(data, "subtasks"))


async def _create_subtask_handler(
    task_id: ParentTaskId,
    subtask_data: Annotated[SubtaskData, Field(description="Subtask data")],
) -> InvocationResult:
    """Create a subtask; its description becomes the first comment."""
    data = await call_freelo(
        "freelo_create_subtask",
        "create subtask",
        "POST",
        f"/task/{task_id}/subtasks",
        json=task_payload(subtask_data),
    )
    return format_response(data)


register_tool(
    name="freelo_get_subtasks",
    description=(
        "Fetches all subtasks belonging to a parent task. Returns subtasks with their"
        " names, statuses, and assignments."
    ),
    handler=_get_subtasks_handler,
    category="subtasks",
    output_contract=collection_of(Subtask),
)

register_tool(
    name="freelo_create_subtask",
    description=(
        "Creates a subtask under an existing task. Subtasks help break down complex"
        " tasks into smaller pieces."
    ),
    handler=_create_subtask_handler,
    category="subtasks",
    output_contract=object_of(Subtask),
)
