"""Time tracking tools — a single running timer per user.

Starting and stopping the timer are not idempotent.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo
from .contracts import object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import WorkReport

_NOT_IDEMPOTENT = {"idempotentHint": False}


async def _start_time_tracking_handler(
    task_id: Annotated[
        str | None,
        Field(
            description=(
                "Optional task ID to track time for."
                " If not provided, tracks general work time."
            )
        ),
    ] = None,
) -> InvocationResult:
    params = {"task_id": task_id} if task_id else None
    data = await call_freelo(
        "freelo_start_time_tracking",
        "start time tracking",
        "POST",
        "/timetracking/start",
        params=params,
    )
    return format_response(data)


async def _stop_time_tracking_handler() -> InvocationResult:
    """Stop the running timer; Freelo turns the elapsed time into a work report."""
    data = await call_freelo(
        "freelo_stop_time_tracking", "stop time tracking", "POST", "/timetracking/stop"
    )
    return format_response(data)


register_tool(
    name="freelo_start_time_tracking",
    description=(
        "Starts real-time time tracking for a task. Creates an active timer that runs"
        " until stopped with freelo_stop_time_tracking."
    ),
    handler=_start_time_tracking_handler,
    category="time_tracking",
    output_contract=object_of(WorkReport),
    annotations=_NOT_IDEMPOTENT,
)

register_tool(
    name="freelo_stop_time_tracking",
    description=(
        "Stops the currently active time tracking session. Calculates elapsed time and"
        " automatically creates a work report."
    ),
    handler=_stop_time_tracking_handler,
    category="time_tracking",
    output_contract=object_of(WorkReport),
    annotations=_NOT_IDEMPOTENT,
)
