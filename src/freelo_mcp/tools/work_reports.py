"""Work report tools — time entries for billing and reporting."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, dump_model, unwrap_collection
from .contracts import collection_of, object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import WorkReport, WorkReportData, WorkReportFilters, WorkReportUpdate


async def _get_work_reports_handler(
    filters: Annotated[WorkReportFilters | None, Field(description="Optional filters")] = None,
) -> InvocationResult:
    """Fetch work reports.

    Args:
        filters: Project, user, label and reported-date filters.
    """
    data = await call_freelo(
        "freelo_get_work_reports",
        "fetch work reports",
        "GET",
        "/work-reports",
        params=dump_model(filters),
    )
    return format_response(unwrap_collection(data, "reports"))


async def _create_work_report_handler(
    task_id: Annotated[str, Field(description="Task ID. Get from freelo_get_all_tasks.")],
    report_data: Annotated[WorkReportData, Field(description="Work report data")],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_create_work_report",
        "create work report",
        "POST",
        f"/task/{task_id}/work-reports",
        json=dump_model(report_data),
    )
    return format_response(data)


async def _update_work_report_handler(
    work_report_id: Annotated[
        str, Field(description="Work report ID. Get from freelo_get_work_reports.")
    ],
    report_data: Annotated[
        WorkReportUpdate, Field(description="Updated data - only include fields to change")
    ],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_update_work_report",
        "update work report",
        "POST",
        f"/work-reports/{work_report_id}",
        json=dump_model(report_data),
    )
    return format_response(data)


register_tool(
    name="freelo_get_work_reports",
    description=(
        "Fetches work reports (time entries) with filtering. Essential for billing,"
        " productivity analysis, and project reporting."
    ),
    handler=_get_work_reports_handler,
    category="work_reports",
    output_contract=collection_of(WorkReport),
)

register_tool(
    name="freelo_create_work_report",
    description=(
        "Creates a new work report (time entry) for a task. Use after completing work"
        " for timesheet entry."
    ),
    handler=_create_work_report_handler,
    category="work_reports",
    output_contract=object_of(WorkReport),
)

register_tool(
    name="freelo_update_work_report",
    description=(
        "Updates an existing work report. Use to correct time entries or add descriptions."
    ),
    handler=_update_work_report_handler,
    category="work_reports",
    output_contract=object_of(WorkReport),
)
