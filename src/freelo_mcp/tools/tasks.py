"""Task tools — listing, details, creation and lifecycle of tasks."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from .common import call_freelo, dump_model, unwrap_collection
from .contracts import collection_of, object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import PublicLink, Task, TaskData, TaskDetail, TaskFilters, TaskUpdate

TaskId = Annotated[
    str, Field(description='Task ID (e.g., "25368707"). Get from freelo_get_all_tasks.')
]
ProjectId = Annotated[str, Field(description="Project ID. Get from freelo_get_projects.")]
TasklistId = Annotated[
    str, Field(description="Tasklist ID. Get from freelo_get_project_tasklists.")
]


def task_payload(data: TaskData | TaskUpdate) -> dict[str, Any]:
    """Translate task input into the Freelo request body.

    A description is sent as the task's first comment.
    """
    payload = dump_model(data)
    description = payload.pop("description", None)
    if description:
        payload["comment"] = {"content": description}
    return payload


# ── Handlers ────────────────────────────────────────────────────────


async def _get_all_tasks_handler(
    filters: Annotated[TaskFilters | None, Field(description="Optional filters")] = None,
) -> InvocationResult:
    """Fetch tasks across all projects.

    Args:
        filters: Search, project, tasklist, label, date and worker filters plus paging.
    """
    data = await call_freelo(
        "freelo_get_all_tasks", "fetch tasks", "GET", "/all-tasks", params=dump_model(filters)
    )
    return format_response(unwrap_collection(data, "tasks"))


async def _get_task_details_handler(task_id: TaskId) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_task_details", "fetch task details", "GET", f"/task/{task_id}"
    )
    return format_response(data)


async def _get_task_description_handler(task_id: TaskId) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_task_description",
        "fetch task description",
        "GET",
        f"/task/{task_id}/description",
    )
    return format_response(data)


async def _get_finished_tasks_handler(
    tasklist_id: Annotated[
        str,
        Field(description='Tasklist ID (e.g., "12345"). Get from freelo_get_project_tasklists.'),
    ],
    search_query: Annotated[
        str | None, Field(description="Optional fulltext search to filter task names")
    ] = None,
) -> InvocationResult:
    params = {"search_query": search_query} if search_query else None
    data = await call_freelo(
        "freelo_get_finished_tasks",
        "fetch finished tasks",
        "GET",
        f"/tasklist/{tasklist_id}/finished-tasks",
        params=params,
    )
    return format_response(unwrap_collection(data, "finished_tasks"))


async def _get_public_link_handler(task_id: TaskId) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_public_link", "get public link", "GET", f"/public-link/task/{task_id}"
    )
    return format_response(data)


async def _create_task_handler(
    project_id: ProjectId,
    tasklist_id: TasklistId,
    task_data: Annotated[TaskData, Field(description="Task data")],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_create_task",
        "create task",
        "POST",
        f"/project/{project_id}/tasklist/{tasklist_id}/tasks",
        json=task_payload(task_data),
    )
    return format_response(data)


async def _create_task_from_template_handler(
    template_id: Annotated[str, Field(description="Template task ID. Get from template projects.")],
    project_id: Annotated[
        str, Field(description="Target project ID. Get from freelo_get_projects.")
    ],
    tasklist_id: Annotated[
        str, Field(description="Target tasklist ID. Get from freelo_get_project_tasklists.")
    ],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_create_task_from_template",
        "create task from template",
        "POST",
        f"/task/create-from-template/{template_id}",
        json={"project_id": project_id, "tasklist_id": tasklist_id},
    )
    return format_response(data)


async def _edit_task_handler(
    task_id: Annotated[str, Field(description="Task ID to update. Get from freelo_get_all_tasks.")],
    task_data: Annotated[
        TaskUpdate, Field(description="Task update data - only include fields to change")
    ],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_edit_task", "edit task", "POST", f"/task/{task_id}", json=task_payload(task_data)
    )
    return format_response(data)


async def _update_task_description_handler(
    task_id: TaskId,
    description: Annotated[
        str,
        Field(
            description=(
                "New description content (markdown supported). Use empty string to clear."
            )
        ),
    ],
) -> InvocationResult:
    """Replace a task's description; an empty string clears it."""
    data = await call_freelo(
        "freelo_update_task_description",
        "update task description",
        "POST",
        f"/task/{task_id}/description",
        json={"content": description},
    )
    return format_response(data)


async def _finish_task_handler(
    task_id: Annotated[
        str, Field(description="Task ID to mark as finished. Get from freelo_get_all_tasks.")
    ],
) -> InvocationResult:
    data = await call_freelo("freelo_finish_task", "finish task", "POST", f"/task/{task_id}/finish")
    return format_response(data)


async def _activate_task_handler(
    task_id: Annotated[str, Field(description="Task ID to reactivate. Must be a finished task.")],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_activate_task", "activate task", "POST", f"/task/{task_id}/activate"
    )
    return format_response(data)


# ── Read tools ──────────────────────────────────────────────────────

register_tool(
    name="freelo_get_all_tasks",
    description=(
        "Fetches all tasks across all projects with filtering. Supports search,"
        " project/tasklist filter, label filter, date ranges, worker assignment,"
        " and pagination."
    ),
    handler=_get_all_tasks_handler,
    category="tasks",
    output_contract=collection_of(Task),
)

register_tool(
    name="freelo_get_task_details",
    description=(
        "Fetches complete details about a specific task including name, description,"
        " assignees, due date, priority, status, labels, and metadata."
        " Use after finding tasks with freelo_get_all_tasks."
    ),
    handler=_get_task_details_handler,
    category="tasks",
    output_contract=object_of(TaskDetail),
)

register_tool(
    name="freelo_get_task_description",
    description=(
        "Fetches only the description content of a task. More lightweight than"
        " freelo_get_task_details when you only need the description text."
    ),
    handler=_get_task_description_handler,
    category="tasks",
    output_contract=object_of(TaskDetail),
)

register_tool(
    name="freelo_get_finished_tasks",
    description=(
        "Fetches completed/finished tasks from a specific tasklist. For finished tasks"
        " across all projects, use freelo_get_all_tasks with state_id=2."
    ),
    handler=_get_finished_tasks_handler,
    category="tasks",
    output_contract=collection_of(Task),
)

register_tool(
    name="freelo_get_public_link",
    description=(
        "Generates or retrieves a public sharing link for a task. Anyone with this link"
        " can view task details without logging in."
    ),
    handler=_get_public_link_handler,
    category="tasks",
    output_contract=object_of(PublicLink),
)

# ── Edit tools ──────────────────────────────────────────────────────

register_tool(
    name="freelo_create_task",
    description="Creates a new task in a specific tasklist. Task is created in active state.",
    handler=_create_task_handler,
    category="tasks",
    output_contract=object_of(Task),
)

register_tool(
    name="freelo_create_task_from_template",
    description=(
        "Creates a new task based on an existing template task. The new task inherits"
        " the template's name, description, and structure."
    ),
    handler=_create_task_from_template_handler,
    category="tasks",
    output_contract=object_of(Task),
)

register_tool(
    name="freelo_edit_task",
    description=(
        "Updates an existing task. Can modify name, assignment, due date, or priority."
        " For description updates, use freelo_update_task_description."
    ),
    handler=_edit_task_handler,
    category="tasks",
    output_contract=object_of(Task),
)

register_tool(
    name="freelo_update_task_description",
    description=(
        "Updates only the description of a task. Supports plain text or markdown."
        " Previous description is replaced completely."
    ),
    handler=_update_task_description_handler,
    category="tasks",
    output_contract=object_of(TaskDetail),
)

register_tool(
    name="freelo_finish_task",
    description=(
        "Marks a task as finished/completed. Task is moved to finished state, preserving"
        " all data. Can be reactivated with freelo_activate_task."
    ),
    handler=_finish_task_handler,
    category="tasks",
    output_contract=object_of(Task),
)

register_tool(
    name="freelo_activate_task",
    description=(
        "Reactivates a finished task, moving it back to active state. Use when a"
        " completed task needs to be reopened."
    ),
    handler=_activate_task_handler,
    category="tasks",
    output_contract=object_of(Task),
)
