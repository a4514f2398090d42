"""Pydantic models for Freelo payloads.

Response models describe the advertised output schemas. They are
deliberately permissive (every field optional, extra fields allowed)
because the remote API owns the payload. Input models describe nested
tool arguments.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Id = int | str

# ── Responses ───────────────────────────────────────────────────────


class FreeloModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class User(FreeloModel):
    id: Id | None = None
    fullname: str | None = None
    email: str | None = None


class State(FreeloModel):
    id: Id | None = None
    name: str | None = None


class Project(FreeloModel):
    id: Id | None = None
    name: str | None = None
    date_add: str | None = None
    date_edited_at: str | None = None
    owner: dict[str, Any] | None = None
    state: dict[str, Any] | None = None
    currency_iso: str | None = None


class ProjectDetail(Project):
    tasklists: list[dict[str, Any]] | None = None
    workers: list[dict[str, Any]] | None = None


class Tasklist(FreeloModel):
    id: Id | None = None
    name: str | None = None
    project: dict[str, Any] | None = None
    budget: dict[str, Any] | None = None


class Task(FreeloModel):
    id: Id | None = None
    name: str | None = None
    due_date: str | None = None
    due_date_end: str | None = None
    priority_enum: Id | None = None
    count_comments: int | None = None
    count_subtasks: int | None = None
    worker: dict[str, Any] | None = None
    project: dict[str, Any] | None = None
    tasklist: dict[str, Any] | None = None
    state: dict[str, Any] | None = None
    labels: list[dict[str, Any]] | None = None


class TaskDetail(Task):
    content: str | None = None
    comments: list[dict[str, Any]] | None = None
    subtasks: list[dict[str, Any]] | None = None


class Subtask(FreeloModel):
    id: Id | None = None
    task_id: Id | None = None
    name: str | None = None
    due_date: str | None = None
    worker: dict[str, Any] | None = None
    state: dict[str, Any] | None = None


class Comment(FreeloModel):
    id: Id | None = None
    content: str | None = None
    date_add: str | None = None
    author: dict[str, Any] | None = None
    parent: dict[str, Any] | None = None


class Note(FreeloModel):
    id: Id | None = None
    name: str | None = None
    content: str | None = None
    date_add: str | None = None
    project: dict[str, Any] | None = None


class WorkReport(FreeloModel):
    id: Id | None = None
    date_reported: str | None = None
    minutes: int | None = None
    cost: dict[str, Any] | None = None
    note: str | None = None
    task: dict[str, Any] | None = None
    author: dict[str, Any] | None = None


class PublicLink(FreeloModel):
    url: str | None = None


# ── Inputs ──────────────────────────────────────────────────────────


class DateRange(BaseModel):
    date_from: str = Field(description="Start date YYYY-MM-DD")
    date_to: str = Field(description="End date YYYY-MM-DD")


class TaskFilters(BaseModel):
    search_query: str | None = Field(default=None, description="Fulltext search in task names")
    state_id: int | None = Field(default=None, description="Task state: 1=active, 2=finished")
    projects_ids: list[int] | None = Field(default=None, description="Filter by project IDs")
    tasklists_ids: list[int] | None = Field(default=None, description="Filter by tasklist IDs")
    order_by: Literal["priority", "name", "date_add", "date_edited_at"] | None = Field(
        default=None, description="Sort field"
    )
    order: Literal["asc", "desc"] | None = Field(default=None, description="Sort direction")
    with_label: str | None = Field(default=None, description="Include only tasks with this label")
    without_label: str | None = Field(default=None, description="Exclude tasks with this label")
    no_due_date: bool | None = Field(default=None, description="Only tasks without due date")
    due_date_range: DateRange | None = Field(default=None, description="Filter by due date range")
    worker_id: int | None = Field(default=None, description="Filter by assigned worker ID")
    p: int | None = Field(default=None, description="Page number (starts at 0)")


class CommentFilters(BaseModel):
    projects_ids: list[int] | None = Field(default=None, description="Filter by project IDs")
    type: Literal["all", "task", "document", "file", "link"] | None = Field(
        default=None, description="Comment type filter"
    )
    order_by: Literal["date_add", "date_edited_at"] | None = Field(
        default=None, description="Sort field"
    )
    order: Literal["asc", "desc"] | None = Field(default=None, description="Sort direction")
    p: int | None = Field(default=None, description="Page number (starts at 0)")


class WorkReportFilters(BaseModel):
    projects_ids: list[str] | None = Field(default=None, description="Filter by project IDs")
    users_ids: list[str] | None = Field(default=None, description="Filter by user IDs")
    tasks_labels: list[str] | None = Field(default=None, description="Filter by task labels")
    date_reported_range: DateRange | None = Field(
        default=None, description="Filter by date range"
    )


class SearchData(BaseModel):
    search_query: str = Field(description="Search query text")
    projects_ids: list[int] | None = Field(default=None, description="Filter by project IDs")
    tasklists_ids: list[int] | None = Field(default=None, description="Filter by tasklist IDs")
    tasks_ids: list[int] | None = Field(default=None, description="Filter within specific task IDs")
    authors_ids: list[int] | None = Field(default=None, description="Filter by author user IDs")
    workers_ids: list[int] | None = Field(
        default=None, description="Filter by assigned worker IDs"
    )
    state_ids: list[str] | None = Field(
        default=None, description="Filter by states (active, finished, archived, template)"
    )
    entity_type: Literal["task", "subtask", "project", "tasklist", "file", "comment"] | None = (
        Field(default=None, description="Filter by entity type")
    )
    page: int | None = Field(default=None, description="Page number (starts at 0)")
    limit: int | None = Field(default=None, description="Maximum results per page")


class TaskData(BaseModel):
    name: str = Field(description="Task name (required)")
    description: str | None = Field(default=None, description="Task description (markdown)")
    worker: int | None = Field(default=None, description="Assigned worker ID")
    due_date: str | None = Field(default=None, description="Due date YYYY-MM-DD")


class TaskUpdate(BaseModel):
    name: str | None = Field(default=None, description="New task name")
    worker: int | None = Field(default=None, description="User ID to assign task to")
    due_date: str | None = Field(default=None, description="New due date (YYYY-MM-DD)")
    priority: int | None = Field(
        default=None, description="Task priority (higher = more important)"
    )


class SubtaskData(BaseModel):
    name: str = Field(description="Subtask name")
    description: str | None = Field(default=None, description="Optional description")
    worker: int | None = Field(default=None, description="User ID to assign subtask to")
    due_date: str | None = Field(default=None, description="Due date (YYYY-MM-DD)")


class NoteData(BaseModel):
    name: str = Field(description="Title of the note")
    content: str = Field(description="Content (plain text or markdown)")


class NoteUpdate(BaseModel):
    name: str | None = Field(default=None, description="Updated title")
    content: str | None = Field(default=None, description="Updated content")


class WorkReportData(BaseModel):
    minutes: int = Field(description="Minutes worked (e.g., 120 for 2 hours)")
    date: str = Field(description="Date of work YYYY-MM-DD")
    description: str | None = Field(default=None, description="Description of work performed")


class WorkReportUpdate(BaseModel):
    minutes: int | None = Field(default=None, description="Updated minutes worked")
    date: str | None = Field(default=None, description="Updated date YYYY-MM-DD")
    description: str | None = Field(default=None, description="Updated description")
