"""Tool classification — which Freelo operations the server may expose.

Operations fall into three disjoint sets:
  - READ_ONLY_TOOLS: always available, safe operations
  - EDIT_TOOLS: available only in full mode
  - EXCLUDED_TOOLS: never exposed (destructive, admin, premium)

Anything outside READ_ONLY_TOOLS and EDIT_TOOLS is excluded, listed or not.
EXCLUDED_TOOLS exists for documentation and audits.
"""

from __future__ import annotations

from itertools import combinations

from ..exceptions import ConfigurationError
from ..mode import Mode

READ_ONLY_TOOLS: frozenset[str] = frozenset(
    {
        # Projects
        "get_projects",
        "get_all_projects",
        "get_project_details",
        "get_project_workers",
        # Tasks
        "get_all_tasks",
        "get_task_details",
        "get_task_description",
        "get_finished_tasks",
        "get_public_link",
        # Tasklists
        "get_project_tasklists",
        "get_tasklist_details",
        # Subtasks
        "get_subtasks",
        # Comments
        "get_all_comments",
        # Notes
        "get_note",
        # Users
        "get_users",
        "get_assignable_workers",
        # Work reports
        "get_work_reports",
        # Search
        "search_elasticsearch",
        "get_tasks_by_filter_uuid",
        # States
        "get_all_states",
    }
)

EDIT_TOOLS: frozenset[str] = frozenset(
    {
        # Tasks
        "create_task",
        "create_task_from_template",
        "edit_task",
        "update_task_description",
        "finish_task",
        "activate_task",
        # Subtasks
        "create_subtask",
        # Notes
        "create_note",
        "update_note",
        # Work reports
        "create_work_report",
        "update_work_report",
        # Time tracking
        "start_time_tracking",
        "stop_time_tracking",
    }
)

EXCLUDED_TOOLS: frozenset[str] = frozenset(
    {
        # Destructive
        "delete_task",
        "delete_project",
        "delete_note",
        "delete_work_report",
        "delete_public_link",
        "delete_task_reminder",
        "delete_custom_field",
        "delete_pinned_item",
        "delete_total_time_estimate",
        "delete_user_time_estimate",
        "delete_field_value",
        "delete_out_of_office",
        # Archive / remove
        "archive_project",
        "remove_workers",
        "remove_workers_by_emails",
        # Admin
        "create_project",
        "create_project_from_template",
        "activate_project",
        "create_tasklist",
        "create_tasklist_from_template",
        "invite_users_by_email",
        "invite_users_by_ids",
        "set_out_of_office",
        "get_out_of_office",
        "move_task",
        "create_task_reminder",
        # Premium (custom fields, estimates)
        "get_custom_field_types",
        "create_custom_field",
        "rename_custom_field",
        "restore_custom_field",
        "get_custom_fields_by_project",
        "add_or_edit_field_value",
        "add_or_edit_enum_value",
        "get_enum_options",
        "create_enum_option",
        "set_total_time_estimate",
        "set_user_time_estimate",
        # Invoices
        "get_issued_invoices",
        "get_invoice_detail",
        "download_invoice_reports",
        "mark_as_invoiced",
        # Notifications
        "get_all_notifications",
        "mark_notification_read",
        "mark_notification_unread",
        # Pinned items
        "get_pinned_items",
        "pin_item",
        # Events
        "get_events",
        # Files
        "get_all_files",
        "upload_file",
        "download_file",
        # Labels
        "find_available_labels",
        "create_task_labels",
        "delete_task_labels",
        # Filters
        "get_custom_filters",
    }
)

TOOL_CLASSES: dict[str, frozenset[str]] = {
    "read_only": READ_ONLY_TOOLS,
    "edit": EDIT_TOOLS,
    "excluded": EXCLUDED_TOOLS,
}


def validate_classification(classes: dict[str, frozenset[str]] | None = None) -> None:
    """Check that no operation belongs to more than one class.

    Raises:
        ConfigurationError: If any two classes share an operation name.
    """
    classes = TOOL_CLASSES if classes is None else classes
    for (left, left_names), (right, right_names) in combinations(classes.items(), 2):
        overlap = left_names & right_names
        if overlap:
            raise ConfigurationError(
                f"Operations classified as both {left!r} and {right!r}: {sorted(overlap)}"
            )


def is_tool_enabled(name: str, mode: Mode) -> bool:
    """Decide whether an operation is registered at all in ``mode``.

    Unknown names are excluded.
    """
    if name in READ_ONLY_TOOLS:
        return True
    return name in EDIT_TOOLS and mode is Mode.FULL


def get_enabled_tools(mode: Mode) -> list[str]:
    """List the operations admitted in ``mode``."""
    if mode is Mode.RESTRICTED:
        return sorted(READ_ONLY_TOOLS)
    return sorted(READ_ONLY_TOOLS | EDIT_TOOLS)
