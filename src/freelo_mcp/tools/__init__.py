"""Freelo MCP tools — catalogue, policy and registration."""

# Import modules to trigger tool registration via register_tool() calls
from . import (  # noqa: F401
    comments,
    notes,
    projects,
    search,
    states,
    subtasks,
    tasklists,
    tasks,
    time_tracking,
    users,
    work_reports,
)
from .annotations import get_annotations, get_tool_title
from .classification import get_enabled_tools, is_tool_enabled, validate_classification
from .registry import (
    TOOL_REGISTRY,
    RegisteredTool,
    ToolSpec,
    get_categories,
    register_tool,
    register_tool_legacy,
    register_tool_with_metadata,
)

__all__ = [
    "TOOL_REGISTRY",
    "RegisteredTool",
    "ToolSpec",
    "get_annotations",
    "get_categories",
    "get_enabled_tools",
    "get_tool_title",
    "is_tool_enabled",
    "register_tool",
    "register_tool_legacy",
    "register_tool_with_metadata",
    "validate_classification",
]
