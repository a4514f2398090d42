"""Tool annotations and titles derived from operation names.

Annotations come from an explicit table built once from the tool
classification. Names missing from the table fall back to verb prefixes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from mcp.types import ToolAnnotations

from ..constants import TOOL_PREFIX
from .classification import EDIT_TOOLS, EXCLUDED_TOOLS, READ_ONLY_TOOLS

READ_ONLY = ToolAnnotations(
    readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True
)
MUTATING = ToolAnnotations(
    readOnlyHint=False, destructiveHint=False, idempotentHint=False, openWorldHint=True
)
IDEMPOTENT_MUTATING = ToolAnnotations(
    readOnlyHint=False, destructiveHint=False, idempotentHint=True, openWorldHint=True
)
DESTRUCTIVE = ToolAnnotations(
    readOnlyHint=False, destructiveHint=True, idempotentHint=False, openWorldHint=True
)

_READ_PREFIXES = ("get_", "search_", "find_", "list_")
_DESTRUCTIVE_MARKERS = ("delete", "remove", "archive")
_IDEMPOTENT_VERBS = ("edit_", "update_", "finish_", "activate_")

_WORD_SPLIT = re.compile(r"[_\-\s]+")


def _operation(name: str) -> str:
    return name.removeprefix(TOOL_PREFIX)


def _derive(operation: str) -> ToolAnnotations:
    """Fallback annotations from naming conventions."""
    if any(marker in operation for marker in _DESTRUCTIVE_MARKERS):
        return DESTRUCTIVE
    if operation.startswith(_READ_PREFIXES):
        return READ_ONLY
    if operation.startswith(_IDEMPOTENT_VERBS):
        return IDEMPOTENT_MUTATING
    return MUTATING


def _build_table() -> dict[str, ToolAnnotations]:
    table: dict[str, ToolAnnotations] = {}
    for name in EXCLUDED_TOOLS:
        table[name] = _derive(name)
    for name in EDIT_TOOLS:
        table[name] = IDEMPOTENT_MUTATING if name.startswith(_IDEMPOTENT_VERBS) else MUTATING
    for name in READ_ONLY_TOOLS:
        table[name] = READ_ONLY
    return table


ANNOTATION_TABLE: dict[str, ToolAnnotations] = _build_table()


def get_annotations(name: str) -> ToolAnnotations:
    """Annotations for a tool or operation name (``freelo_`` prefix optional)."""
    operation = _operation(name)
    return ANNOTATION_TABLE.get(operation) or _derive(operation)


def merge_annotations(
    base: ToolAnnotations,
    overrides: ToolAnnotations | Mapping[str, Any] | None,
) -> ToolAnnotations:
    """Merge per-tool overrides over ``base``, key by key."""
    if not overrides:
        return base
    if isinstance(overrides, ToolAnnotations):
        overrides = overrides.model_dump(exclude_none=True)
    merged = {**base.model_dump(exclude_none=True), **overrides}
    return ToolAnnotations(**merged)


def get_tool_title(name: str) -> str:
    """Human-readable title, e.g. ``freelo_get_project_details`` → ``Get Project Details``."""
    words = [w for w in _WORD_SPLIT.split(_operation(name)) if w]
    if not words:
        return name
    return " ".join(w[:1].upper() + w[1:] for w in words)
