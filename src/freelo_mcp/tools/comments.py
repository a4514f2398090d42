"""Comment tools."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, dump_model, unwrap_collection
from .contracts import collection_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import Comment, CommentFilters


async def _get_all_comments_handler(
    filters: Annotated[CommentFilters | None, Field(description="Optional filters")] = None,
) -> InvocationResult:
    data = await call_freelo(
        "freelo_get_all_comments",
        "fetch comments",
        "GET",
        "/all-comments",
        params=dump_model(filters),
    )
    return format_response(unwrap_collection(data, "comments"))


register_tool(
    name="freelo_get_all_comments",
    description=(
        "Fetches all comments across projects with filtering and sorting. Includes"
        " discussions on tasks, documents, files, and links."
    ),
    handler=_get_all_comments_handler,
    category="comments",
    output_contract=collection_of(Comment),
)
