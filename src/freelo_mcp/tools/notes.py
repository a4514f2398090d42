"""Note tools — standalone project documents."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import call_freelo, dump_model
from .contracts import object_of
from .normalize import InvocationResult, format_response
from .registry import register_tool
from .schemas import Note, NoteData, NoteUpdate


async def _get_note_handler(
    note_id: Annotated[
        str, Field(description='Note ID (e.g., "12345"). Get from project details or search.')
    ],
) -> InvocationResult:
    data = await call_freelo("freelo_get_note", "fetch note", "GET", f"/note/{note_id}")
    return format_response(data)


async def _create_note_handler(
    project_id: Annotated[
        str, Field(description='Project ID (e.g., "197352"). Get from freelo_get_projects.')
    ],
    note_data: Annotated[NoteData, Field(description="Note data")],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_create_note",
        "create note",
        "POST",
        f"/project/{project_id}/note",
        json=dump_model(note_data),
    )
    return format_response(data)


async def _update_note_handler(
    note_id: Annotated[str, Field(description='Note ID (e.g., "12345"). Get from freelo_get_note.')],
    note_data: Annotated[
        NoteUpdate, Field(description="Updated note data - only include fields to change")
    ],
) -> InvocationResult:
    data = await call_freelo(
        "freelo_update_note", "update note", "POST", f"/note/{note_id}", json=dump_model(note_data)
    )
    return format_response(data)


register_tool(
    name="freelo_get_note",
    description=(
        "Fetches a specific note by ID, including title, content, and metadata."
        " Notes are standalone documents for project documentation."
    ),
    handler=_get_note_handler,
    category="notes",
    output_contract=object_of(Note),
)

register_tool(
    name="freelo_create_note",
    description=(
        "Creates a new note in a project. Notes are standalone documents for project"
        " documentation, meeting minutes, or specifications."
    ),
    handler=_create_note_handler,
    category="notes",
    output_contract=object_of(Note),
)

register_tool(
    name="freelo_update_note",
    description=(
        "Updates an existing note's title or content. All fields are optional - only"
        " provide what needs to change."
    ),
    handler=_update_note_handler,
    category="notes",
    output_contract=object_of(Note),
)
