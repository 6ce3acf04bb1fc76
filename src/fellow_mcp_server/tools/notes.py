"""Notes tool functions: list, get, and the note resource."""

from __future__ import annotations

from typing import Any, Dict

from ..errors import BadRequestError
from ..executor import CallExecutor
from ..pagination import PaginatedAggregator
from ..schemas import GetNoteInput, ListNotesInput, ListNotesOutput
from ..utils import note_resource_text
from .entities import fetch_entity_by_id

NOTES_ENDPOINT = "/notes"
NOTES_KEY = "notes"


async def list_notes(
    aggregator: PaginatedAggregator, params: ListNotesInput
) -> ListNotesOutput:
    """POST /notes with optional filters, following cursors up to `max_pages`."""

    template: Dict[str, Any] = {
        "include": {
            "content_markdown": params.include_content_markdown,
            "event_attendees": params.include_event_attendees,
        },
    }
    filters = params.filters.to_body() if params.filters else None
    if filters:
        template["filters"] = filters

    result = await aggregator.aggregate(
        NOTES_ENDPOINT,
        template,
        envelope_key=NOTES_KEY,
        page_size=params.page_size,
        max_pages=params.max_pages,
    )
    return ListNotesOutput(count=result.count, notes=result.items)


async def get_note(executor: CallExecutor, params: GetNoteInput) -> Dict[str, Any]:
    """Get a full note, including its Markdown content, by id."""

    return await fetch_entity_by_id(
        executor,
        NOTES_ENDPOINT,
        NOTES_KEY,
        params.note_id,
        include={"content_markdown": True},
        kind="Note",
    )


async def read_note_resource(executor: CallExecutor, note_id: str) -> str:
    """Body of the `fellow://note/{note_id}` resource."""

    if not note_id:
        raise BadRequestError("Missing note id")
    note = await get_note(executor, GetNoteInput(note_id=note_id))
    return note_resource_text(note)
