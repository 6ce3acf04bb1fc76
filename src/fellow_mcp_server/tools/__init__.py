"""MCP tools for the Fellow API: identity, notes and recordings.

Each tool is exposed as a plain async function to facilitate testing.
An MCP runtime adapter (see `server.py`) registers these with the
FastMCP runtime. List tools return Pydantic models; single-entity tools
return the entity as decoded from the API.
"""

from .entities import fetch_entity_by_id
from .me import get_me
from .notes import get_note, list_notes, read_note_resource
from .recordings import get_recording, list_recordings

__all__ = [
    "fetch_entity_by_id",
    "get_me",
    "list_notes",
    "get_note",
    "read_note_resource",
    "list_recordings",
    "get_recording",
]
