"""Pydantic schemas for tool inputs and outputs.

These models define the JSON contracts used by the MCP tools. Input
models reject unknown properties so typos in filter names surface as
validation errors instead of silently widening a query.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .utils import parse_iso8601


class _Input(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ListFilters(_Input):
    """Filters accepted by the notes and recordings list endpoints.

    Timestamp bounds are validated as ISO 8601 and sent unchanged.
    """

    event_guid: Optional[str] = None
    title: Optional[str] = None
    channel_id: Optional[str] = None
    created_at_start: Optional[str] = Field(default=None, description="ISO 8601")
    created_at_end: Optional[str] = Field(default=None, description="ISO 8601")
    updated_at_start: Optional[str] = Field(default=None, description="ISO 8601")
    updated_at_end: Optional[str] = Field(default=None, description="ISO 8601")

    @field_validator(
        "created_at_start", "created_at_end", "updated_at_start", "updated_at_end"
    )
    @classmethod
    def _check_timestamp(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_iso8601(v)
        return v

    def to_body(self) -> Optional[Dict[str, str]]:
        """Request-body form: unset filters dropped, None when empty."""
        body = self.model_dump(exclude_none=True)
        return body or None


# Notes and recordings share the upstream filter vocabulary.
NoteFilters = ListFilters
RecordingFilters = ListFilters


# Inputs


class ListNotesInput(_Input):
    include_content_markdown: bool = False
    include_event_attendees: bool = False
    filters: Optional[NoteFilters] = None
    page_size: int = Field(default=20, ge=1, le=50)
    max_pages: int = Field(default=3, ge=1, le=20)


class GetNoteInput(_Input):
    note_id: str = Field(min_length=1)


class ListRecordingsInput(_Input):
    include_transcript: bool = False
    filters: Optional[RecordingFilters] = None
    page_size: int = Field(default=20, ge=1, le=50)
    max_pages: int = Field(default=2, ge=1, le=20)


class GetRecordingInput(_Input):
    recording_id: str = Field(min_length=1)


# Outputs


class _Aggregate(BaseModel):
    count: int

    def _check_count(self, items: List[Any]) -> None:
        if self.count != len(items):
            raise ValueError("count must equal the number of items")


class ListNotesOutput(_Aggregate):
    notes: List[Any] = Field(default_factory=list)

    @model_validator(mode="after")
    def _count_matches(self) -> ListNotesOutput:
        self._check_count(self.notes)
        return self


class ListRecordingsOutput(_Aggregate):
    recordings: List[Any] = Field(default_factory=list)

    @model_validator(mode="after")
    def _count_matches(self) -> ListRecordingsOutput:
        self._check_count(self.recordings)
        return self
