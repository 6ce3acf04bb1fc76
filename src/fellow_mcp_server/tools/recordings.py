"""Recordings tool functions."""

from __future__ import annotations

from typing import Any, Dict

from ..executor import CallExecutor
from ..pagination import PaginatedAggregator
from ..schemas import GetRecordingInput, ListRecordingsInput, ListRecordingsOutput
from .entities import fetch_entity_by_id

RECORDINGS_ENDPOINT = "/recordings"
RECORDINGS_KEY = "recordings"


async def list_recordings(
    aggregator: PaginatedAggregator, params: ListRecordingsInput
) -> ListRecordingsOutput:
    """POST /recordings with optional filters; paginates like notes."""

    template: Dict[str, Any] = {"include": {"transcript": params.include_transcript}}
    filters = params.filters.to_body() if params.filters else None
    if filters:
        template["filters"] = filters

    result = await aggregator.aggregate(
        RECORDINGS_ENDPOINT,
        template,
        envelope_key=RECORDINGS_KEY,
        page_size=params.page_size,
        max_pages=params.max_pages,
    )
    return ListRecordingsOutput(count=result.count, recordings=result.items)


async def get_recording(
    executor: CallExecutor, params: GetRecordingInput
) -> Dict[str, Any]:
    """Get a recording, including its transcript, by id."""

    return await fetch_entity_by_id(
        executor,
        RECORDINGS_ENDPOINT,
        RECORDINGS_KEY,
        params.recording_id,
        include={"transcript": True},
        kind="Recording",
    )
