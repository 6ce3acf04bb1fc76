"""Single-entity lookup shared by the note and recording tools."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..errors import NotFoundError
from ..executor import CallExecutor
from ..pagination import normalize_page
from ..transport import RequestDescriptor


def _pick(payload: Any, envelope_key: str, entity_id: str) -> Optional[Dict[str, Any]]:
    items = [i for i in normalize_page(payload, envelope_key).items if isinstance(i, dict)]
    if not items:
        # Some endpoints answer with the bare entity instead of an envelope
        if isinstance(payload, dict) and "id" in payload and envelope_key not in payload:
            return payload
        return None
    for item in items:
        if item.get("id") == entity_id:
            return item
    return items[0]


async def fetch_entity_by_id(
    executor: CallExecutor,
    endpoint: str,
    envelope_key: str,
    entity_id: str,
    *,
    include: Optional[Dict[str, bool]] = None,
    kind: str = "Entity",
) -> Dict[str, Any]:
    """Fetch one entity through a list endpoint filtered by id.

    Args:
        executor: Executor for the single request.
        endpoint: List endpoint, e.g. "/notes".
        envelope_key: Nested envelope key, e.g. "notes".
        entity_id: Identifier to look up.
        include: Optional include flags for the request body.
        kind: Human-readable entity name used in the not-found message.

    Returns:
        The item whose `id` matches, else the first item returned.

    Raises:
        NotFoundError: If the response holds no entity.
    """

    body: Dict[str, Any] = {
        "filters": {"ids": [entity_id]},
        "pagination": {"page_size": 1},
    }
    if include:
        body["include"] = include

    payload = await executor.execute(RequestDescriptor("POST", endpoint, body))
    entity = _pick(payload, envelope_key, entity_id)
    if entity is None:
        raise NotFoundError(f"{kind} {entity_id} not found", {"id": entity_id})
    return entity
