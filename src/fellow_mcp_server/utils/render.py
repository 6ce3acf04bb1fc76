"""Text rendering for tool results and resources.

Generates deterministic text (indented JSON, or a note's own Markdown)
for the human-readable half of every MCP response.
"""

from __future__ import annotations

import json
from typing import Any


def render_json(value: Any) -> str:
    """Render a decoded API value as indented JSON."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def note_resource_text(note: Any) -> str:
    """Text body for a `fellow://note/{id}` resource.

    Args:
        note: Note entity as returned by the API.

    Returns:
        The note's `content_markdown` when it is a non-empty string,
        otherwise the whole note as indented JSON.
    """
    if isinstance(note, dict):
        markdown = note.get("content_markdown")
        if isinstance(markdown, str) and markdown:
            return markdown
    return render_json(note)
