"""Utility functions for parsing, rendering and logging.

This package includes helpers for ISO 8601 validation of filter bounds,
text rendering of tool results and resources, and side-channel logging
setup for the stdio server.
"""

from .date_parser import parse_iso8601
from .log import configure_logging
from .render import note_resource_text, render_json

__all__ = [
    "configure_logging",
    "parse_iso8601",
    "note_resource_text",
    "render_json",
]
