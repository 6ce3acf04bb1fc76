"""FastMCP server entrypoint.

Registers tools and the note resource template for the Fellow MCP
Server. Tool implementations live in `tools/` and stay decoupled from the
runtime so they can be unit-tested without it; this module only adapts
their results and errors to MCP.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Awaitable, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import BaseModel

from . import __version__
from .config import AppConfig, load_config
from .errors import AppError, ConfigError, to_error_payload
from .executor import CallExecutor
from .pagination import PaginatedAggregator
from .schemas import (
    GetNoteInput,
    GetRecordingInput,
    ListNotesInput,
    ListRecordingsInput,
)
from .tools import (
    get_me,
    get_note,
    get_recording,
    list_notes,
    list_recordings,
    read_note_resource,
)
from .transport import HttpTransport, Transport
from .utils import configure_logging, render_json

logger = logging.getLogger(__name__)

APP_NAME = "fellow-mcp-server"
NOTE_RESOURCE_URI = "fellow://note/{note_id}"


def _to_result(value: Any) -> ToolResult:
    """Indented JSON text plus the same value as structured content."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    structured = value if isinstance(value, dict) else {"result": value}
    return ToolResult(
        content=[TextContent(type="text", text=render_json(value))],
        structured_content=structured,
    )


async def _run_tool(name: str, call: Awaitable[Any]) -> ToolResult:
    try:
        return _to_result(await call)
    except AppError as exc:
        logger.info("tool %s failed: %s", name, to_error_payload(exc))
        raise ToolError(exc.message) from exc


def _register_fastmcp_tools(
    app: FastMCP, executor: CallExecutor, aggregator: PaginatedAggregator
) -> None:
    read_only = {"readOnlyHint": True, "openWorldHint": True}

    @app.tool(
        "get_me",
        description="Calls GET /me to verify auth and fetch your Fellow identity",
        annotations=ToolAnnotations(title="Get authenticated user", **read_only),
    )
    async def get_me_tool() -> ToolResult:
        return await _run_tool("get_me", get_me(executor))

    @app.tool(
        "list_notes",
        description=(
            "POST /notes with optional filters. Returns paginated notes; "
            "set max_pages to control pagination."
        ),
        annotations=ToolAnnotations(title="List notes", **read_only),
    )
    async def list_notes_tool(params: Optional[ListNotesInput] = None) -> ToolResult:
        return await _run_tool(
            "list_notes", list_notes(aggregator, params or ListNotesInput())
        )

    @app.tool(
        "get_note",
        description="Fetch a single note, including its Markdown content, by id",
        annotations=ToolAnnotations(title="Get a note by id", **read_only),
    )
    async def get_note_tool(params: GetNoteInput) -> ToolResult:
        return await _run_tool("get_note", get_note(executor, params))

    @app.tool(
        "list_recordings",
        description=(
            "POST /recordings with optional filters/transcript include; "
            "paginates like notes."
        ),
        annotations=ToolAnnotations(title="List recordings", **read_only),
    )
    async def list_recordings_tool(
        params: Optional[ListRecordingsInput] = None,
    ) -> ToolResult:
        return await _run_tool(
            "list_recordings",
            list_recordings(aggregator, params or ListRecordingsInput()),
        )

    @app.tool(
        "get_recording",
        description="Fetch a single recording, including its transcript, by id",
        annotations=ToolAnnotations(title="Get a recording by id", **read_only),
    )
    async def get_recording_tool(params: GetRecordingInput) -> ToolResult:
        return await _run_tool("get_recording", get_recording(executor, params))


def _register_resources(app: FastMCP, executor: CallExecutor) -> None:
    @app.resource(
        NOTE_RESOURCE_URI,
        name="fellow-note",
        description="Fetch a note by id as an MCP resource",
        mime_type="text/markdown",
    )
    async def note_resource(note_id: str) -> str:
        try:
            return await read_note_resource(executor, note_id)
        except AppError as exc:
            raise ResourceError(exc.message) from exc


def build_app(
    config: AppConfig,
    transport: Transport,
    *,
    executor: Optional[CallExecutor] = None,
    aggregator: Optional[PaginatedAggregator] = None,
) -> FastMCP:
    """Create the FastMCP app wired to `transport`.

    The executor and aggregator are built from `config` unless given,
    which lets tests inject instances with simulated sleep.
    """

    executor = executor or CallExecutor(transport, policy=config.retry_policy())
    aggregator = aggregator or PaginatedAggregator(
        executor, page_delay_ms=config.page_delay_ms
    )

    app = FastMCP(APP_NAME, version=__version__)
    _register_fastmcp_tools(app, executor, aggregator)
    _register_resources(app, executor)
    return app


async def _serve(config: AppConfig, transport_name: str) -> None:
    async with HttpTransport(config) as transport:
        app = build_app(config, transport)
        logger.info("serving %s %s over %s", APP_NAME, __version__, transport_name)
        await app.run_async(transport=transport_name, show_banner=False)


def main(argv: Optional[list[str]] = None) -> None:
    """Run the FastMCP application.

    Loads configuration (missing credentials are fatal), configures
    side-channel logging, and serves until interrupted. It is safe to
    import and call `main()` from other entrypoints.
    """

    argv = argv if argv is not None else sys.argv[1:]
    cli = argparse.ArgumentParser(prog="fellow-mcp", description=__doc__)
    cli.add_argument(
        "--transport",
        default="stdio",
        choices=("stdio", "http", "sse"),
        help="MCP transport (default: stdio)",
    )
    args = cli.parse_args(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        raise SystemExit(exc.message) from exc

    configure_logging(config)
    asyncio.run(_serve(config, args.transport))


if __name__ == "__main__":  # pragma: no cover
    main()
