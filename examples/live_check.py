"""Example: smoke-test the server against a real Fellow workspace.

This script connects an in-memory MCP client to the app, using the real
HTTP transport, and exercises every surface once.
"""

import asyncio
import sys

import dotenv
from fastmcp import Client

from fellow_mcp_server.config import load_config
from fellow_mcp_server.errors import ConfigError
from fellow_mcp_server.server import build_app
from fellow_mcp_server.transport import HttpTransport


async def check() -> None:
    config = load_config()
    async with HttpTransport(config) as transport:
        app = build_app(config, transport)
        async with Client(app) as client:
            tools = await client.list_tools()
            print("Tools:", ", ".join(tool.name for tool in tools))

            me = await client.call_tool("get_me", {})
            print("Authenticated user:", (me.structured_content or {}).get("name", me.structured_content))

            notes = await client.call_tool(
                "list_notes", {"params": {"page_size": 3, "max_pages": 1}}
            )
            listing = notes.structured_content or {}
            print("Fetched notes count:", listing.get("count"))

            templates = await client.list_resource_templates()
            print("Resource templates:", ", ".join(t.name for t in templates))

            first = (listing.get("notes") or [{}])[0]
            note_id = first.get("id") or first.get("guid")
            if not note_id:
                print("No notes available to sample.")
                return
            try:
                contents = await client.read_resource(f"fellow://note/{note_id}")
                text = getattr(contents[0], "text", None) if contents else None
                print("Sample note snippet:", text[:120] if text else "No text available")
            except Exception as e:
                print(f"Unable to read note resource ({note_id}): {e}")


def main():
    dotenv.load_dotenv()
    try:
        asyncio.run(check())
    except ConfigError as e:
        print(f"Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
