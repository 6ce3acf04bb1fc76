"""Run the Fellow MCP Server over stdio.

Requires FELLOW_SUBDOMAIN and FELLOW_API_KEY in the environment (or in a
local .env file).
"""

from fellow_mcp_server.server import main


if __name__ == "__main__":
    main()
