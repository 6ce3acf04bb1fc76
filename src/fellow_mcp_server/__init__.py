"""Fellow MCP Server package.

This package exposes the Fellow.ai meeting-notes REST API to MCP clients
over stdio. Tool calls are translated into HTTP requests against the
workspace's API, with bounded retries for transient upstream failures and
cursor pagination for list endpoints.

Usage example:
    from fellow_mcp_server.server import main
    if __name__ == "__main__":
        main()

Note: Tools are plain async functions and can be called without the MCP
runtime (see `fellow_mcp_server.tools`).
"""

__all__ = [
    "__version__",
]

__version__ = "1.0.0"
