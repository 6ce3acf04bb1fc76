"""Configuration helpers for the Fellow MCP Server.

Exposes a single public function `load_config` that reads environment
variables and returns a typed, immutable `AppConfig` instance. The
workspace subdomain and API key are required; everything else has a
documented default.
"""

from .env import AppConfig, load_config

__all__ = ["AppConfig", "load_config"]
