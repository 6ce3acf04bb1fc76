"""Environment configuration for the Fellow MCP Server.

- Credentials come from the environment (or a local `.env` file).
- Everything is read once at startup and frozen afterwards.

Before starting the server, export the workspace subdomain and API key:

```bash
export FELLOW_SUBDOMAIN="acme"          # -> https://acme.fellow.app/api/v1
export FELLOW_API_KEY="..."             # sent as X-API-KEY
export FELLOW_LOG_FILE="~/.fellow-mcp/server.log"   # optional
```

These are rendered to the AppConfig class and can be accessed like this:

```python
from fellow_mcp_server.config import load_config
cfg = load_config()
print(cfg.base_url)
```
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigError
from ..executor import RetryPolicy

_REQUIRED = ("subdomain", "api_key")


class AppConfig(BaseSettings):
    """Application configuration settings loaded from environment variables.

    All environment variables are prefixed with FELLOW_ (e.g., FELLOW_API_KEY).
    """

    # ---- credentials ----
    subdomain: str = Field(
        min_length=1,
        description="Fellow workspace subdomain, e.g. 'acme' for acme.fellow.app",
    )
    api_key: SecretStr = Field(description="Fellow API key, sent as the X-API-KEY header")
    api_base: Optional[str] = Field(
        default=None,
        description="Override for the API base URL (defaults to the workspace URL)",
    )

    # ---- network tuning ----
    timeout_seconds: float = Field(
        default=15, gt=0, description="Per-attempt request timeout in seconds"
    )
    max_attempts: int = Field(
        default=4, ge=1, description="Total attempts per call, including the first"
    )
    backoff_base_ms: int = Field(
        default=300, ge=0, description="Initial retry delay, doubled after each retry"
    )
    backoff_jitter_ms: int = Field(
        default=200, ge=0, description="Upper bound (exclusive) of the random jitter"
    )
    page_delay_ms: int = Field(
        default=350, ge=0, description="Pause between successive page fetches"
    )

    # ---- logging ----
    log_level: str = Field(default="INFO", description="Package log level")
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file; stdout/stderr are reserved for MCP",
    )

    # pydantic-settings v2 config
    model_config = SettingsConfigDict(
        env_prefix="FELLOW_",
        case_sensitive=False,
        env_file=(".env",),  # will read if present
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,  # make settings immutable
    )

    # ---- validators ----
    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("API key must not be empty")
        return v

    @field_validator("log_file", mode="before")
    @classmethod
    def _expand_log_file(cls, v):
        if v is None or v == "":
            return None
        return Path(os.path.expanduser(os.path.expandvars(str(v))))

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()

    # ---- derived conveniences (no mutation) ----
    @property
    def base_url(self) -> str:
        """API root for the configured workspace."""
        if self.api_base:
            return self.api_base.rstrip("/")
        return f"https://{self.subdomain}.fellow.app/api/v1"

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            base_delay_ms=self.backoff_base_ms,
            jitter_ms=self.backoff_jitter_ms,
        )


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables.

    • All variables are prefixed with FELLOW_ (e.g., FELLOW_SUBDOMAIN).
    • FELLOW_SUBDOMAIN and FELLOW_API_KEY are required.
    • Missing optional values fall back to the documented defaults.

    Raises:
        ConfigError: If a required value is missing or a value is invalid.
    """
    try:
        return AppConfig()
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        if any(name in _REQUIRED for name in fields):
            raise ConfigError(
                "Set FELLOW_SUBDOMAIN and FELLOW_API_KEY in the environment.",
                {"fields": fields},
            ) from exc
        raise ConfigError(
            "Invalid Fellow MCP configuration", {"fields": fields, "reason": str(exc)}
        ) from exc
