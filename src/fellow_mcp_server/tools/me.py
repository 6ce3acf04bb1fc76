"""Authenticated-user tool."""

from __future__ import annotations

from typing import Any

from ..executor import CallExecutor
from ..transport import RequestDescriptor


async def get_me(executor: CallExecutor) -> Any:
    """Call GET /me to verify auth and fetch the caller's Fellow identity."""

    return await executor.execute(RequestDescriptor("GET", "/me"))
