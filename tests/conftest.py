"""Shared fixtures: scripted transport, simulated sleep, test config."""

from __future__ import annotations

from typing import Any, List

import pytest

from fellow_mcp_server.config import AppConfig
from fellow_mcp_server.errors import FailureKind, TransportError
from fellow_mcp_server.executor import CallExecutor
from fellow_mcp_server.pagination import PaginatedAggregator
from fellow_mcp_server.transport import RequestDescriptor


def http_error(status: int) -> TransportError:
    return TransportError(
        FailureKind.from_status(status), f"status {status}", status=status
    )


class ScriptedTransport:
    """Replays queued responses; exceptions in the script are raised."""

    def __init__(self, *responses: Any, repeat_last: bool = False) -> None:
        self._responses: List[Any] = list(responses)
        self._repeat_last = repeat_last
        self.requests: List[RequestDescriptor] = []

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    async def send(self, request: RequestDescriptor) -> Any:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request {request}")
        if self._repeat_last and len(self._responses) == 1:
            response = self._responses[0]
        else:
            response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class RecordingSleep:
    """Stands in for asyncio.sleep; records requested delays in ms."""

    def __init__(self) -> None:
        self.delays_ms: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays_ms.append(round(seconds * 1000, 6))


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(_env_file=None, subdomain="stub", api_key="stub-key")


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def executor(transport, sleep) -> CallExecutor:
    return CallExecutor(transport, sleep=sleep, random=lambda: 0.0)


@pytest.fixture
def aggregator(executor, sleep) -> PaginatedAggregator:
    return PaginatedAggregator(executor, sleep=sleep)
