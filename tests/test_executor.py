"""Retry and backoff behaviour of CallExecutor."""

from __future__ import annotations

import pytest

from fellow_mcp_server.errors import (
    FailureKind,
    TransportError,
    UpstreamUnavailableError,
)
from fellow_mcp_server.executor import CallExecutor, RetryPolicy
from fellow_mcp_server.transport import RequestDescriptor
from tests.conftest import RecordingSleep, ScriptedTransport, http_error

NOTES = RequestDescriptor("POST", "/notes", {})


class TestSuccess:
    @pytest.mark.asyncio
    async def test_single_request_returns_body_unchanged(self, transport, executor, sleep):
        body = {"ok": True, "nested": {"a": [1, 2]}}
        transport.queue(body)

        result = await executor.execute(RequestDescriptor("GET", "/me"))

        assert result is body
        assert transport.requests == [RequestDescriptor("GET", "/me")]
        assert sleep.delays_ms == []


class TestRetryableFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 500, 503, 599])
    async def test_retry_then_success(self, transport, executor, sleep, status):
        transport.queue(http_error(status), {"ok": True})

        result = await executor.execute(NOTES)

        assert result == {"ok": True}
        assert len(transport.requests) == 2
        assert len(sleep.delays_ms) == 1
        assert 300 <= sleep.delays_ms[0] < 500

    @pytest.mark.asyncio
    async def test_jitter_stays_below_upper_bound(self, transport, sleep):
        executor = CallExecutor(transport, sleep=sleep, random=lambda: 0.999)
        transport.queue(http_error(429), {"ok": True})

        await executor.execute(NOTES)

        assert 300 <= sleep.delays_ms[0] < 500

    @pytest.mark.asyncio
    async def test_exhaustion_raises_distinct_error(self, sleep):
        transport = ScriptedTransport(http_error(503), repeat_last=True)
        executor = CallExecutor(transport, sleep=sleep, random=lambda: 0.0)

        with pytest.raises(UpstreamUnavailableError) as info:
            await executor.execute(NOTES)

        assert str(info.value) == "Upstream unavailable after retries"
        assert not isinstance(info.value, TransportError)
        assert len(transport.requests) == 4
        # three waits between four attempts, doubling each time
        assert sleep.delays_ms == [300, 600, 1200]

    @pytest.mark.asyncio
    async def test_mixed_retryable_statuses_exhaust(self, sleep):
        transport = ScriptedTransport(
            http_error(429), http_error(500), http_error(429), http_error(502)
        )
        executor = CallExecutor(transport, sleep=sleep, random=lambda: 0.5)

        with pytest.raises(UpstreamUnavailableError):
            await executor.execute(NOTES)

        assert len(transport.requests) == 4
        assert sleep.delays_ms == [400, 700, 1300]

    @pytest.mark.asyncio
    async def test_custom_policy(self, sleep):
        transport = ScriptedTransport(http_error(500), repeat_last=True)
        policy = RetryPolicy(max_attempts=2, base_delay_ms=10, jitter_ms=0)
        executor = CallExecutor(transport, policy=policy, sleep=sleep)

        with pytest.raises(UpstreamUnavailableError) as info:
            await executor.execute(NOTES)

        assert len(transport.requests) == 2
        assert sleep.delays_ms == [10]
        assert info.value.details == {"path": "/notes", "attempts": 2}


class TestTerminalFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    async def test_client_errors_propagate_unchanged(self, transport, executor, sleep, status):
        error = http_error(status)
        transport.queue(error)

        with pytest.raises(TransportError) as info:
            await executor.execute(NOTES)

        assert info.value is error
        assert len(transport.requests) == 1
        assert sleep.delays_ms == []

    @pytest.mark.asyncio
    async def test_network_error_is_not_retried(self, transport, executor, sleep):
        error = TransportError(FailureKind.NETWORK_ERROR, "timed out")
        transport.queue(error)

        with pytest.raises(TransportError) as info:
            await executor.execute(NOTES)

        assert info.value is error
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_terminal_after_retry_propagates(self, transport, executor, sleep):
        error = http_error(404)
        transport.queue(http_error(503), error)

        with pytest.raises(TransportError) as info:
            await executor.execute(NOTES)

        assert info.value is error
        assert len(transport.requests) == 2
        assert len(sleep.delays_ms) == 1

    @pytest.mark.asyncio
    async def test_unclassified_exceptions_propagate(self, transport, executor):
        transport.queue(RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            await executor.execute(NOTES)

        assert len(transport.requests) == 1


def test_default_policy():
    executor = CallExecutor(ScriptedTransport(), sleep=RecordingSleep())
    assert executor.policy == RetryPolicy(max_attempts=4, base_delay_ms=300, jitter_ms=200)


@pytest.mark.asyncio
async def test_delay_resets_between_calls(sleep):
    transport = ScriptedTransport(http_error(429), {"n": 1}, http_error(429), {"n": 2})
    executor = CallExecutor(transport, sleep=sleep, random=lambda: 0.0)

    assert await executor.execute(NOTES) == {"n": 1}
    assert await executor.execute(NOTES) == {"n": 2}

    assert sleep.delays_ms == [300, 300]
