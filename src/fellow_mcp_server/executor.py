"""Resilient call executor.

Wraps a single upstream call with bounded retry: rate-limited and server
errors are retried with exponential backoff plus jitter, everything else
is raised immediately. Sleep and randomness are injectable so tests can
simulate elapsed time.
"""

from __future__ import annotations

import asyncio
import logging
import random as _random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from .errors import TransportError, UpstreamUnavailableError
from .transport import RequestDescriptor, Transport

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry tuning. Delays are in milliseconds.

    Attributes:
        max_attempts: Total attempts, including the first one.
        base_delay_ms: Delay before the first retry; doubled after each retry.
        jitter_ms: Exclusive upper bound of the uniform random jitter added
            to every delay.
    """

    max_attempts: int = 4
    base_delay_ms: int = 300
    jitter_ms: int = 200


class CallExecutor:
    """Executes request descriptors against a transport with retries.

    Args:
        transport: Anything with an async `send(RequestDescriptor)`.
        policy: Retry policy.
        sleep: Coroutine function taking seconds; defaults to asyncio.sleep.
        random: Callable returning a float in [0, 1).
    """

    def __init__(
        self,
        transport: Transport,
        *,
        policy: RetryPolicy = RetryPolicy(),
        sleep: Sleep = asyncio.sleep,
        random: Callable[[], float] = _random.random,
    ) -> None:
        self._transport = transport
        self._policy = policy
        self._sleep = sleep
        self._random = random

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def execute(self, request: RequestDescriptor) -> Any:
        """Perform the call, retrying transient failures.

        Returns:
            The decoded response body of the first successful attempt.

        Raises:
            TransportError: The original error for non-retryable failures.
            UpstreamUnavailableError: When every attempt failed with a
                retryable error.
        """

        delay_ms = self._policy.base_delay_ms
        for attempt in range(1, self._policy.max_attempts + 1):
            try:
                return await self._transport.send(request)
            except TransportError as exc:
                if not exc.retryable:
                    raise
                if attempt == self._policy.max_attempts:
                    logger.error(
                        "%s %s unavailable after %d attempts (last status %s)",
                        request.method,
                        request.path,
                        attempt,
                        exc.status,
                    )
                    raise UpstreamUnavailableError(
                        "Upstream unavailable after retries",
                        {"path": request.path, "attempts": attempt},
                    ) from exc
                wait_ms = delay_ms + self._random() * self._policy.jitter_ms
                logger.warning(
                    "%s %s attempt %d failed (%s); retrying in %.0f ms",
                    request.method,
                    request.path,
                    attempt,
                    exc.kind.value,
                    wait_ms,
                )
                await self._sleep(wait_ms / 1000)
                delay_ms *= 2

        # max_attempts >= 1 is enforced by configuration
        raise UpstreamUnavailableError(
            "Upstream unavailable after retries", {"path": request.path}
        )
