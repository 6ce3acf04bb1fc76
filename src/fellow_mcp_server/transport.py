"""HTTP transport for the Fellow REST API.

The transport performs exactly one request per `send` call and turns any
failure into a `TransportError` whose `FailureKind` is decided here, once.
Retry decisions are made by the executor on top of that classification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Literal, Optional, Protocol

import httpx

from .errors import FailureKind, TransportError

if TYPE_CHECKING:
    from .config import AppConfig

logger = logging.getLogger(__name__)

Method = Literal["GET", "POST"]


@dataclass(frozen=True)
class RequestDescriptor:
    """A single outbound request: method, API path and optional JSON body."""

    method: Method
    path: str
    body: Optional[Dict[str, Any]] = None


class Transport(Protocol):
    async def send(self, request: RequestDescriptor) -> Any: ...


class HttpTransport:
    """httpx-backed transport bound to one Fellow workspace.

    The underlying client is configured once (base URL, API key header,
    timeout) and only read afterwards, so it can be shared by concurrent
    tool calls.

    Args:
        config: Application configuration.
        client: Optional pre-built client, mainly for tests using
            `httpx.MockTransport`.
    """

    def __init__(
        self, config: AppConfig, *, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            headers={"X-API-KEY": config.api_key.get_secret_value()},
            timeout=config.timeout_seconds,
        )

    async def send(self, request: RequestDescriptor) -> Any:
        """Send one request and return the decoded JSON body.

        Returns:
            The decoded body, or None when the response has no content.

        Raises:
            TransportError: For HTTP error statuses, network faults and
                undecodable bodies.
        """

        logger.debug("%s %s", request.method, request.path)
        try:
            response = await self._client.request(
                request.method, request.path, json=request.body
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                FailureKind.from_status(status),
                f"{request.method} {request.path} failed with status {status}",
                status=status,
                details={"path": request.path},
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                FailureKind.NETWORK_ERROR,
                f"{request.method} {request.path} timed out",
                details={"path": request.path},
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                FailureKind.NETWORK_ERROR,
                f"{request.method} {request.path} failed: {exc}",
                details={"path": request.path},
            ) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                FailureKind.NETWORK_ERROR,
                f"{request.method} {request.path} returned a non-JSON body",
                status=response.status_code,
                details={"path": request.path},
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
