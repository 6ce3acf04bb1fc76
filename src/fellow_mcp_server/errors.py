"""Error classes and helpers for the Fellow MCP Server.

Defines structured exceptions for the adapter's error model, the
enumerated upstream failure kinds decided at the transport boundary, and
a function to convert exceptions to serializable error payloads suitable
for tool responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, TypedDict


class ErrorPayload(TypedDict, total=False):
    code: str
    message: str
    details: Dict[str, Any]


class FailureKind(str, Enum):
    """Classification of a failed upstream call."""

    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    NETWORK_ERROR = "network_error"

    @property
    def retryable(self) -> bool:
        return self in (FailureKind.RATE_LIMITED, FailureKind.SERVER_ERROR)

    @classmethod
    def from_status(cls, status: int) -> FailureKind:
        if status == 429:
            return cls.RATE_LIMITED
        if 500 <= status <= 599:
            return cls.SERVER_ERROR
        return cls.CLIENT_ERROR


@dataclass(eq=False)
class AppError(Exception):
    """Base application error with a code and optional details."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class BadRequestError(AppError):
    """Raised when a request is invalid or missing required parameters."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("BAD_REQUEST", message, details)


class NotFoundError(AppError):
    """Raised when a fetch succeeds but the requested entity is absent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("NOT_FOUND", message, details)


class ConfigError(AppError):
    """Raised when startup configuration is missing or invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("CONFIG_ERROR", message, details)


class TransportError(AppError):
    """Raised by the transport for a failed HTTP call.

    Attributes:
        kind: Failure classification, decided once when the error is built.
        status: Upstream HTTP status, or None for network-level failures.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        *,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__("UPSTREAM_ERROR", message, details)
        self.kind = kind
        self.status = status

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def to_payload(self) -> ErrorPayload:
        payload = super().to_payload()
        details = dict(payload.get("details") or {})
        details["kind"] = self.kind.value
        if self.status is not None:
            details["status"] = self.status
        payload["details"] = details
        return payload


class UpstreamUnavailableError(AppError):
    """Raised when every attempt of a call failed with a retryable error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("UPSTREAM_UNAVAILABLE", message, details)


def to_error_payload(error: Exception) -> ErrorPayload:
    """Convert an exception into a structured error payload.

    Args:
        error: The exception to convert.

    Returns:
        A dictionary with `code`, `message` and optional `details`.

    Examples:
        >>> try:
        ...     raise NotFoundError("Note abc not found", {"id": "abc"})
        ... except Exception as e:
        ...     payload = to_error_payload(e)
        ...     assert payload["code"] == "NOT_FOUND"
    """

    if isinstance(error, AppError):
        return error.to_payload()
    # Fallback: wrap generic exceptions
    return {"code": "INTERNAL_ERROR", "message": str(error)}
