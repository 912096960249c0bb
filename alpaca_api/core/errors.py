from __future__ import annotations

from typing import Any, Optional


class AlpacaError(Exception):
    """Base error for alpaca_api."""

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None) -> None:  # noqa: D401
        super().__init__(message)
        self.context = context or {}


class TransportError(AlpacaError):
    """Connection, DNS or protocol failure before a response was received."""


class TimeoutError(TransportError):
    """Network timeout."""


class HTTPError(AlpacaError):
    """Server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status_code = status_code
        self.body = body


class AuthError(HTTPError):
    """Authentication or authorization failed (401/403, or missing credentials)."""


class NotFoundError(HTTPError):
    """Requested resource does not exist (404)."""


class RateLimitError(HTTPError):
    """Rate limits exceeded (429)."""


class DecodeError(AlpacaError):
    """A 2xx response whose body does not match the declared result type."""

    def __init__(self, message: str, *, body: str = "", context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, context=context)
        self.body = body


class UnsupportedOperationError(AlpacaError):
    """Endpoint dispatched against a surface it carries no capability for."""


class ValidationError(AlpacaError):
    """Input validation failed."""
