"""Error hierarchy for the upload/fetch subsystem."""

from __future__ import annotations

from typing import Any


class PinboxError(Exception):
    """Base exception for all pinbox-specific errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(PinboxError):
    """Raised when a request is missing a field or carries a malformed value."""


class NotFoundError(PinboxError):
    """Raised when a local address points at a file that no longer exists."""


class StorageIOError(PinboxError):
    """Raised when the local store cannot create its directory or write a file."""


class PinServiceError(PinboxError):
    """Base class for failures talking to the remote pinning service."""


class PinTransportError(PinServiceError):
    """Raised on timeouts and connection failures reaching the pinning service."""


class UpstreamError(PinServiceError):
    """Raised when the pinning service answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"pinning service returned {status_code}: {body}",
            {"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class PinResponseError(PinServiceError):
    """Raised when a 2xx response does not carry a usable content hash."""
