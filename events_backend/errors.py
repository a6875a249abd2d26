"""
Error types raised by the events backend.

Every error carries the HTTP status it maps to and the ``message`` shown to
the client. ``error`` holds the underlying failure text for server errors.
"""

from __future__ import annotations

from typing import Optional


class EventsBackendError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def as_dict(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ConfigurationError(EventsBackendError):
    """A required setting is missing."""


class ClientInputError(EventsBackendError):
    status_code = 400


class UpstreamError(EventsBackendError):
    """The database or media service failed."""


class MediaUploadError(UpstreamError):
    pass


class DatabaseConnectionError(EventsBackendError):
    """The database could not be reached."""
