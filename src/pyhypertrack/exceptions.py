"""Custom exception hierarchy for pyhypertrack."""

from __future__ import annotations

from typing import Any


class HypertrackError(Exception):
    """Base exception for all pyhypertrack errors."""


class HypertrackConfigError(HypertrackError):
    """Invalid or missing configuration."""


class HypertrackTransportError(HypertrackError):
    """Network-level failure or an undecodable response body."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class HypertrackHttpError(HypertrackError):
    """API answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        endpoint: str = "",
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body
        super().__init__(message)


class HypertrackClientError(HypertrackHttpError):
    """API rejected the request (HTTP 4xx)."""


class HypertrackServerError(HypertrackHttpError):
    """API failed internally (HTTP 5xx)."""


class RegistrationError(HypertrackError):
    """A webhook hook could not be registered.

    Raised synchronously by :meth:`HookRegistry.register` when the event
    name is not one of the known event types or the handler is not
    callable.  The registry is left unchanged.
    """
