"""Error taxonomy shared by adapters, services and the HTTP layer."""

from __future__ import annotations

from typing import Optional


class RepwatchError(Exception):
    """Base class for errors rendered as ``{"success": false, "error": ...}``."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(RepwatchError):
    """Request rejected before any upstream I/O."""

    http_status = 400


class UpstreamError(RepwatchError):
    """An external API could not provide data."""

    http_status = 502

    def __init__(self, message: str, source: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class UpstreamUnavailable(UpstreamError):
    """Non-2xx response, transport failure, timeout or unreadable body."""


class UpstreamMisconfigured(UpstreamError):
    """A credential required by the upstream is not configured."""

    http_status = 503


class NotFound(RepwatchError):
    """The upstream answered, but has no record matching the request."""

    http_status = 404
