# src/nirvana_client/errors.py

"""
Exception hierarchy for the Nirvana client.

Only structural problems and transport/service failures are raised.
Malformed scalar values inside records are never raised: they are reported
to a DiagnosticSink and replaced by defaults (see api/coerce.py).
"""

from __future__ import annotations


class NirvanaError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(NirvanaError):
    """Required settings are missing (e.g. credentials for the CLI)."""


class EnvelopeDecodeError(NirvanaError, ValueError):
    """The payload is not valid JSON or does not have the envelope shape."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class NirvanaServiceError(NirvanaError):
    """The service answered with a nonzero error code in the first result."""

    def __init__(self, code: int, message: str, request_id: str = "") -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"Nirvana response error: {code} {message}")


class NirvanaTransportError(NirvanaError):
    """Network failure or non-2xx HTTP status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NirvanaAuthError(NirvanaError):
    """Authentication succeeded at HTTP level but returned no token."""
