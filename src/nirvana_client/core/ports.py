# src/nirvana_client/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the decoding core.

Decoders depend on the DiagnosticSink Protocol instead of a concrete logger,
so callers can log, collect or drop coercion anomalies.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A raw scalar that could not be coerced and was replaced by a default."""

    field: str
    value: str
    reason: str


class DiagnosticSink(Protocol):
    """Fire-and-forget receiver for coercion diagnostics. Must not raise."""
    def report(self, diagnostic: Diagnostic) -> None: ...
