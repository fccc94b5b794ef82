# src/nirvana_client/api/diagnostics.py

from __future__ import annotations

import logging
import threading

from ..core.ports import Diagnostic, DiagnosticSink

logger = logging.getLogger(__name__)


class LoggingDiagnosticSink:
    """Default sink: one WARNING log line per diagnostic."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, diagnostic: Diagnostic) -> None:
        self._log.warning(
            "conversion error: field '%s' value: '%s' error: '%s'",
            diagnostic.field,
            diagnostic.value,
            diagnostic.reason,
        )


class CollectingDiagnosticSink:
    """
    Buffers diagnostics in memory.

    Safe to share between threads decoding independent payloads.
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []
        self._lock = threading.Lock()

    def report(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._items.append(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        with self._lock:
            return list(self._items)

    def fields(self) -> list[str]:
        return [d.field for d in self.diagnostics]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class NullDiagnosticSink:
    def report(self, diagnostic: Diagnostic) -> None:
        return


class TeeDiagnosticSink:
    """Forwards every diagnostic to several sinks (e.g. log + collect)."""

    def __init__(self, *sinks: DiagnosticSink) -> None:
        self._sinks = sinks

    def report(self, diagnostic: Diagnostic) -> None:
        for sink in self._sinks:
            sink.report(diagnostic)


_DEFAULT_SINK = LoggingDiagnosticSink()


def default_sink() -> DiagnosticSink:
    return _DEFAULT_SINK
