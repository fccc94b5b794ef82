# src/nirvana_client/api/coerce.py

"""
Scalar coercion helpers for the Nirvana wire format.

The API encodes every scalar as a string: integers ("42"), Unix timestamps
("1700000000"), calendar dates ("20240131") and booleans ("0"/"1").
All helpers here are total: bad input yields the default plus a Diagnostic
sent to the sink, never an exception.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Final

from ..core.ports import Diagnostic, DiagnosticSink
from .diagnostics import default_sink

# "absent/never" sentinels; epoch zero stands in for None on the wire.
NO_TIME: Final[datetime] = datetime.fromtimestamp(0, UTC)
NO_DATE: Final[date] = date(1970, 1, 1)

DATE_LAYOUT: Final[str] = "%Y%m%d"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DATE_RE = re.compile(r"[0-9]{8}")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _report(sink: DiagnosticSink | None, field_name: str, raw: str, reason: str) -> None:
    target = default_sink() if sink is None else sink
    target.report(Diagnostic(field=field_name, value=raw, reason=reason))


def parse_integer(
    raw: str,
    default: int = 0,
    field_name: str = "",
    sink: DiagnosticSink | None = None,
) -> int:
    """Base-10 signed 64-bit integer; "" -> default, garbage -> default + diagnostic."""
    if raw == "":
        return default
    if not _INT_RE.fullmatch(raw):
        _report(sink, field_name, raw, "invalid syntax")
        return default
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        _report(sink, field_name, raw, "value out of range")
        return default
    return value


def from_unix(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, UTC)


def to_unix(value: datetime) -> int:
    return int(value.timestamp())


def parse_unix_timestamp(
    raw: str,
    default: int = 0,
    field_name: str = "",
    sink: DiagnosticSink | None = None,
) -> datetime:
    """
    Whole seconds since the epoch, as an aware UTC datetime.

    "0" (and "" with the default of 0) gives NO_TIME.
    """
    seconds = parse_integer(raw, default, field_name, sink)
    try:
        return from_unix(seconds)
    except (OverflowError, OSError, ValueError):
        _report(sink, field_name, raw, "timestamp out of range")
        return from_unix(default)


def parse_calendar_date(
    raw: str,
    field_name: str = "",
    sink: DiagnosticSink | None = None,
) -> tuple[date, bool]:
    """
    Parse a YYYYMMDD date.

    Returns (date, present). "" gives (NO_DATE, False). Malformed non-empty
    input gives (NO_DATE, True) plus a diagnostic: the wire field was set,
    even though its value was unusable.
    """
    if raw == "":
        return NO_DATE, False
    if not _DATE_RE.fullmatch(raw):
        _report(sink, field_name, raw, f"does not match layout {DATE_LAYOUT}")
        return NO_DATE, True
    try:
        return date(int(raw[:4]), int(raw[4:6]), int(raw[6:])), True
    except ValueError as e:
        _report(sink, field_name, raw, str(e))
        return NO_DATE, True


def format_calendar_date(value: date) -> str:
    """Inverse of parse_calendar_date; the sentinel encodes as ""."""
    if value == NO_DATE:
        return ""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def parse_loose_boolean(raw: str) -> bool:
    return not (raw == "" or raw == "0")


def format_loose_boolean(value: bool) -> str:
    return "1" if value else "0"
