# tests/test_coerce.py

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from nirvana_client.api.coerce import (
    NO_DATE,
    NO_TIME,
    format_calendar_date,
    parse_calendar_date,
    parse_integer,
    parse_loose_boolean,
    parse_unix_timestamp,
)
from nirvana_client.api.diagnostics import CollectingDiagnosticSink


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", 0), ("42", 42), ("-7", -7), ("+3", 3), ("9223372036854775807", 2**63 - 1)],
)
def test_parse_integer_valid(raw: str, expected: int, sink) -> None:
    assert parse_integer(raw, 99, "x", sink) == expected
    assert len(sink) == 0


def test_parse_integer_empty_is_default_without_diagnostic(sink) -> None:
    assert parse_integer("", 5, "task.seq", sink) == 5
    assert len(sink) == 0


@pytest.mark.parametrize("raw", ["not-a-number", "1.5", " 1", "1_000", "0x10", "9223372036854775808"])
def test_parse_integer_garbage_reports_field_and_value(raw: str, sink) -> None:
    assert parse_integer(raw, 0, "task.seq", sink) == 0
    [diag] = sink.diagnostics
    assert diag.field == "task.seq"
    assert diag.value == raw


def test_unix_timestamp_zero_is_sentinel(sink) -> None:
    zero = parse_unix_timestamp("0", 0, "t", sink)
    one = parse_unix_timestamp("1", 0, "t", sink)
    assert zero == NO_TIME
    assert one != NO_TIME
    assert one == datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)


def test_unix_timestamp_is_utc_aware(sink) -> None:
    ts = parse_unix_timestamp("1700000000", 0, "t", sink)
    assert ts.tzinfo is not None
    assert ts == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)


def test_unix_timestamp_garbage_falls_back_to_sentinel(sink) -> None:
    assert parse_unix_timestamp("yesterday", 0, "task.updated", sink) == NO_TIME
    assert sink.fields() == ["task.updated"]


def test_unix_timestamp_out_of_range_reports(sink) -> None:
    assert parse_unix_timestamp("99999999999999999", 0, "task.seqt", sink) == NO_TIME
    assert sink.fields() == ["task.seqt"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("20240131", date(2024, 1, 31)), ("19991231", date(1999, 12, 31)), ("20240229", date(2024, 2, 29))],
)
def test_calendar_date_valid(raw: str, expected: date, sink) -> None:
    assert parse_calendar_date(raw, "d", sink) == (expected, True)
    assert len(sink) == 0


def test_calendar_date_empty_is_absent(sink) -> None:
    assert parse_calendar_date("", "d", sink) == (NO_DATE, False)
    assert len(sink) == 0


@pytest.mark.parametrize("raw", ["2024-01-31", "2024013", "20241301", "20230229", "abcdefgh"])
def test_calendar_date_malformed_is_present_sentinel(raw: str, sink) -> None:
    assert parse_calendar_date(raw, "task.duedate", sink) == (NO_DATE, True)
    assert sink.fields() == ["task.duedate"]


def test_format_calendar_date() -> None:
    assert format_calendar_date(date(2024, 1, 5)) == "20240105"
    assert format_calendar_date(NO_DATE) == ""


@pytest.mark.parametrize("raw", ["1", "2", "true", "false", "no", " ", "00"])
def test_loose_boolean_true_for_anything_else(raw: str) -> None:
    assert parse_loose_boolean(raw) is True


def test_loose_boolean_false_values() -> None:
    assert parse_loose_boolean("") is False
    assert parse_loose_boolean("0") is False


def test_empty_collecting_sink_receives_diagnostics() -> None:
    sink = CollectingDiagnosticSink()
    assert len(sink) == 0

    parse_integer("not-a-number", 0, "task.seq", sink)
    parse_calendar_date("2024-01-31", "task.duedate", sink)

    assert sink.fields() == ["task.seq", "task.duedate"]
