"""Tests for UTC datetime helpers and RFC 3339 format/parse."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from firelite.shared.utils.datetime import (
    ensure_utc,
    format_rfc3339,
    parse_rfc3339,
    utc_now,
)


def test_utc_now_is_aware() -> None:
    assert utc_now().tzinfo is UTC


def test_ensure_utc() -> None:
    assert ensure_utc(None) is None
    assert ensure_utc(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=UTC)
    plus_two = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two) == datetime(2024, 1, 1, tzinfo=UTC)


def test_format_rfc3339() -> None:
    assert format_rfc3339(datetime(2024, 1, 1, 0, 0, 0, 5, tzinfo=UTC)) == "2024-01-01T00:00:00.000005Z"


@pytest.mark.parametrize(
    ("dt", "expected"),
    [
        (datetime(1, 1, 1, tzinfo=UTC), "0001-01-01T00:00:00.000000Z"),
        (datetime(999, 5, 1, 12, 30, tzinfo=UTC), "0999-05-01T12:30:00.000000Z"),
    ],
)
def test_format_rfc3339_pads_early_years(dt, expected) -> None:
    """Years below 1000 keep four digits and parse back unchanged."""
    assert format_rfc3339(dt) == expected
    assert parse_rfc3339(expected) == dt


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-01T00:00:00Z", datetime(2024, 1, 1, tzinfo=UTC)),
        ("2024-01-01T00:00:00.5Z", datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=UTC)),
        ("2024-01-01T00:00:00.123456789Z", datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=UTC)),
        ("2024-01-01T02:00:00+02:00", datetime(2024, 1, 1, tzinfo=UTC)),
    ],
)
def test_parse_rfc3339(raw, expected) -> None:
    parsed = parse_rfc3339(raw)
    assert parsed == expected
    assert parsed.tzinfo is UTC


def test_parse_rfc3339_rejects_garbage() -> None:
    with pytest.raises(ValueError, match="RFC 3339"):
        parse_rfc3339("yesterday")
    with pytest.raises(ValueError, match="RFC 3339"):
        parse_rfc3339("2024-01-01T00:00:00")
