"""Tests for duration and interval parsing helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from cloudlogs.durations import DURATION_FORMAT_HINT, parse_duration, parse_interval
from cloudlogs.errors import ArgumentParseError


@pytest.mark.parametrize(
    ("value", "expected_seconds"),
    [
        ("300s", 300),
        ("5m", 5 * 60),
        ("4h", 4 * 3600),
        ("1d", 86400),
        ("7d", 7 * 86400),
        ("0s", 0),
    ],
)
def test_parse_duration_supports_single_unit_suffixes(value: str, expected_seconds: int) -> None:
    """Verify each unit suffix scales the numeric prefix to seconds."""
    assert parse_duration(value) == timedelta(seconds=expected_seconds)


@pytest.mark.parametrize("value", ["1h30m", "abc", "10", "", "30min", "m", "-5m", "1.5h", "5M"])
def test_parse_duration_rejects_unsupported_formats(value: str) -> None:
    """Verify compound, suffix-less and malformed durations are rejected."""
    with pytest.raises(ArgumentParseError):
        parse_duration(value)


def test_parse_duration_error_lists_supported_formats() -> None:
    """Verify the error message tells users which formats are accepted."""
    with pytest.raises(ArgumentParseError) as excinfo:
        parse_duration("30min")

    assert str(excinfo.value) == DURATION_FORMAT_HINT


def test_parse_duration_error_is_a_value_error() -> None:
    """Verify parse errors can be handled as plain ValueError."""
    with pytest.raises(ValueError):
        parse_duration("1h30m")


@pytest.mark.parametrize(("value", "expected"), [("2", 2), ("100", 100)])
def test_parse_interval_accepts_values_at_or_above_floor(value: str, expected: int) -> None:
    """Verify intervals of at least two seconds are returned as ints."""
    assert parse_interval(value) == expected


@pytest.mark.parametrize("value", ["0", "1"])
def test_parse_interval_rejects_values_below_floor(value: str) -> None:
    """Verify intervals shorter than two seconds are rejected."""
    with pytest.raises(ArgumentParseError, match="interval cannot be less than 2 seconds"):
        parse_interval(value)


@pytest.mark.parametrize("value", ["", "-3", "abc", "2s", "2.5"])
def test_parse_interval_rejects_non_integers(value: str) -> None:
    """Verify intervals must be unsigned integers."""
    with pytest.raises(ArgumentParseError):
        parse_interval(value)


@pytest.mark.parametrize("value", ["99999999999d", "1000000d", f"{10**30}s"])
def test_parse_duration_rejects_lookbacks_beyond_representable_dates(value: str) -> None:
    """Verify well-formed durations that reach past year 1 fail as parse errors."""
    with pytest.raises(ArgumentParseError, match="too far into the past"):
        parse_duration(value)


def test_parse_duration_accepts_long_but_representable_lookback() -> None:
    """Verify multi-century lookbacks are still accepted."""
    assert parse_duration("365000d") == timedelta(days=365000)


def test_parse_interval_rejects_values_above_one_day() -> None:
    """Verify intervals longer than a day are rejected before any sleep."""
    assert parse_interval("86400") == 86400
    with pytest.raises(ArgumentParseError, match="cannot be more than 86400 seconds"):
        parse_interval("86401")
    with pytest.raises(ArgumentParseError):
        parse_interval(str(10**20))
