"""Parsing helpers for relative durations and polling intervals."""

import re
from datetime import datetime, timedelta, timezone

from cloudlogs.constants import DURATION_UNITS, MAX_INTERVAL_SECONDS, MIN_INTERVAL_SECONDS
from cloudlogs.errors import ArgumentParseError

_UNSIGNED_INT = re.compile(r"[0-9]+")

DURATION_FORMAT_HINT = (
    'supported formats are "300s", "5m", "4h" or "1d". '
    'formats such as "1h30m" or "30min" are not supported'
)


def _parse_unsigned(text: str) -> int:
    """
    Convert a string of ASCII digits into an integer.

    Parameters:
        text (str): The candidate number.

    Returns:
        int: The parsed value.

    Raises:
        ValueError: If ``text`` contains anything but ASCII digits.
    """
    if not _UNSIGNED_INT.fullmatch(text):
        raise ValueError(f"invalid digit found in {text!r}")
    return int(text)


def parse_duration(value: str) -> timedelta:
    """
    Parse a relative duration such as ``"30m"`` into a timedelta.

    The value is a non-negative integer followed by exactly one unit suffix:
    ``s`` (seconds), ``m`` (minutes), ``h`` (hours) or ``d`` (days). Compound
    durations like ``"1h30m"`` are rejected.

    Parameters:
        value (str): The user-entered duration.

    Returns:
        timedelta: The elapsed time represented by ``value``.

    Raises:
        ArgumentParseError: If the suffix is missing or unknown, or the numeric
            prefix is not a valid non-negative integer, or the lookback
            reaches before the earliest representable date.
    """
    suffix = value[-1:]
    multiplier = DURATION_UNITS.get(suffix)
    if multiplier is None:
        raise ArgumentParseError(DURATION_FORMAT_HINT)

    try:
        amount = _parse_unsigned(value[:-1])
    except ValueError as exc:
        raise ArgumentParseError(f"{exc}; {DURATION_FORMAT_HINT}") from exc

    try:
        duration = timedelta(seconds=amount * multiplier)
        datetime.now(timezone.utc) - duration
    except OverflowError as exc:
        raise ArgumentParseError(f"duration {value!r} reaches too far into the past") from exc
    return duration


def parse_interval(value: str) -> int:
    """
    Parse the number of seconds to wait between two log polls.

    Parameters:
        value (str): The user-entered interval.

    Returns:
        int: The validated interval in seconds.

    Raises:
        ArgumentParseError: If ``value`` is not an unsigned integer or is below
            the polling floor, or above one day.
    """
    try:
        interval = _parse_unsigned(value)
    except ValueError as exc:
        raise ArgumentParseError(str(exc)) from exc

    if interval < MIN_INTERVAL_SECONDS:
        raise ArgumentParseError(
            f"interval cannot be less than {MIN_INTERVAL_SECONDS} seconds"
        )
    if interval > MAX_INTERVAL_SECONDS:
        raise ArgumentParseError(
            f"interval cannot be more than {MAX_INTERVAL_SECONDS} seconds"
        )
    return interval
