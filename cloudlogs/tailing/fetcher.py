"""Fetch channel logs since a moving cursor and print them in chronological order."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Sequence

import click

from cloudlogs.domain.models import LogEntry, PollConfig
from cloudlogs.types import CloudClientLike

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], None]
Emit = Callable[[str], None]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def initial_cursor(poll: PollConfig, *, now: Clock = utc_now) -> str:
    """Return the RFC3339 cursor ``poll.since`` before ``now()``."""
    return (now() - poll.since).isoformat()


def print_entries(entries: Sequence[LogEntry], cursor: str, *, emit: Emit = click.echo) -> str:
    """
    Print every line of ``entries`` oldest first and return the advanced cursor.

    The API lists entries newest first while lines inside an entry are in
    chronological order, so entries are walked in reverse. The returned cursor
    is the timestamp of the last printed line, or ``cursor`` when nothing was
    printed.
    """
    for entry in reversed(entries):
        for line in entry.lines:
            emit(line.line)
            cursor = line.time
    return cursor


def fetch_logs_and_print_once(
    client: CloudClientLike,
    channel_id: str,
    max_lines: int | None,
    since: str,
    *,
    emit: Emit = click.echo,
) -> str:
    """Fetch entries newer than ``since``, print them and return the next cursor."""
    entries = client.channel_logs_raw(channel_id, max_lines, since)
    log.debug("Fetched %d log entries for channel %s since %s", len(entries), channel_id, since)
    if not entries:
        return since
    return print_entries(entries, since, emit=emit)


def fetch_logs_and_print_loop(
    client: CloudClientLike,
    channel_id: str,
    poll: PollConfig,
    *,
    now: Clock = utc_now,
    sleep: Sleep = time.sleep,
    emit: Emit = click.echo,
) -> str:
    """
    Print logs of ``channel_id`` and, when following, keep polling forever.

    The first fetch is limited to ``poll.max_lines``; follow-up fetches are
    unbounded and only return lines newer than the previous cursor. Fetch
    errors propagate and end the loop.

    Returns:
        The cursor after the single fetch when ``poll.follow`` is false.
    """
    cursor = initial_cursor(poll, now=now)
    cursor = fetch_logs_and_print_once(client, channel_id, poll.max_lines, cursor, emit=emit)

    if not poll.follow:
        return cursor

    log.debug("Following channel %s every %d second(s)", channel_id, poll.interval)
    while True:
        sleep(poll.interval)
        cursor = fetch_logs_and_print_once(client, channel_id, None, cursor, emit=emit)
