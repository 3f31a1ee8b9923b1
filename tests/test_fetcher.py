"""Tests for the log fetch loop and cursor handling."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

import pytest
import requests

from cloudlogs.domain.models import LogEntry, LogLine, PollConfig
from cloudlogs.tailing import fetcher

FIXED_NOW = datetime(2024, 5, 8, 12, 0, 0, tzinfo=timezone.utc)


def _entry(*lines: tuple[str, str]) -> LogEntry:
    """Build an entry from ``(time, text)`` pairs."""
    return LogEntry(lines=tuple(LogLine(time=time, line=text) for time, text in lines))


class StopPolling(Exception):
    """Raised by test doubles to leave the infinite follow loop."""


class DummyClient:
    """Cloud client test double replaying scripted fetch responses."""

    def __init__(self, responses: Sequence[Sequence[LogEntry] | Exception]) -> None:
        """Store responses returned (or raised) by successive fetches."""
        self.responses = list(responses)
        self.calls: list[tuple[str, int | None, str | None]] = []

    def channel_logs_raw(
        self,
        channel_id: str,
        max_lines: int | None,
        since: str | None,
    ) -> Sequence[LogEntry]:
        """Record the call and return the next scripted response."""
        self.calls.append((channel_id, max_lines, since))
        if not self.responses:
            raise StopPolling()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _poll(follow: bool, *, max_lines: int | None = 10, interval: int = 2) -> PollConfig:
    return PollConfig(follow=follow, max_lines=max_lines, interval=interval, since=timedelta(days=7))


def test_initial_cursor_is_since_before_now_in_rfc3339() -> None:
    """Verify the first cursor is the lookback window before the current time."""
    cursor = fetcher.initial_cursor(_poll(False), now=lambda: FIXED_NOW)

    assert cursor == "2024-05-01T12:00:00+00:00"
    assert datetime.fromisoformat(cursor) == FIXED_NOW - timedelta(days=7)


def test_print_entries_walks_entries_oldest_first() -> None:
    """Verify newest-first entries are printed chronologically and advance the cursor."""
    printed: list[str] = []
    entries = [_entry(("T2", "b")), _entry(("T1", "a"))]

    cursor = fetcher.print_entries(entries, "T0", emit=printed.append)

    assert printed == ["a", "b"]
    assert cursor == "T2"


def test_print_entries_keeps_line_order_inside_entry() -> None:
    """Verify lines inside one entry are printed in stored order."""
    printed: list[str] = []
    entries = [_entry(("T3", "c"), ("T4", "d")), _entry(("T1", "a"), ("T2", "b"))]

    cursor = fetcher.print_entries(entries, "T0", emit=printed.append)

    assert printed == ["a", "b", "c", "d"]
    assert cursor == "T4"


def test_print_entries_cursor_is_last_printed_line() -> None:
    """Verify the cursor follows the last printed line even for oldest-first input."""
    printed: list[str] = []
    entries = [_entry(("T1", "a")), _entry(("T2", "b"))]

    cursor = fetcher.print_entries(entries, "T0", emit=printed.append)

    assert printed == ["b", "a"]
    assert cursor == "T1"


def test_print_entries_without_lines_keeps_cursor() -> None:
    """Verify entries carrying no lines leave the cursor untouched."""
    printed: list[str] = []

    cursor = fetcher.print_entries([_entry(), _entry()], "T0", emit=printed.append)

    assert printed == []
    assert cursor == "T0"


def test_fetch_once_with_no_entries_keeps_cursor_and_prints_nothing(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Verify an empty fetch neither prints nor advances the cursor."""
    client = DummyClient([[]])

    cursor = fetcher.fetch_logs_and_print_once(client, "chan-1", 10, "T0")

    assert cursor == "T0"
    assert capsys.readouterr().out == ""
    assert client.calls == [("chan-1", 10, "T0")]


def test_fetch_once_prints_to_stdout_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify fetched lines go to standard output."""
    client = DummyClient([[_entry(("T2", "second")), _entry(("T1", "first"))]])

    cursor = fetcher.fetch_logs_and_print_once(client, "chan-1", None, "T0")

    assert capsys.readouterr().out == "first\nsecond\n"
    assert cursor == "T2"


def test_loop_without_follow_fetches_exactly_once() -> None:
    """Verify non-follow mode performs a single bounded fetch and never sleeps."""
    client = DummyClient([[_entry(("T1", "a"))]])
    sleeps: list[float] = []
    printed: list[str] = []

    cursor = fetcher.fetch_logs_and_print_loop(
        client,
        "chan-1",
        _poll(False, max_lines=25),
        now=lambda: FIXED_NOW,
        sleep=sleeps.append,
        emit=printed.append,
    )

    assert client.calls == [("chan-1", 25, "2024-05-01T12:00:00+00:00")]
    assert sleeps == []
    assert printed == ["a"]
    assert cursor == "T1"


def test_loop_without_follow_fetches_once_even_when_empty() -> None:
    """Verify non-follow mode stops after one fetch regardless of results."""
    client = DummyClient([[]])

    fetcher.fetch_logs_and_print_loop(
        client,
        "chan-1",
        _poll(False),
        now=lambda: FIXED_NOW,
        sleep=lambda _seconds: None,
        emit=lambda _line: None,
    )

    assert len(client.calls) == 1


def test_loop_with_follow_sleeps_between_fetches_and_threads_cursor() -> None:
    """Verify follow mode sleeps before each refetch and reuses the advanced cursor."""
    events: list[str] = []
    printed: list[str] = []

    class RecordingClient(DummyClient):
        def channel_logs_raw(self, channel_id, max_lines, since):  # noqa: ANN001, ANN201
            events.append("fetch")
            return super().channel_logs_raw(channel_id, max_lines, since)

    client = RecordingClient(
        [
            [_entry(("T1", "a"))],
            [],
            [_entry(("T3", "c"), ("T4", "d")), _entry(("T2", "b"))],
        ]
    )

    with pytest.raises(StopPolling):
        fetcher.fetch_logs_and_print_loop(
            client,
            "chan-1",
            _poll(True, max_lines=10, interval=5),
            now=lambda: FIXED_NOW,
            sleep=lambda seconds: events.append(f"sleep {seconds}"),
            emit=printed.append,
        )

    assert events == ["fetch", "sleep 5", "fetch", "sleep 5", "fetch", "sleep 5", "fetch"]
    assert client.calls == [
        ("chan-1", 10, "2024-05-01T12:00:00+00:00"),
        ("chan-1", None, "T1"),
        ("chan-1", None, "T1"),
        ("chan-1", None, "T4"),
    ]
    assert printed == ["a", "b", "c", "d"]


def test_loop_with_follow_stops_on_fetch_error() -> None:
    """Verify a failing fetch in follow mode aborts the loop without retry."""
    client = DummyClient([[], requests.ConnectionError("connection reset")])
    sleeps: list[float] = []

    with pytest.raises(requests.ConnectionError):
        fetcher.fetch_logs_and_print_loop(
            client,
            "chan-1",
            _poll(True),
            now=lambda: FIXED_NOW,
            sleep=sleeps.append,
            emit=lambda _line: None,
        )

    assert len(client.calls) == 2
    assert sleeps == [2]


def test_utc_now_is_timezone_aware() -> None:
    """Verify the default clock produces aware UTC datetimes."""
    assert fetcher.utc_now().tzinfo == timezone.utc
