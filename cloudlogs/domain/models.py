"""Immutable models shared between the CLI, the cloud client and the fetch loop."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

from cloudlogs.constants import DEPLOY_CHANNEL_NAME
from cloudlogs.errors import APIResponseError, LogContentError


@dataclass(frozen=True, slots=True)
class LogLine:
    """One line of application output with its RFC3339 timestamp."""

    time: str
    line: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> LogLine:
        """Decode a ``{"time": ..., "line": ...}`` object, failing on missing fields."""
        time = payload.get("time")
        line = payload.get("line")
        if time is None or line is None:
            raise LogContentError(f"log line is missing its timestamp or text: {dict(payload)!r}")
        return cls(time=str(time), line=str(line))


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A batch of log lines returned by the raw-logs endpoint."""

    lines: tuple[LogLine, ...]
    source: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> LogEntry:
        """Decode one entry object carrying a ``logLines`` list."""
        if not isinstance(payload, Mapping):
            raise APIResponseError(f"log entry must be an object, got {type(payload).__name__}")
        raw_lines = payload.get("logLines")
        if not isinstance(raw_lines, list):
            raise LogContentError("log entry is missing its logLines list")
        for raw_line in raw_lines:
            if not isinstance(raw_line, Mapping):
                raise LogContentError(f"log line must be an object, got {type(raw_line).__name__}")
        return cls(
            lines=tuple(LogLine.from_payload(raw_line) for raw_line in raw_lines),
            source=payload.get("source"),
        )


@dataclass(frozen=True, slots=True)
class PollConfig:
    """Per-invocation polling settings."""

    follow: bool
    max_lines: int | None
    interval: int
    since: timedelta


@dataclass(frozen=True, slots=True)
class LogsRequest:
    """Inputs required to execute one logs run."""

    app_name: str
    environment_name: str | None
    poll: PollConfig
    channel_name: str = DEPLOY_CHANNEL_NAME


@dataclass(frozen=True, slots=True)
class ChannelTarget:
    """Resolved identifiers of the channel whose logs are fetched."""

    app_id: str
    channel_id: str
