"""Typed protocol contracts shared across runtime components."""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Protocol, Sequence

from cloudlogs.domain.models import LogEntry


class ResponseLike(Protocol):
    """Minimal HTTP response contract used by cloud client code."""

    status_code: int

    def json(self) -> Any:
        """Decode the response body as JSON."""

    def raise_for_status(self) -> None:
        """Raise for non-successful HTTP responses."""


class SessionLike(Protocol):
    """Minimal HTTP session contract used by cloud client mixins."""

    headers: MutableMapping[str, str]
    verify: bool

    def get(
        self,
        url: str,
        params: Mapping[str, object] | None = None,
        timeout: tuple[float, float] | None = None,
    ) -> ResponseLike:
        """Perform an HTTP GET request and return a response object."""

    def close(self) -> None:
        """Release pooled connections."""


class CloudClientLike(Protocol):
    """Operations the logs command needs from the cloud."""

    def get_app_id(self, name: str) -> str | None:
        """Return the ID of the app called ``name``, or ``None``."""

    def get_channel_id(self, app_id: str, channel_name: str) -> str:
        """Return the ID of ``channel_name`` for ``app_id``."""

    def channel_logs_raw(
        self,
        channel_id: str,
        max_lines: int | None,
        since: str | None,
    ) -> Sequence[LogEntry]:
        """Return log entries of a channel, newest entry first."""
