"""Application-layer workflows decoupled from CLI parsing details."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable

import requests

from cloudlogs.constants import DEVELOPER_CLOUD_FAQ
from cloudlogs.domain.models import ChannelTarget, LogsRequest, PollConfig
from cloudlogs.errors import APIResponseError, NotFoundError
from cloudlogs.tailing import fetcher
from cloudlogs.types import CloudClientLike

log = logging.getLogger(__name__)


class WorkflowError(RuntimeError):
    """Base class for workflow-level execution failures."""


class ResolutionError(WorkflowError):
    """Raise when the app or its logs channel cannot be found."""


class ExternalDependencyError(WorkflowError):
    """Raise when the cloud API fails while resolving or fetching logs."""


def annotate_failure(message: str) -> str:
    """Append the troubleshooting pointer shown with every failure."""
    return f"{message}\n\nLearn more at {DEVELOPER_CLOUD_FAQ}"


def resolve_channel(client: CloudClientLike, app_name: str, channel_name: str) -> ChannelTarget:
    """Resolve ``app_name`` to its app ID and then to the ID of ``channel_name``."""
    try:
        app_id = client.get_app_id(app_name)
    except (requests.RequestException, APIResponseError) as exc:
        raise ExternalDependencyError(f"app with name {app_name!r} not found\n\n{exc}") from exc
    if app_id is None:
        raise ResolutionError(f"app with name {app_name!r} not found")

    try:
        channel_id = client.get_channel_id(app_id, channel_name)
    except NotFoundError as exc:
        raise ResolutionError(
            f"logs channel for app with name {app_name!r} not found\n\n{exc}"
        ) from exc
    except (requests.RequestException, APIResponseError) as exc:
        raise ExternalDependencyError(
            f"logs channel for app with name {app_name!r} not found\n\n{exc}"
        ) from exc

    log.debug("Resolved app %r to app %s, channel %s", app_name, app_id, channel_id)
    return ChannelTarget(app_id=app_id, channel_id=channel_id)


def execute_logs(
    request: LogsRequest,
    *,
    client: CloudClientLike,
    now: fetcher.Clock = fetcher.utc_now,
    sleep: fetcher.Sleep | None = None,
    emit: fetcher.Emit | None = None,
) -> str:
    """Resolve the logs channel for ``request`` and run the fetch loop against it."""
    target = resolve_channel(client, request.app_name, request.channel_name)
    loop_options: dict[str, Callable] = {"now": now}
    if sleep is not None:
        loop_options["sleep"] = sleep
    if emit is not None:
        loop_options["emit"] = emit

    try:
        return fetcher.fetch_logs_and_print_loop(
            client,
            target.channel_id,
            request.poll,
            **loop_options,
        )
    except (requests.RequestException, APIResponseError) as exc:
        raise ExternalDependencyError(f"Fetching logs failed: {exc}") from exc


def build_logs_request(
    *,
    app_name: str,
    environment_name: str | None,
    follow: bool,
    tail: int,
    interval: int,
    since: timedelta,
) -> LogsRequest:
    """Create a typed logs request from CLI-normalized values."""
    return LogsRequest(
        app_name=app_name,
        environment_name=environment_name,
        poll=PollConfig(
            follow=follow,
            max_lines=tail,
            interval=interval,
            since=since,
        ),
    )


def verify_app_name_flags(*, positional: str | None, option: str | None) -> str | None:
    """Return validation error message for the two app-name inputs, if any."""
    if positional and option and positional != option:
        return f"App name given twice with different values: {positional!r} and {option!r}."
    if not (positional or option):
        return "Missing app name: pass APP or --app-name."
    return None


def to_debug_map(request: LogsRequest) -> dict[str, object]:
    """Return minimal structured fields useful for debug logging."""
    return {
        "app": request.app_name,
        "environment": request.environment_name,
        "channel": request.channel_name,
        "follow": request.poll.follow,
        "tail": request.poll.max_lines,
        "interval": request.poll.interval,
        "since_seconds": int(request.poll.since.total_seconds()),
    }
