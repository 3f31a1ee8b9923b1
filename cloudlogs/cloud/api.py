import logging
from typing import Any, Iterator, Mapping, Optional

from cloudlogs.domain.models import LogEntry
from cloudlogs.errors import APIResponseError, NotFoundError
from cloudlogs.types import ResponseLike

log = logging.getLogger(__name__)

PAGE_SIZE = 50


def _decode_json(response: ResponseLike) -> Any:
    """Raise for HTTP errors and return the decoded JSON body."""
    response.raise_for_status()
    try:
        return response.json()
    except ValueError as exc:
        raise APIResponseError(f"Cloud API returned a non-JSON body: {exc}") from exc


def _parse_page_items(payload: Any) -> list:
    """Extract the ``items`` list from a paged API response."""
    if not isinstance(payload, Mapping) or not isinstance(payload.get("items"), list):
        raise APIResponseError("Cloud API returned a page without an items list")
    items = payload["items"]
    for item in items:
        if not isinstance(item, Mapping):
            raise APIResponseError(f"Cloud API returned a listing item that is not an object: {item!r}")
    return items


def _item_id(item: Mapping[str, Any], kind: str) -> str:
    """Return the ``id`` of a listing item, failing on items without one."""
    item_id = item.get("id")
    if item_id is None:
        raise APIResponseError(f"Cloud API returned a {kind} without an id")
    return str(item_id)


def _parse_log_entries(payload: Any) -> list[LogEntry]:
    """Decode the raw-logs response into log entries, newest entry first."""
    if not isinstance(payload, Mapping):
        raise APIResponseError("Cloud API returned an invalid logs payload")
    entries = payload.get("entries") or []
    if not isinstance(entries, list):
        raise APIResponseError("Cloud API returned an invalid entries list")
    return [LogEntry.from_payload(entry) for entry in entries]


def _build_logs_params(max_lines: Optional[int], since: Optional[str]) -> dict:
    """Assemble raw-logs query parameters, leaving out unset values."""
    params = {}
    if max_lines is not None:
        params["max"] = max_lines
    if since is not None:
        params["since"] = since
    return params


class AppsApiMixin:
    def get_app_id(self, name: str) -> Optional[str]:
        """
        Look up an app by its exact name.
        """
        params = {"searchText": name}
        for app in self._iter_pages(self._build_apps_url(), params):
            if app.get("name") == name:
                return _item_id(app, "app")
        return None

    def _build_apps_url(self) -> str:
        """Construct the full URL for the apps API endpoint."""
        return f"{self._api_url}/api/apps"


class ChannelsApiMixin:
    def get_channel_id(self, app_id: str, channel_name: str) -> str:
        """
        Look up a channel of ``app_id`` by name.
        """
        params = {"appId": app_id}
        for channel in self._iter_pages(self._build_channels_url(), params):
            if channel.get("name") == channel_name:
                return _item_id(channel, "channel")
        raise NotFoundError(f"no channel named {channel_name!r} for app {app_id}")

    def _build_channels_url(self) -> str:
        """Construct the full URL for the channels API endpoint."""
        return f"{self._api_url}/api/channels"


class LogsApiMixin:
    def channel_logs_raw(
        self,
        channel_id: str,
        max_lines: Optional[int],
        since: Optional[str],
    ) -> list[LogEntry]:
        """
        Retrieve raw log entries of a channel newer than ``since``.
        """
        url = self._build_channel_logs_url(channel_id)
        params = _build_logs_params(max_lines, since)
        log.debug("GET %s params=%s", url, params)
        response = self.session.get(url, params=params, timeout=self.request_timeout)
        return _parse_log_entries(_decode_json(response))

    def _build_channel_logs_url(self, channel_id: str) -> str:
        """Construct the full URL for the raw channel logs endpoint."""
        return f"{self._api_url}/api/channels/{channel_id}/logs/raw"


class PagingMixin:
    def _iter_pages(self, url: str, params: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
        """Yield items of a paged listing until the API reports the last page."""
        page_index = 0
        while True:
            page_params = {**params, "pageIndex": page_index, "pageSize": PAGE_SIZE}
            log.debug("GET %s params=%s", url, page_params)
            response = self.session.get(url, params=page_params, timeout=self.request_timeout)
            payload = _decode_json(response)
            items = _parse_page_items(payload)
            yield from items
            if not items or payload.get("isLastPage", True):
                return
            page_index += 1
