from __future__ import annotations

from .api import AppsApiMixin, ChannelsApiMixin, LogsApiMixin, PagingMixin
from requests import Session

from cloudlogs import __version__ as about
from cloudlogs.config import ConnectionSettings, load_connection_settings
from cloudlogs.types import SessionLike


class CloudClient(AppsApiMixin, ChannelsApiMixin, LogsApiMixin, PagingMixin):
    """
    Authenticated client for the cloud API. Composes app lookup, channel
    lookup and raw log retrieval via mixins.
    """
    def __init__(
        self,
        settings: ConnectionSettings,
        session: SessionLike | None = None,
        request_timeout: tuple[float, float] = (5.0, 30.0),
    ):
        self.settings = settings
        self.session = session if session is not None else Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {settings.token}",
                "Accept": "application/json",
                "User-Agent": f"{about.__title__}/{about.__version__}",
            }
        )
        self.session.verify = not settings.accept_invalid_certs
        self.request_timeout = request_timeout
        self._api_url = settings.base_url

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_cloud_client(environment_name=None, *, settings_loader=load_connection_settings):
    """Build a client from the login saved for ``environment_name``."""
    return CloudClient(settings_loader(environment_name))
