"""Saved-login connection settings resolved from files, environment and overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

from cloudlogs.constants import DEFAULT_CLOUD_URL, DEFAULT_ENVIRONMENT_FILE
from cloudlogs.errors import ConfigurationError, NotLoggedInError

# Load environment variables from .env file
load_dotenv()

CONFIG_DIR_ENV = "CLOUDLOGS_CONFIG_DIR"
ENV_OVERRIDES = {
    "url": "CLOUDLOGS_URL",
    "token": "CLOUDLOGS_TOKEN",
}


@dataclass(frozen=True, slots=True)
class ConnectionSettings:
    """Where and how to reach the cloud API."""

    url: str
    token: str
    accept_invalid_certs: bool = False
    environment_name: str | None = None

    @property
    def base_url(self) -> str:
        """Return the API root without a trailing slash."""
        return self.url.rstrip("/")


def default_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the directory holding saved login files."""
    env = os.environ if environ is None else environ
    configured = env.get(CONFIG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".config" / "fermyon"


def login_file_path(environment_name: str | None, config_dir: str | Path) -> Path:
    """Return the login file for ``environment_name`` (or the default unnamed one)."""
    return Path(config_dir) / f"{environment_name or DEFAULT_ENVIRONMENT_FILE}.json"


def _read_login_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as file_obj:
            data = json.load(file_obj)
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Failed to read login file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Login file {path} must contain a JSON object")
    return data


def _extract_token(raw_token: Any, path: Path) -> str | None:
    """Accept both ``"token": "..."`` and ``"token": {"token": "..."}`` shapes."""
    if raw_token is None:
        return None
    if isinstance(raw_token, Mapping):
        raw_token = raw_token.get("token")
    if raw_token is not None and not isinstance(raw_token, str):
        raise ConfigurationError(f"Login file {path} has an invalid token value")
    return raw_token


def load_connection_settings(
    environment_name: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    config_dir: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ConnectionSettings:
    """
    Resolve connection settings for one deployment environment.

    Precedence is ``overrides`` > environment variables > saved login file.

    Parameters:
        environment_name: Name the login was saved under; ``None`` selects the
            default unnamed login.
        environ: Environment mapping, defaults to ``os.environ``.
        config_dir: Directory holding login files, defaults to
            ``$CLOUDLOGS_CONFIG_DIR`` or ``~/.config/fermyon``.
        overrides: Explicit values keyed by ``url``, ``token`` or
            ``accept_invalid_certs``.

    Raises:
        ValueError: If ``overrides`` contains an unsupported key.
        ConfigurationError: If the login file is unreadable or malformed.
        NotLoggedInError: If no token could be resolved.
    """
    env = os.environ if environ is None else environ
    overrides = dict(overrides or {})
    for key in overrides:
        if key not in ("url", "token", "accept_invalid_certs"):
            raise ValueError(f"Unsupported connection override key: {key}")

    path = login_file_path(environment_name, config_dir or default_config_dir(env))
    file_values = _read_login_file(path)

    values: dict[str, Any] = {
        "url": file_values.get("url") or DEFAULT_CLOUD_URL,
        "token": _extract_token(file_values.get("token"), path),
        "accept_invalid_certs": bool(file_values.get("danger_accept_invalid_certs", False)),
    }
    for key, env_name in ENV_OVERRIDES.items():
        if env.get(env_name):
            values[key] = env[env_name]
    values.update(overrides)

    if not values["token"]:
        where = f"environment {environment_name!r}" if environment_name else "the default environment"
        raise NotLoggedInError(
            f"Not logged in to {where}: no saved login found at {path}. "
            "Run `spin cloud login` first."
        )

    return ConnectionSettings(
        url=str(values["url"]),
        token=str(values["token"]),
        accept_invalid_certs=bool(values["accept_invalid_certs"]),
        environment_name=environment_name,
    )
