"""Credential resolution for the Home Assistant REST API client.

Each call resolves a base URL and a bearer token. An explicit per-call
value wins over the value the client was configured with, which in turn
wins over the environment fallback (``HA_URL`` / ``HA_TOKEN``, from the
process environment or a ``.env`` file). The fallback is only consulted
when the client opted into it, and it is read once.
"""

import logging
import os
import threading
from dataclasses import dataclass
from os import PathLike

from dotenv import dotenv_values, find_dotenv

from .api import MissingCredentialError
from .const import ENV_TOKEN, ENV_URL
from .models import Credentials

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentCredentials:
    """Fallback values read from the environment. Either may be missing."""

    base_url: str | None
    token: str | None


def load_environment_credentials(
    env_file: str | PathLike[str] | None = None,
) -> EnvironmentCredentials:
    """Read ``HA_URL`` and ``HA_TOKEN`` from the environment.

    Args:
        env_file: Optional path to a dotenv file. When omitted, a ``.env``
            file is searched for from the current working directory upwards.

    Returns:
        EnvironmentCredentials with empty values normalized to None.

    """
    path = env_file if env_file is not None else find_dotenv(usecwd=True)
    file_values = dotenv_values(path) if path else {}

    def _lookup(name: str) -> str | None:
        return os.environ.get(name) or file_values.get(name) or None

    credentials = EnvironmentCredentials(
        base_url=_lookup(ENV_URL),
        token=_lookup(ENV_TOKEN),
    )
    _LOGGER.debug(
        "Loaded environment fallback (%s set: %s, %s set: %s)",
        ENV_URL,
        credentials.base_url is not None,
        ENV_TOKEN,
        credentials.token is not None,
    )
    return credentials


class CredentialResolver:
    """Merge explicit credentials with an optional environment fallback."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        use_env: bool = False,
        env_file: str | PathLike[str] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            base_url: Default base URL, e.g. ``http://homeassistant.local:8123``.
            token: Default long-lived access token.
            use_env: Fall back to ``HA_URL`` / ``HA_TOKEN`` when no explicit
                value is available.
            env_file: Dotenv file consulted by the fallback.

        """
        self._base_url = base_url or None
        self._token = token or None
        self._use_env = use_env
        self._env_file = env_file
        self._fallback: EnvironmentCredentials | None = None
        self._lock = threading.Lock()

    @property
    def fallback(self) -> EnvironmentCredentials | None:
        """Return the environment fallback, loading it on first access."""
        return self.load_fallback()

    def load_fallback(self) -> EnvironmentCredentials | None:
        """Read the environment fallback once and return it."""
        if not self._use_env:
            return None
        if self._fallback is None:
            with self._lock:
                if self._fallback is None:
                    self._fallback = load_environment_credentials(self._env_file)
        return self._fallback

    def resolve(
        self,
        base_url: str | None = None,
        token: str | None = None,
    ) -> Credentials:
        """Return the effective credentials for one call.

        Raises:
            MissingCredentialError: If no source provides the base URL or
                the token.

        """
        url = base_url or self._base_url
        bearer = token or self._token
        if not (url and bearer):
            fallback = self.fallback
            if fallback is not None:
                url = url or fallback.base_url
                bearer = bearer or fallback.token
        if not url:
            raise MissingCredentialError(ENV_URL)
        if not bearer:
            raise MissingCredentialError(ENV_TOKEN)
        return Credentials(base_url=url, token=bearer)
