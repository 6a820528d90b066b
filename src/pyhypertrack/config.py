"""Client and webhook configuration for pyhypertrack."""

from __future__ import annotations

import dataclasses
import os
from datetime import timedelta
from typing import Any

from pyhypertrack._constants import BASE_URL, DEFAULT_KEY_PREFIX, DEFAULT_REPLAY_TTL
from pyhypertrack.exceptions import HypertrackConfigError


@dataclasses.dataclass(frozen=True)
class HypertrackConfig:
    """Library configuration.

    Parameters
    ----------
    account_id : str
        HyperTrack account id, used as the basic-auth user name.
    secret_key : str
        HyperTrack secret key, used as the basic-auth password.
    base_url : str
        API base URL. Defaults to the v3 endpoint.
    request_timeout : float
        Total timeout in seconds for outbound API requests.
    confirmation_timeout : float
        Total timeout in seconds for fetching a webhook ``SubscribeURL``.
    replay_ttl : float
        Seconds a webhook message id is remembered for replay protection.
    key_prefix : str
        Namespace prepended to every trust store key.
    """

    account_id: str = ""
    secret_key: str = ""
    base_url: str = BASE_URL
    request_timeout: float = 30.0
    confirmation_timeout: float = 10.0
    replay_ttl: float = DEFAULT_REPLAY_TTL.total_seconds()
    key_prefix: str = DEFAULT_KEY_PREFIX

    @property
    def replay_window(self) -> timedelta:
        return timedelta(seconds=self.replay_ttl)

    @property
    def has_credentials(self) -> bool:
        return bool(self.account_id and self.secret_key)

    @classmethod
    def from_env(cls, **overrides: Any) -> HypertrackConfig:
        """Create configuration from environment variables.

        Reads ``HYPERTRACK_ACCOUNT_ID``, ``HYPERTRACK_SECRET_KEY`` and the
        optional ``HYPERTRACK_*`` tuning variables. Explicit keyword
        arguments override environment values.

        Returns
        -------
        HypertrackConfig
            Populated configuration.

        Raises
        ------
        HypertrackConfigError
            A numeric variable does not parse as a number.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "HYPERTRACK_ACCOUNT_ID": "account_id",
            "HYPERTRACK_SECRET_KEY": "secret_key",
            "HYPERTRACK_BASE_URL": "base_url",
            "HYPERTRACK_KEY_PREFIX": "key_prefix",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric settings, handled separately
        _ENV_FLOAT_MAP = {
            "HYPERTRACK_REQUEST_TIMEOUT": "request_timeout",
            "HYPERTRACK_CONFIRMATION_TIMEOUT": "confirmation_timeout",
            "HYPERTRACK_REPLAY_TTL": "replay_ttl",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise HypertrackConfigError(f"{env_key} must be a number, got {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
