from __future__ import annotations

from datetime import timedelta

import pytest

from pyhypertrack._constants import BASE_URL
from pyhypertrack.config import HypertrackConfig
from pyhypertrack.exceptions import HypertrackConfigError


def test_defaults() -> None:
    config = HypertrackConfig()

    assert config.base_url == BASE_URL
    assert config.replay_window == timedelta(hours=1)
    assert config.key_prefix == "/hypertrack_v3"
    assert not config.has_credentials


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HYPERTRACK_ACCOUNT_ID", "acct")
    monkeypatch.setenv("HYPERTRACK_SECRET_KEY", "secret")
    monkeypatch.setenv("HYPERTRACK_REPLAY_TTL", "120")
    monkeypatch.setenv("HYPERTRACK_CONFIRMATION_TIMEOUT", "2.5")
    monkeypatch.setenv("HYPERTRACK_KEY_PREFIX", "/tenant")

    config = HypertrackConfig.from_env()

    assert config.account_id == "acct"
    assert config.secret_key == "secret"
    assert config.has_credentials
    assert config.replay_ttl == 120.0
    assert config.confirmation_timeout == 2.5
    assert config.key_prefix == "/tenant"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HYPERTRACK_ACCOUNT_ID", "acct")
    monkeypatch.setenv("HYPERTRACK_REQUEST_TIMEOUT", "99")

    config = HypertrackConfig.from_env(account_id="override", request_timeout=5.0)

    assert config.account_id == "override"
    assert config.request_timeout == 5.0


@pytest.mark.parametrize("env_key", ["HYPERTRACK_REQUEST_TIMEOUT", "HYPERTRACK_CONFIRMATION_TIMEOUT", "HYPERTRACK_REPLAY_TTL"])
def test_from_env_rejects_non_numeric_values(monkeypatch: pytest.MonkeyPatch, env_key: str) -> None:
    monkeypatch.setenv(env_key, "one hour")

    with pytest.raises(HypertrackConfigError, match=env_key):
        HypertrackConfig.from_env()


def test_from_env_override_skips_bad_numeric_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HYPERTRACK_REPLAY_TTL", "soon")

    assert HypertrackConfig.from_env(replay_ttl=30.0).replay_ttl == 30.0
