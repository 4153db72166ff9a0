import pytest

from cronjoborg.config import get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CRONJOB_API_KEY", raising=False)
    monkeypatch.delenv("CRONJOB_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("CRONJOB_LOG_LEVEL", raising=False)

    settings = get_settings()

    assert settings.api_key == ""
    assert settings.timeout_seconds == 5.0
    assert settings.log_level == "WARNING"


def test_settings_read_explicit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRONJOB_API_KEY", "  secret-key \n")
    monkeypatch.setenv("CRONJOB_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("CRONJOB_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.api_key == "secret-key"
    assert settings.timeout_seconds == 12.5
    assert settings.log_level == "DEBUG"


def test_settings_clamp_timeout_to_minimum(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRONJOB_TIMEOUT_SECONDS", "0")

    assert get_settings().timeout_seconds == 0.1
