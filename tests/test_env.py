import logging

import pytest

from hrclient.constants import LOGGER
from hrclient.env import ClientSettings, is_truthy, setup_logging, validate_env


def test_defaults_without_env() -> None:
    settings = ClientSettings.from_env()

    assert settings.base_url == "https://localhost:7037"
    assert settings.timeout == 30.0
    assert settings.refresh_timeout == 30.0
    assert settings.locale == "en"
    assert settings.refresh_path == "/v1/api/Auth/RefreshToken"
    assert settings.login_route == "/login"
    assert settings.credential_store_path is None
    assert settings.debug is False


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("HR_API_BASE_URL", "https://hr.example.com")
    monkeypatch.setenv("HR_API_TIMEOUT", "5")
    monkeypatch.setenv("HR_API_REFRESH_TIMEOUT", "0")
    monkeypatch.setenv("HR_API_LOCALE", "ar")
    monkeypatch.setenv("HR_CREDENTIAL_STORE_PATH", "/tmp/hr-credentials.json")
    monkeypatch.setenv("HR_API_DEBUG", "yes")

    settings = ClientSettings.from_env()

    assert settings.base_url == "https://hr.example.com"
    assert settings.timeout == 5.0
    assert settings.refresh_timeout is None
    assert settings.locale == "ar"
    assert settings.credential_store_path == "/tmp/hr-credentials.json"
    assert settings.debug is True


def test_non_numeric_timeout_rejected(monkeypatch) -> None:
    monkeypatch.setenv("HR_API_TIMEOUT", "soon")

    with pytest.raises(RuntimeError, match="HR_API_TIMEOUT must be a numeric value"):
        ClientSettings.from_env()


def test_validate_env_rejects_relative_url(monkeypatch) -> None:
    monkeypatch.setenv("HR_API_BASE_URL", "/v1/api")

    with pytest.raises(RuntimeError, match="HR_API_BASE_URL must be an absolute"):
        validate_env()


def test_validate_env_warns_on_plain_http(monkeypatch, caplog) -> None:
    monkeypatch.setenv("HR_API_BASE_URL", "http://hr.internal")

    validate_env()

    assert "plain HTTP" in caplog.text


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("on", True), (" TRUE ", True), ("0", False), ("", False), (None, False)],
)
def test_is_truthy(value, expected) -> None:
    assert is_truthy(value) is expected


def test_setup_logging_enabled(monkeypatch) -> None:
    monkeypatch.setenv("HR_API_DEBUG", "1")
    previous = LOGGER.level

    try:
        assert setup_logging() is True
        assert LOGGER.level == logging.DEBUG
    finally:
        LOGGER.setLevel(previous)


def test_setup_logging_disabled() -> None:
    assert setup_logging() is False
