from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_LOCALE,
    LOGGER,
    LOGIN_PATH,
    LOGIN_ROUTE,
    REFRESH_PATH,
)


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_float(key: str, default: float | None) -> float | None:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be a numeric value.")
    if value <= 0:
        return None
    return value


@dataclass
class ClientSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = 30.0
    refresh_timeout: float | None = 30.0
    locale: str = DEFAULT_LOCALE
    login_path: str = LOGIN_PATH
    refresh_path: str = REFRESH_PATH
    login_route: str = LOGIN_ROUTE
    credential_store_path: str | None = None
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            base_url=os.getenv("HR_API_BASE_URL", DEFAULT_BASE_URL).strip(),
            timeout=_get_env_float("HR_API_TIMEOUT", 30.0),
            refresh_timeout=_get_env_float("HR_API_REFRESH_TIMEOUT", 30.0),
            locale=os.getenv("HR_API_LOCALE", DEFAULT_LOCALE).strip() or DEFAULT_LOCALE,
            login_path=os.getenv("HR_API_LOGIN_PATH", LOGIN_PATH).strip() or LOGIN_PATH,
            refresh_path=os.getenv("HR_API_REFRESH_PATH", REFRESH_PATH).strip() or REFRESH_PATH,
            login_route=os.getenv("HR_API_LOGIN_ROUTE", LOGIN_ROUTE).strip() or LOGIN_ROUTE,
            credential_store_path=os.getenv("HR_CREDENTIAL_STORE_PATH", "").strip() or None,
            debug=is_truthy(os.getenv("HR_API_DEBUG")),
        )


def load_env() -> None:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.exists():
        return
    load_dotenv(env_path, override=True)


def validate_env() -> None:
    base_url = os.getenv("HR_API_BASE_URL", DEFAULT_BASE_URL).strip()
    parsed = urlparse(base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise RuntimeError(
            "HR_API_BASE_URL must be an absolute HTTP(S) URL (for example: "
            "https://hr.example.com)."
        )
    if parsed.scheme == "http":
        LOGGER.warning("HR_API_BASE_URL uses plain HTTP; bearer tokens will be sent unencrypted.")

    _get_env_float("HR_API_TIMEOUT", 30.0)
    _get_env_float("HR_API_REFRESH_TIMEOUT", 30.0)


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv("HR_API_DEBUG"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.DEBUG)
    return debug_enabled
