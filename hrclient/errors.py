from __future__ import annotations

import httpx

from .constants import LOGGER

NETWORK_ERROR_TITLE = "Network Error"
NETWORK_ERROR_MESSAGE = "Failed to connect to the server"
DEFAULT_ERROR_TITLE = "Error"
UNEXPECTED_ERROR_TITLE = "Unexpected Error"


class ApiError(Exception):
    """The single error shape raised across the client boundary."""

    kind = "unexpected"

    def __init__(self, status: int, title: str, messages: list[str] | None = None) -> None:
        self.status = status
        self.title = title
        self.messages = list(messages) if messages else [title]
        super().__init__(f"{title} ({status}): {'; '.join(self.messages)}")

    def as_dict(self) -> dict:
        return {
            "status": self.status,
            "title": self.title,
            "messages": list(self.messages),
        }


class NetworkError(ApiError):
    kind = "network"

    def __init__(
        self,
        title: str = NETWORK_ERROR_TITLE,
        messages: list[str] | None = None,
    ) -> None:
        super().__init__(0, title, messages or [NETWORK_ERROR_MESSAGE])


class RefreshTimeoutError(NetworkError):
    kind = "timeout"

    def __init__(self, timeout: float) -> None:
        super().__init__(
            "Refresh Timeout",
            [f"Credential refresh did not complete within {timeout:g} seconds"],
        )
        self.timeout = timeout


class AuthenticationError(ApiError):
    kind = "authentication"

    def __init__(
        self,
        title: str = "Unauthorized",
        messages: list[str] | None = None,
        status: int = 401,
    ) -> None:
        super().__init__(status, title, messages)


class ValidationError(ApiError):
    kind = "validation"


class UnexpectedError(ApiError):
    kind = "unexpected"


def _read_payload(response: httpx.Response) -> object:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _flatten_errors(errors: dict) -> list[str]:
    messages: list[str] = []
    for field_messages in errors.values():
        if isinstance(field_messages, str):
            messages.append(field_messages)
        elif isinstance(field_messages, (list, tuple)):
            messages.extend(str(message) for message in field_messages)
    return messages


def error_from_response(response: httpx.Response) -> ApiError:
    status = response.status_code
    payload = _read_payload(response)
    title = None
    errors = None
    if isinstance(payload, dict):
        if isinstance(payload.get("title"), str) and payload["title"]:
            title = payload["title"]
        if isinstance(payload.get("errors"), dict):
            errors = payload["errors"]

    if status == 401:
        return AuthenticationError(
            title or "Unauthorized",
            [title or f"Request failed with status {status}"],
        )
    if errors is not None:
        return ValidationError(
            status,
            title or DEFAULT_ERROR_TITLE,
            _flatten_errors(errors) or [title or DEFAULT_ERROR_TITLE],
        )
    return UnexpectedError(
        status,
        title or DEFAULT_ERROR_TITLE,
        [title or f"Request failed with status {status}"],
    )


def normalize_error(error: BaseException) -> ApiError:
    if isinstance(error, ApiError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        return error_from_response(error.response)
    if isinstance(error, httpx.TransportError):
        LOGGER.warning("Request did not reach the server: %s", error)
        return NetworkError()

    LOGGER.error("Unexpected client failure: %r", error)
    return UnexpectedError(0, UNEXPECTED_ERROR_TITLE, ["An unexpected error occurred"])
