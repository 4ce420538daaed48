from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from hrauth.credential_store import Credential, CredentialStore
from hrauth.session import SessionManager

from .constants import CLIENT_METHODS, DEFAULT_LOCALE, LOCALE_HEADER, LOGGER
from .coordinator import RefreshCoordinator
from .errors import (
    AuthenticationError,
    UNEXPECTED_ERROR_TITLE,
    UnexpectedError,
    error_from_response,
    normalize_error,
)


@dataclass(frozen=True)
class RequestSpec:
    method: str
    path: str
    params: dict[str, Any] | None = None
    body: Any = None
    files: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    bypass_auth: bool = False

    def __post_init__(self) -> None:
        if self.method.lower() not in CLIENT_METHODS:
            raise ValueError(f"Unsupported request method: {self.method}")

    @property
    def is_multipart(self) -> bool:
        return self.files is not None or isinstance(self.body, (bytes, bytearray))


@dataclass
class RequestAttempt:
    spec: RequestSpec
    retried: bool = False


def _decode_payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        return response.text
    try:
        return response.json()
    except ValueError as error:
        raise UnexpectedError(
            response.status_code,
            UNEXPECTED_ERROR_TITLE,
            ["The server returned a malformed response"],
        ) from error


class RequestPipeline:
    """Attaches credentials to outgoing requests and recovers from expired ones.

    A non-exempt request that comes back 401 asks the coordinator for a fresh
    credential and is replayed once with it. A second 401 on the same call, or
    a 401 on an exempt (login/refresh) request, ends the session.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        store: CredentialStore,
        session: SessionManager,
        *,
        coordinator: RefreshCoordinator | None = None,
        locale_provider: Callable[[], str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._http = http_client
        self._store = store
        self._session = session
        self._coordinator = coordinator
        self._locale_provider = locale_provider or (lambda: DEFAULT_LOCALE)
        self._logger = logger or LOGGER

    def bind_coordinator(self, coordinator: RefreshCoordinator) -> None:
        self._coordinator = coordinator

    async def execute(self, spec: RequestSpec) -> Any:
        attempt = RequestAttempt(spec)
        credential = None if spec.bypass_auth else self._store.get()

        response = await self._dispatch(spec, credential)
        if response.status_code == 401 and not spec.bypass_auth and self._coordinator is not None:
            self._logger.info("Access credential rejected for %s %s", spec.method, spec.path)
            current = self._store.get()
            if current is not None and current != credential:
                # A refresh settled while this request was in flight.
                credential = current
            else:
                credential = await self._coordinator.obtain_fresh_credential()
            attempt.retried = True
            response = await self._dispatch(spec, credential)

        return self._settle(attempt, response)

    def _settle(self, attempt: RequestAttempt, response: httpx.Response) -> Any:
        if response.is_success:
            return _decode_payload(response)

        error = error_from_response(response)
        if isinstance(error, AuthenticationError):
            self._logger.warning(
                "Authentication failed for %s %s (retried=%s, exempt=%s); ending session",
                attempt.spec.method,
                attempt.spec.path,
                attempt.retried,
                attempt.spec.bypass_auth,
            )
            self._session.logout()
        raise error

    async def _dispatch(self, spec: RequestSpec, credential: Credential | None) -> httpx.Response:
        headers = self._build_headers(spec, credential)
        kwargs: dict[str, Any] = {"params": spec.params, "headers": headers}
        if spec.files is not None:
            kwargs["files"] = spec.files
            if spec.body is not None:
                kwargs["data"] = spec.body
        elif isinstance(spec.body, (bytes, bytearray)):
            kwargs["content"] = bytes(spec.body)
        elif spec.body is not None:
            kwargs["json"] = spec.body

        try:
            response = await self._http.request(spec.method.upper(), spec.path, **kwargs)
        except Exception as error:
            raise normalize_error(error) from error
        return response

    def _build_headers(self, spec: RequestSpec, credential: Credential | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if not spec.is_multipart:
            headers["Content-Type"] = "application/json"
        headers.update(spec.headers)
        if credential is not None and not spec.bypass_auth:
            headers["Authorization"] = f"Bearer {credential.access_token}"
        headers[LOCALE_HEADER] = self._locale_provider() or DEFAULT_LOCALE
        return headers
