from __future__ import annotations

from typing import Any, Callable

import httpx

from hrauth import auth_api
from hrauth.credential_store import (
    Credential,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from hrauth.session import SessionClaims, SessionManager

from .constants import LOGGER
from .coordinator import RefreshCoordinator
from .env import ClientSettings
from .http import build_event_hooks
from .pipeline import RequestPipeline, RequestSpec


class ApiClient:
    """Consumer-facing surface of the authenticated HR API client.

    Build one per session and pass it to whatever needs it. Every verb
    returns the decoded payload or raises an ``ApiError``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        settings: ClientSettings | None = None,
        store: CredentialStore | None = None,
        navigate: Callable[[str], None] | None = None,
        locale_provider: Callable[[], str] | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.store = store or MemoryCredentialStore()
        self._http = http_client
        self.session_manager = SessionManager(
            self.store,
            navigate=navigate,
            login_route=self.settings.login_route,
        )
        self.session = SessionClaims(self.store)
        self.pipeline = RequestPipeline(
            http_client,
            self.store,
            self.session_manager,
            locale_provider=locale_provider or (lambda: self.settings.locale),
        )
        self.coordinator = RefreshCoordinator(
            self.store,
            auth_api.build_refresh_fn(self.pipeline, path=self.settings.refresh_path),
            on_failure=self.session_manager.logout,
            timeout=self.settings.refresh_timeout,
        )
        self.pipeline.bind_coordinator(self.coordinator)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.pipeline.execute(RequestSpec("get", path, params=params))

    async def post(
        self,
        path: str,
        body: Any = None,
        *,
        files: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self.pipeline.execute(
            RequestSpec("post", path, body=body, files=files, headers=headers or {})
        )

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.pipeline.execute(RequestSpec("put", path, body=body))

    async def delete(self, path: str) -> Any:
        return await self.pipeline.execute(RequestSpec("delete", path))

    async def login(self, user_name: str, password: str) -> Credential:
        payload = await self.pipeline.execute(
            auth_api.login_request(user_name, password, path=self.settings.login_path)
        )
        credential = auth_api.credential_from_payload(payload)
        self.session_manager.start(credential)
        LOGGER.info("Logged in as %s", user_name)
        return credential

    async def external_auth(self, path: str, body: Any) -> Any:
        return await self.pipeline.execute(auth_api.external_auth_request(path, body))

    def logout(self) -> None:
        self.session_manager.logout()


def build_store(settings: ClientSettings) -> CredentialStore:
    if settings.credential_store_path:
        return FileCredentialStore(settings.credential_store_path)
    return MemoryCredentialStore()


def create_client(
    settings: ClientSettings | None = None,
    *,
    navigate: Callable[[str], None] | None = None,
    locale_provider: Callable[[], str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    store: CredentialStore | None = None,
) -> ApiClient:
    settings = settings or ClientSettings.from_env()
    http_client = httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=settings.timeout,
        transport=transport,
        event_hooks=build_event_hooks(debug=settings.debug),
    )
    return ApiClient(
        http_client,
        settings=settings,
        store=store or build_store(settings),
        navigate=navigate,
        locale_provider=locale_provider,
    )
