from __future__ import annotations

import asyncio
import enum
import logging
from collections import deque
from typing import Awaitable, Callable

from hrauth.credential_store import Credential, CredentialStore

from .constants import LOGGER
from .errors import NetworkError, RefreshTimeoutError, normalize_error

RefreshFn = Callable[[Credential | None], Awaitable[Credential]]


class RefreshState(enum.Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshCoordinator:
    """Single-flight credential refresh.

    The first caller to ask for a fresh credential while the coordinator is
    idle starts the refresh call. Every caller, that one included, waits on
    its own future; all of them are settled in registration order with the
    outcome of that single call.

    The refresh runs in a task of its own, so cancelling one waiting caller
    cancels only that caller. The state check and the switch to
    ``REFRESHING`` happen with no ``await`` in between, so on a single event
    loop no second refresh can start.
    """

    def __init__(
        self,
        store: CredentialStore,
        refresh_fn: RefreshFn,
        *,
        on_failure: Callable[[], None] | None = None,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._refresh_fn = refresh_fn
        self._on_failure = on_failure
        self._timeout = timeout
        self._logger = logger or LOGGER
        self._state = RefreshState.IDLE
        self._waiters: deque[asyncio.Future[Credential]] = deque()
        self._refresh_task: asyncio.Task | None = None

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def waiting(self) -> int:
        return len(self._waiters)

    async def obtain_fresh_credential(self) -> Credential:
        waiter: asyncio.Future[Credential] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)

        if self._state is RefreshState.IDLE:
            self._state = RefreshState.REFRESHING
            self._refresh_task = asyncio.ensure_future(self._refresh())
        else:
            self._logger.debug("Refresh in progress; queued waiter #%s", len(self._waiters))
        return await waiter

    async def _refresh(self) -> None:
        self._logger.info("Refreshing access credential")
        try:
            credential = await self._run_refresh()
        except asyncio.CancelledError:
            self._abandon()
            raise
        except Exception as error:
            self._fail(normalize_error(error))
            return
        self._succeed(credential)

    async def _run_refresh(self) -> Credential:
        current = self._store.get()
        if self._timeout is None:
            return await self._refresh_fn(current)
        try:
            return await asyncio.wait_for(self._refresh_fn(current), self._timeout)
        except asyncio.TimeoutError as error:
            raise RefreshTimeoutError(self._timeout) from error

    def _drain(self) -> list[asyncio.Future[Credential]]:
        self._state = RefreshState.IDLE
        self._refresh_task = None
        waiters = list(self._waiters)
        self._waiters.clear()
        return waiters

    def _succeed(self, credential: Credential) -> None:
        self._store.set(credential)
        waiters = self._drain()
        self._logger.info("Credential refreshed; releasing %s waiting request(s)", len(waiters))
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(credential)

    def _fail(self, error: Exception) -> None:
        waiters = self._drain()
        self._logger.warning(
            "Credential refresh failed; rejecting %s waiting request(s): %s",
            len(waiters),
            error,
        )
        self._store.clear()
        if self._on_failure is not None:
            self._on_failure()
        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(error)

    def _abandon(self) -> None:
        # The refresh itself was cancelled; the stored credential is left alone.
        waiters = self._drain()
        self._logger.warning("Credential refresh cancelled; releasing %s waiter(s)", len(waiters))
        error = NetworkError("Refresh Cancelled", ["Credential refresh was cancelled"])
        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(error)
