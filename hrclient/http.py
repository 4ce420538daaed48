from __future__ import annotations

import logging

import httpx

from .constants import LOCALE_HEADER, LOGGER

MAX_LOGGED_BODY = 1000


def _truncate(text: str, limit: int = MAX_LOGGED_BODY) -> str:
    if len(text) > limit:
        return text[:limit] + "...<truncated>"
    return text


def build_event_hooks(*, debug: bool, logger: logging.Logger | None = None) -> dict[str, list]:
    log = logger or LOGGER

    async def log_request(request: httpx.Request) -> None:
        if not debug:
            return
        log.info(
            "HR API request %s %s authenticated=%s locale=%s",
            request.method,
            request.url,
            "authorization" in request.headers,
            request.headers.get(LOCALE_HEADER),
        )

    async def log_response(response: httpx.Response) -> None:
        if not debug:
            return
        log.info(
            "HR API response %s %s -> %s",
            response.request.method,
            response.request.url,
            response.status_code,
        )
        if response.status_code >= 400:
            body = await response.aread()
            log.warning("HR API error body: %s", _truncate(body.decode("utf-8", errors="replace")))

    return {"request": [log_request], "response": [log_response]}
