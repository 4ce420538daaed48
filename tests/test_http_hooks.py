import logging

import httpx
import pytest

from hrclient.http import build_event_hooks


def _client(debug: bool) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/missing":
            return httpx.Response(404, text="x" * 1500)
        return httpx.Response(200, json={"ok": True})

    return httpx.AsyncClient(
        base_url="https://hr.example.com",
        transport=httpx.MockTransport(handler),
        event_hooks=build_event_hooks(debug=debug),
    )


@pytest.mark.asyncio
async def test_debug_hooks_log_request_and_response(caplog) -> None:
    caplog.set_level(logging.INFO, logger="hrclient.api")

    async with _client(debug=True) as client:
        await client.get("/v1/api/Employees", headers={"Culture": "en", "Authorization": "Bearer t"})

    assert "HR API request GET https://hr.example.com/v1/api/Employees" in caplog.text
    assert "authenticated=True locale=en" in caplog.text
    assert "-> 200" in caplog.text
    assert "Bearer t" not in caplog.text


@pytest.mark.asyncio
async def test_error_body_is_truncated(caplog) -> None:
    caplog.set_level(logging.INFO, logger="hrclient.api")

    async with _client(debug=True) as client:
        await client.get("/missing")

    assert "...<truncated>" in caplog.text


@pytest.mark.asyncio
async def test_hooks_silent_without_debug(caplog) -> None:
    caplog.set_level(logging.INFO, logger="hrclient.api")

    async with _client(debug=False) as client:
        await client.get("/v1/api/Employees")

    assert "HR API" not in caplog.text
