import pytest

import client


@pytest.mark.asyncio
async def test_create_client_smoke() -> None:
    async with client.create_client(client.ClientSettings(base_url="https://hr.example.com")) as api:
        assert api.coordinator.state is client.RefreshState.IDLE
        assert api.session.is_authenticated() is False
        assert isinstance(api.store, client.MemoryCredentialStore)
