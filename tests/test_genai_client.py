import asyncio

import pytest

from krishi_mitra.core.genai_client import GenAIClientProvider


@pytest.mark.anyio
async def test_client_is_built_once(provider, client_factory):
    first = await provider.get_client()
    second = await provider.get_client()

    assert first is second
    assert client_factory.created == 1
    assert client_factory.api_keys == ["test-key"]
    assert provider.available


@pytest.mark.anyio
async def test_concurrent_first_use_builds_one_client(provider, client_factory):
    clients = await asyncio.gather(*[provider.get_client() for _ in range(10)])

    assert client_factory.created == 1
    assert all(client is clients[0] for client in clients)


@pytest.mark.anyio
async def test_missing_key_is_cached(client_factory, monkeypatch):
    provider = GenAIClientProvider(api_key="", client_factory=client_factory)

    assert await provider.get_client() is None
    assert provider.resolved
    assert not provider.available

    # A key appearing later must not be picked up by an already-resolved provider.
    monkeypatch.setattr(provider, "_api_key", "late-key")
    assert await provider.get_client() is None
    assert client_factory.created == 0


@pytest.mark.anyio
async def test_key_falls_back_to_settings(client_factory, monkeypatch):
    monkeypatch.setattr(
        "krishi_mitra.core.genai_client.settings.GEMINI_API_KEY", "from-settings"
    )
    provider = GenAIClientProvider(client_factory=client_factory)

    assert await provider.get_client() is not None
    assert client_factory.api_keys == ["from-settings"]
