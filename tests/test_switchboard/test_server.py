"""Tests for HTTP server."""

import pytest
from httpx import ASGITransport, AsyncClient

from switchboard.server import create_app
from switchboard_agent.aliases import AliasConfig
from switchboard_agent.host import InMemoryHost
from switchboard_llm.catalog import ModelInfo

OPUS = ModelInfo(provider="anthropic", id="claude-opus-4-5", name="Opus 4.5",
                 context_window=200_000, max_tokens=64_000, reasoning=True)
GPT = ModelInfo(provider="openai", id="gpt-5.2", name="GPT-5.2",
                context_window=400_000, max_tokens=128_000)
GPT_MINI = ModelInfo(provider="openai", id="gpt-5.2-mini", name="GPT-5.2 Mini",
                     context_window=400_000, max_tokens=128_000)


@pytest.fixture
def host():
    return InMemoryHost([OPUS, GPT, GPT_MINI], current=OPUS, credentialed=["anthropic", "openai"])


@pytest.fixture
def aliases():
    return AliasConfig.from_mapping({
        "fast": "openai/gpt-5.2-mini",
        "cheap": "google/gemini-2.5-flash",
    })


@pytest.fixture
async def client(host, aliases):
    transport = ASGITransport(app=create_app(host, aliases))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestModels:
    async def test_list(self, client):
        resp = await client.get("/models")
        assert resp.status_code == 200
        models = resp.json()["models"]
        assert [m["ref"] for m in models] == [
            "anthropic/claude-opus-4-5", "openai/gpt-5.2", "openai/gpt-5.2-mini"
        ]
        assert models[0]["current"] is True
        assert models[0]["capabilities"] == ["reasoning"]

    async def test_list_unknown_provider(self, client):
        resp = await client.get("/models", params={"provider": "mistral"})
        assert resp.status_code == 404
        assert resp.json()["detail"]["kind"] == "provider_not_found"

    async def test_search(self, client):
        resp = await client.get("/models/search", params={"q": "gpt"})
        assert resp.status_code == 200
        assert len(resp.json()["models"]) == 2

    async def test_search_requires_term(self, client):
        resp = await client.get("/models/search")
        assert resp.status_code == 400


class TestSwitch:
    async def test_switch(self, client, host):
        resp = await client.post("/models/switch", json={"search": "gpt-5.2"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "switched"
        assert data["model"] == "openai/gpt-5.2"
        assert host.current_model() is GPT

    async def test_already_active(self, client, host):
        resp = await client.post("/models/switch", json={"search": "anthropic/claude-opus-4-5"})
        assert resp.json()["status"] == "already_active"
        assert host.activations == []

    async def test_ambiguous(self, client):
        resp = await client.post("/models/switch", json={"search": "openai"})
        assert resp.status_code == 409
        assert "openai/gpt-5.2-mini" in resp.json()["detail"]["message"]

    async def test_alias(self, client):
        resp = await client.post("/models/switch", json={"search": "fast"})
        data = resp.json()
        assert data["model"] == "openai/gpt-5.2-mini"
        assert data["alias"] == "fast"

    async def test_alias_unavailable(self, client):
        resp = await client.post("/models/switch", json={"search": "cheap"})
        assert resp.status_code == 404
        assert resp.json()["detail"]["kind"] == "alias_unavailable"

    async def test_not_found(self, client):
        resp = await client.post("/models/switch", json={"search": "nonexistent"})
        assert resp.status_code == 404


class TestActivationFailure:
    async def test_missing_credentials(self):
        host = InMemoryHost([OPUS, GPT], current=OPUS, credentialed=["anthropic"])
        transport = ASGITransport(app=create_app(host))
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.post("/models/switch", json={"search": "gpt-5.2"})
        assert resp.status_code == 424
        assert resp.json()["detail"]["kind"] == "activation_failed"


class TestAliasesEndpoint:
    async def test_aliases(self, client):
        resp = await client.get("/aliases")
        data = resp.json()
        assert data["aliases"]["fast"] == "openai/gpt-5.2-mini"
        assert data["warning"] is None


class TestToolEndpoint:
    async def test_tool_list(self, client):
        resp = await client.post("/tools/switch_model", json={"action": "list"})
        data = resp.json()
        assert data["is_error"] is False
        assert "Available models (3):" in data["content"]

    async def test_tool_invalid_action(self, client):
        resp = await client.post("/tools/switch_model", json={"action": "explode"})
        assert resp.status_code == 200
        assert resp.json()["is_error"] is True


class TestDefaultApp:
    async def test_built_from_env(self, tmp_path, monkeypatch):
        from switchboard.server import create_default_app

        aliases = tmp_path / "aliases.json"
        aliases.write_text("not json")
        monkeypatch.delenv("SWITCHBOARD_CATALOG", raising=False)
        monkeypatch.delenv("SWITCHBOARD_PROVIDERS", raising=False)
        monkeypatch.setenv("SWITCHBOARD_ALIASES", str(aliases))
        monkeypatch.setenv("SWITCHBOARD_STATE", str(tmp_path / "state.json"))

        transport = ASGITransport(app=create_default_app())
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.get("/models")
        assert resp.status_code == 200
        assert "Could not load model aliases" in resp.json()["warning"]
