"""Tests for host bindings."""

import json

import pytest

from switchboard_agent.host import InMemoryHost, ModelHost, StateFileHost
from switchboard_agent.tools.switch_model import run_switch_model
from switchboard_llm.catalog import ModelInfo


def make_model(provider: str, id: str) -> ModelInfo:
    return ModelInfo(provider=provider, id=id, name=id, context_window=1000, max_tokens=100)


OPUS = make_model("anthropic", "claude-opus-4-5")
GPT = make_model("openai", "gpt-5.2")


class TestInMemoryHost:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryHost([]), ModelHost)

    def test_snapshot_is_a_copy(self):
        host = InMemoryHost([OPUS])
        host.available_models().append(GPT)
        assert host.available_models() == [OPUS]

    async def test_set_model(self):
        host = InMemoryHost([OPUS, GPT], current=OPUS)
        assert await host.set_model(GPT)
        assert host.current_model() is GPT
        assert host.activations == [GPT]

    async def test_missing_credentials(self):
        host = InMemoryHost([OPUS, GPT], current=OPUS, credentialed=["Anthropic"])
        assert not await host.set_model(GPT)
        assert host.current_model() is OPUS


class TestStateFileHost:
    async def test_persists_and_restores(self, tmp_path):
        state = tmp_path / "state" / "state.json"
        host = StateFileHost([OPUS, GPT], state_path=str(state))
        assert host.current_model() is None
        assert await host.set_model(GPT)
        assert json.loads(state.read_text()) == {"model": "openai/gpt-5.2"}

        restored = StateFileHost([OPUS, GPT], state_path=str(state))
        assert restored.current_model() is GPT

    async def test_refused_does_not_write(self, tmp_path):
        state = tmp_path / "state.json"
        host = StateFileHost([OPUS, GPT], state_path=str(state), credentialed=[])
        assert not await host.set_model(GPT)
        assert not state.exists()

    def test_unknown_model_in_state(self, tmp_path):
        state = tmp_path / "state.json"
        state.write_text(json.dumps({"model": "google/gemini-2.5-pro"}))
        assert StateFileHost([OPUS], state_path=str(state)).current_model() is None

    def test_corrupt_state(self, tmp_path):
        state = tmp_path / "state.json"
        state.write_text("not json")
        assert StateFileHost([OPUS], state_path=str(state)).current_model() is None

    async def test_failed_write_keeps_previous_model(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        host = StateFileHost([OPUS, GPT], state_path=str(blocker / "state.json"))
        host._current = OPUS
        with pytest.raises(OSError):
            await host.set_model(GPT)
        assert host.current_model() is OPUS

    async def test_failed_write_reported_by_tool(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        host = StateFileHost([OPUS, GPT], state_path=str(blocker / "state.json"))
        result = await run_switch_model(host, "switch", search="gpt-5.2")
        assert result.is_error
        assert host.current_model() is None

    def test_non_string_model_in_state(self, tmp_path):
        state = tmp_path / "state.json"
        state.write_text(json.dumps({"model": 3}))
        assert StateFileHost([OPUS], state_path=str(state)).current_model() is None
