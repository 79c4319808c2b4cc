"""Host bindings: where the catalog comes from and how activation happens."""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable, Protocol, runtime_checkable

from switchboard_llm.catalog import ModelInfo
from switchboard_agent.resolver import split_ref

logger = logging.getLogger(__name__)


@runtime_checkable
class ModelHost(Protocol):
    """What the switch_model tool needs from the agent runtime."""

    def available_models(self) -> list[ModelInfo]:
        ...

    def current_model(self) -> ModelInfo | None:
        ...

    async def set_model(self, model: ModelInfo) -> bool:
        ...


class InMemoryHost:
    """Host holding a fixed catalog and the active model in memory.

    ``credentialed`` limits which providers can be activated; None means
    every provider has credentials.
    """

    def __init__(
        self,
        models: Iterable[ModelInfo],
        current: ModelInfo | None = None,
        credentialed: Iterable[str] | None = None,
    ) -> None:
        self._models = list(models)
        self._current = current
        self._credentialed = (
            None if credentialed is None else {p.lower() for p in credentialed}
        )
        self.activations: list[ModelInfo] = []

    def available_models(self) -> list[ModelInfo]:
        return list(self._models)

    def current_model(self) -> ModelInfo | None:
        return self._current

    def has_credentials(self, provider: str) -> bool:
        return self._credentialed is None or provider.lower() in self._credentialed

    async def set_model(self, model: ModelInfo) -> bool:
        self.activations.append(model)
        if not self.has_credentials(model.provider):
            return False
        self._current = model
        return True


class StateFileHost(InMemoryHost):
    """In-memory host that persists the active model to a JSON state file."""

    def __init__(
        self,
        models: Iterable[ModelInfo],
        state_path: str,
        credentialed: Iterable[str] | None = None,
    ) -> None:
        super().__init__(models, credentialed=credentialed)
        self.state_path = state_path
        self._current = self._restore()

    def _restore(self) -> ModelInfo | None:
        if not os.path.exists(self.state_path):
            return None
        try:
            with open(self.state_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.state_path, e)
            return None
        ref = data.get("model", "") if isinstance(data, dict) else ""
        if not isinstance(ref, str):
            logger.warning("Ignoring malformed state file %s", self.state_path)
            return None
        provider, model_id = split_ref(ref)
        for m in self._models:
            if m.key == (provider.lower(), model_id.lower()):
                return m
        if ref:
            logger.warning("Active model %s is no longer in the catalog", ref)
        return None

    async def set_model(self, model: ModelInfo) -> bool:
        previous = self._current
        if not await super().set_model(model):
            return False
        try:
            os.makedirs(os.path.dirname(self.state_path) or ".", exist_ok=True)
            with open(self.state_path, "w") as f:
                json.dump({"model": model.ref}, f, indent=2)
        except OSError:
            self._current = previous
            raise
        return True
