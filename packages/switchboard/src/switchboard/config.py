"""Runtime configuration and collaborator construction."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from switchboard_agent.aliases import AliasConfig, load_aliases
from switchboard_agent.host import StateFileHost
from switchboard_llm.catalog import BUILTIN_MODELS, ModelInfo, load_catalog

DEFAULT_HOME = os.path.join(os.path.expanduser("~"), ".switchboard")


@dataclass(frozen=True)
class SwitchboardConfig:
    catalog_path: str = ""  # empty = built-in catalog
    aliases_path: str = os.path.join(DEFAULT_HOME, "aliases.json")
    state_path: str = os.path.join(DEFAULT_HOME, "state.json")
    credentialed_providers: tuple[str, ...] | None = None  # None = all

    @classmethod
    def from_env(cls) -> SwitchboardConfig:
        config = cls()
        env = os.environ
        providers = env.get("SWITCHBOARD_PROVIDERS")
        return replace(
            config,
            catalog_path=env.get("SWITCHBOARD_CATALOG", config.catalog_path),
            aliases_path=env.get("SWITCHBOARD_ALIASES", config.aliases_path),
            state_path=env.get("SWITCHBOARD_STATE", config.state_path),
            credentialed_providers=(
                tuple(p.strip() for p in providers.split(",") if p.strip())
                if providers is not None
                else None
            ),
        )

    def with_overrides(self, **overrides: str | None) -> SwitchboardConfig:
        """Return a copy with every non-empty override applied."""
        changes = {k: v for k, v in overrides.items() if v}
        return replace(self, **changes)


def load_models(config: SwitchboardConfig) -> list[ModelInfo]:
    if config.catalog_path:
        return load_catalog(config.catalog_path)
    return list(BUILTIN_MODELS)


def build_host(config: SwitchboardConfig) -> StateFileHost:
    return StateFileHost(
        load_models(config),
        state_path=config.state_path,
        credentialed=config.credentialed_providers,
    )


def load_alias_config(config: SwitchboardConfig) -> AliasConfig:
    return load_aliases(config.aliases_path)
