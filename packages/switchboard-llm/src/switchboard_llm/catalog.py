"""Model catalog: typed model records and catalog validation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from switchboard_llm.errors import CatalogError

# Input modalities that count as vision support.
IMAGE_MODALITIES = frozenset({"image"})


@dataclass(frozen=True)
class ModelCost:
    input: float = 0.0
    output: float = 0.0


@dataclass(frozen=True)
class ModelInfo:
    provider: str
    id: str
    name: str
    context_window: int
    max_tokens: int
    reasoning: bool = False
    input: frozenset[str] = field(default_factory=lambda: frozenset({"text"}))
    cost: ModelCost = field(default_factory=ModelCost)

    @property
    def ref(self) -> str:
        """The "provider/id" reference for this model."""
        return f"{self.provider}/{self.id}"

    @property
    def key(self) -> tuple[str, str]:
        return (self.provider.lower(), self.id.lower())

    @property
    def supports_vision(self) -> bool:
        return bool(self.input & IMAGE_MODALITIES)

    def same_as(self, other: ModelInfo | None) -> bool:
        """True when ``other`` has the same provider and id (case-insensitive)."""
        return other is not None and self.key == other.key

    def capabilities(self) -> list[str]:
        caps = []
        if self.reasoning:
            caps.append("reasoning")
        if self.supports_vision:
            caps.append("vision")
        return caps


class CostEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    input: float = Field(default=0.0, ge=0)
    output: float = Field(default=0.0, ge=0)


class CatalogEntry(BaseModel):
    """Raw catalog record as supplied by a registry (snake or camel case)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    provider: str = Field(min_length=1)
    id: str = Field(min_length=1)
    name: str = ""
    context_window: int = Field(default=0, ge=0, alias="contextWindow")
    max_tokens: int = Field(default=0, ge=0, alias="maxTokens")
    reasoning: bool = False
    input: list[str] = Field(default_factory=lambda: ["text"])
    cost: CostEntry = Field(default_factory=CostEntry)

    def to_model(self) -> ModelInfo:
        return ModelInfo(
            provider=self.provider,
            id=self.id,
            name=self.name or self.id,
            context_window=self.context_window,
            max_tokens=self.max_tokens,
            reasoning=self.reasoning,
            input=frozenset(m.lower() for m in self.input),
            cost=ModelCost(input=self.cost.input, output=self.cost.output),
        )


def catalog_from_records(records: Iterable[dict[str, Any]]) -> list[ModelInfo]:
    """Validate raw records and convert them to ModelInfo, preserving order."""
    models = []
    for index, record in enumerate(records):
        try:
            entry = CatalogEntry.model_validate(record)
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog entry #{index}: {e}", cause=e)
        models.append(entry.to_model())
    return models


def load_catalog(path: str) -> list[ModelInfo]:
    """Load a catalog from a JSON file.

    Accepts either a top-level array of records or an object with a
    ``models`` array.
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog {path}: {e}", cause=e)
    if isinstance(data, dict):
        data = data.get("models", [])
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of models")
    return catalog_from_records(data)


def providers(models: Iterable[ModelInfo]) -> list[str]:
    """Distinct providers in first-seen order."""
    seen: dict[str, None] = {}
    for m in models:
        seen.setdefault(m.provider, None)
    return list(seen)


# Catalog ordered by provider, newest first within each provider.
BUILTIN_MODELS: list[ModelInfo] = [
    # Anthropic
    ModelInfo(
        provider="anthropic",
        id="claude-opus-4-5",
        name="Claude Opus 4.5",
        context_window=200_000,
        max_tokens=64_000,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=5.0, output=25.0),
    ),
    ModelInfo(
        provider="anthropic",
        id="claude-sonnet-4-5",
        name="Claude Sonnet 4.5",
        context_window=200_000,
        max_tokens=64_000,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=3.0, output=15.0),
    ),
    ModelInfo(
        provider="anthropic",
        id="claude-haiku-4-5",
        name="Claude Haiku 4.5",
        context_window=200_000,
        max_tokens=64_000,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=1.0, output=5.0),
    ),
    # OpenAI
    ModelInfo(
        provider="openai",
        id="gpt-5.2",
        name="GPT-5.2",
        context_window=400_000,
        max_tokens=128_000,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=1.75, output=14.0),
    ),
    ModelInfo(
        provider="openai",
        id="gpt-5.2-codex",
        name="GPT-5.2 Codex",
        context_window=400_000,
        max_tokens=128_000,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=1.75, output=14.0),
    ),
    ModelInfo(
        provider="openai",
        id="gpt-5-mini",
        name="GPT-5 Mini",
        context_window=400_000,
        max_tokens=128_000,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=0.25, output=2.0),
    ),
    # Google
    ModelInfo(
        provider="google",
        id="gemini-2.5-pro",
        name="Gemini 2.5 Pro",
        context_window=1_048_576,
        max_tokens=65_536,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=1.25, output=10.0),
    ),
    ModelInfo(
        provider="google",
        id="gemini-2.5-flash",
        name="Gemini 2.5 Flash",
        context_window=1_048_576,
        max_tokens=65_536,
        reasoning=True,
        input=frozenset({"text", "image"}),
        cost=ModelCost(input=0.3, output=2.5),
    ),
]


def get_model_info(ref: str, models: Iterable[ModelInfo] | None = None) -> ModelInfo | None:
    """Look up a model by "provider/id" or bare id. Returns None if unknown."""
    pool = list(BUILTIN_MODELS if models is None else models)
    wanted = ref.lower()
    for m in pool:
        if m.ref.lower() == wanted:
            return m
    for m in pool:
        if m.id.lower() == wanted:
            return m
    return None
