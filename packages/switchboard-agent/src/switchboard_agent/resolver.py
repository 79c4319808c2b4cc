"""Model resolution: provider filter, listing, search, aliases and switching.

Every function here is a pure computation over the catalog snapshot it is
given, except ``execute_switch`` which awaits the injected activation
capability exactly once.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Sequence

from switchboard_llm.catalog import ModelCost, ModelInfo, providers
from switchboard_llm.errors import (
    ActivationFailedError,
    AliasUnavailableError,
    AmbiguousModelError,
    MissingSearchTermError,
    ModelNotFoundError,
    ProviderNotFoundError,
)

logger = logging.getLogger(__name__)

AliasValue = str | Sequence[str]
AliasTable = Mapping[str, AliasValue]
Activate = Callable[[ModelInfo], Awaitable[bool] | bool]


class SwitchStatus(str, Enum):
    SWITCHED = "switched"
    ALREADY_ACTIVE = "already_active"


@dataclass(frozen=True)
class SwitchOutcome:
    status: SwitchStatus
    model: ModelInfo
    via_alias: str | None = None

    @property
    def switched(self) -> bool:
        return self.status == SwitchStatus.SWITCHED


@dataclass(frozen=True)
class ModelListing:
    """Projection of a model for display."""

    model: ModelInfo
    is_current: bool = False
    capabilities: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ref(self) -> str:
        return self.model.ref

    @property
    def name(self) -> str:
        return self.model.name

    @property
    def context_window(self) -> int:
        return self.model.context_window

    @property
    def max_tokens(self) -> int:
        return self.model.max_tokens

    @property
    def cost(self) -> ModelCost:
        return self.model.cost


@dataclass(frozen=True)
class AliasMatch:
    alias: str
    model: ModelInfo


def filter_by_provider(models: Sequence[ModelInfo], provider: str | None) -> list[ModelInfo]:
    """Keep models of ``provider`` (case-insensitive). No provider keeps all."""
    if not provider:
        return list(models)
    wanted = provider.lower()
    filtered = [m for m in models if m.provider.lower() == wanted]
    if not filtered:
        raise ProviderNotFoundError(provider, providers(models))
    return filtered


def list_models(models: Sequence[ModelInfo], current: ModelInfo | None = None) -> list[ModelListing]:
    return [
        ModelListing(
            model=m,
            is_current=m.same_as(current),
            capabilities=tuple(m.capabilities()),
        )
        for m in models
    ]


def _normalize_term(term: str | None, action: str) -> str:
    if term is None or not term.strip():
        raise MissingSearchTermError(action)
    return term.lower()


def _matches(model: ModelInfo, term: str) -> bool:
    return (
        term in model.id.lower()
        or term in model.name.lower()
        or term in model.provider.lower()
    )


def search_models(models: Sequence[ModelInfo], term: str | None) -> list[ModelInfo]:
    """Models whose id, name or provider contains ``term``, in catalog order."""
    needle = _normalize_term(term, "search")
    return [m for m in models if _matches(m, needle)]


def split_ref(ref: str) -> tuple[str, str]:
    """Split "provider/id" on the first slash. Ids may contain slashes."""
    provider, sep, model_id = ref.strip().partition("/")
    if not sep:
        return "", provider
    return provider, model_id


def _alias_candidates(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def resolve_alias(
    aliases: AliasTable | None,
    key: str | None,
    models: Sequence[ModelInfo],
) -> AliasMatch | None:
    """Resolve ``key`` through the alias table.

    Returns None when ``key`` is not an alias. Otherwise walks the alias
    chain and returns the first candidate present in ``models``; raises
    AliasUnavailableError when none of them is.
    """
    if not aliases or not key:
        return None
    wanted = key.strip().lower()
    name = None
    for alias in aliases:
        if alias.lower() == wanted:
            name = alias
            break
    if name is None:
        return None

    candidates = _alias_candidates(aliases[name])
    for ref in candidates:
        provider, model_id = split_ref(ref)
        if not provider:
            logger.debug("Alias %s: skipping unqualified reference %r", name, ref)
            continue
        target = (provider.lower(), model_id.lower())
        for m in models:
            if m.key == target:
                logger.debug("Alias %s resolved to %s", name, m.ref)
                return AliasMatch(alias=name, model=m)
        logger.debug("Alias %s: %s not in catalog", name, ref)
    raise AliasUnavailableError(name, candidates)


def match_model(models: Sequence[ModelInfo], term: str | None) -> ModelInfo:
    """Resolve ``term`` to exactly one model.

    Tiers, first hit wins: exact "provider/id", exact id, then substring
    over id, name or provider. A substring tier with several candidates, or
    an exact id shared by several providers, is ambiguous.
    """
    needle = _normalize_term(term, "switch")
    original = term or ""

    for m in models:
        if m.ref.lower() == needle:
            logger.debug("Matched %s on provider/id", m.ref)
            return m

    by_id = [m for m in models if m.id.lower() == needle]
    if len(by_id) == 1:
        logger.debug("Matched %s on id", by_id[0].ref)
        return by_id[0]
    if len(by_id) > 1:
        raise AmbiguousModelError(original, [m.ref for m in by_id])

    candidates = [m for m in models if _matches(m, needle)]
    if len(candidates) == 1:
        logger.debug("Matched %s on substring", candidates[0].ref)
        return candidates[0]
    if candidates:
        raise AmbiguousModelError(original, [m.ref for m in candidates])
    raise ModelNotFoundError(original)


async def execute_switch(
    model: ModelInfo,
    current: ModelInfo | None,
    activate: Activate,
    *,
    via_alias: str | None = None,
) -> SwitchOutcome:
    """Activate ``model`` unless it is already the current model."""
    if model.same_as(current):
        return SwitchOutcome(SwitchStatus.ALREADY_ACTIVE, model, via_alias)

    try:
        result = activate(model)
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        logger.warning("Activation of %s raised: %s", model.ref, e)
        raise ActivationFailedError(model.ref, cause=e) from e

    if not result:
        logger.warning("Activation of %s was refused", model.ref)
        raise ActivationFailedError(model.ref)

    logger.info("Switched active model to %s", model.ref)
    return SwitchOutcome(SwitchStatus.SWITCHED, model, via_alias)


async def resolve_and_switch(
    models: Sequence[ModelInfo],
    term: str | None,
    current: ModelInfo | None,
    activate: Activate,
    aliases: AliasTable | None = None,
) -> SwitchOutcome:
    """Alias lookup, then direct matching, then the switch itself."""
    _normalize_term(term, "switch")
    alias_match = resolve_alias(aliases, term, models)
    if alias_match is not None:
        return await execute_switch(
            alias_match.model, current, activate, via_alias=alias_match.alias
        )
    model = match_model(models, term)
    return await execute_switch(model, current, activate)
