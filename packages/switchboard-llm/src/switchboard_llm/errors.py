"""Error hierarchy for model selection."""

from __future__ import annotations


class SwitchError(Exception):
    """Base error for all model selection failures."""

    kind = "switch_error"

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class CatalogError(SwitchError):
    """A catalog record failed validation at the boundary."""

    kind = "catalog_error"


# Lookup failures

class ProviderNotFoundError(SwitchError):
    kind = "provider_not_found"

    def __init__(self, provider: str, available: list[str]):
        self.provider = provider
        self.available = list(available)
        listed = ", ".join(self.available) if self.available else "(none)"
        super().__init__(
            f'No models available for provider "{provider}". '
            f"Available providers: {listed}"
        )


class ModelNotFoundError(SwitchError):
    kind = "model_not_found"

    def __init__(self, term: str):
        self.term = term
        super().__init__(f'No model found matching "{term}"')


class AmbiguousModelError(SwitchError):
    kind = "ambiguous"

    def __init__(self, term: str, candidates: list[str]):
        self.term = term
        self.candidates = list(candidates)
        listing = "\n".join(f"  {c}" for c in self.candidates)
        super().__init__(
            f'Multiple models match "{term}":\n{listing}\n\nBe more specific.'
        )


class AliasUnavailableError(SwitchError):
    kind = "alias_unavailable"

    def __init__(self, alias: str, candidates: list[str]):
        self.alias = alias
        self.candidates = list(candidates)
        tried = ", ".join(self.candidates) if self.candidates else "(empty)"
        super().__init__(
            f'Alias "{alias}" has no available model. Tried: {tried}'
        )


# Request failures

class MissingSearchTermError(SwitchError):
    kind = "missing_search_term"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"search parameter required for {action} action")


class InvalidActionError(SwitchError):
    kind = "invalid_action"

    def __init__(self, action: str | None):
        self.action = action
        super().__init__('Invalid action. Use "list", "search", or "switch".')


# Collaborator failures

class ActivationFailedError(SwitchError):
    kind = "activation_failed"

    def __init__(self, model_ref: str, *, cause: Exception | None = None):
        self.model_ref = model_ref
        reason = f"{cause}" if cause is not None else "no API key configured"
        super().__init__(f"Failed to switch to {model_ref} - {reason}", cause=cause)


class ConfigLoadError(SwitchError):
    kind = "config_load_failed"

    def __init__(self, path: str, detail: str, *, cause: Exception | None = None):
        self.path = path
        self.detail = detail
        super().__init__(
            f"Could not load model aliases from {path}: {detail}", cause=cause
        )
