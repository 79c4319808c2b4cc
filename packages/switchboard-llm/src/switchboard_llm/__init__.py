"""Model catalog and shared types for model selection."""

from switchboard_llm.types import ToolDefinition, ToolResult
from switchboard_llm.errors import (
    SwitchError,
    CatalogError,
    ProviderNotFoundError,
    ModelNotFoundError,
    AmbiguousModelError,
    AliasUnavailableError,
    MissingSearchTermError,
    InvalidActionError,
    ActivationFailedError,
    ConfigLoadError,
)
from switchboard_llm.catalog import (
    BUILTIN_MODELS,
    CatalogEntry,
    ModelCost,
    ModelInfo,
    catalog_from_records,
    get_model_info,
    load_catalog,
    providers,
)
