"""The switch_model tool: list, search, or switch the active model."""

from __future__ import annotations

import logging

from switchboard_agent.aliases import AliasConfig
from switchboard_agent.host import ModelHost
from switchboard_agent.resolver import (
    filter_by_provider,
    list_models,
    resolve_and_switch,
    search_models,
)
from switchboard_agent.tools.formatting import (
    NO_MODELS_TEXT,
    format_listings,
    format_outcome,
)
from switchboard_llm.errors import InvalidActionError, SwitchError
from switchboard_llm.types import ToolDefinition, ToolResult

logger = logging.getLogger(__name__)

ACTIONS = ("list", "search", "switch")

SWITCH_MODEL_PARAMETERS = {
    "type": "object",
    "properties": {
        "action": {
            "type": "string",
            "enum": list(ACTIONS),
            "description": (
                "list: show all available models. search: filter models by query. "
                "switch: change to a different model."
            ),
        },
        "search": {
            "type": "string",
            "description": (
                "For search/switch actions: search term to match model by provider, "
                "id, name or alias (e.g. 'sonnet', 'opus', 'gpt-5.2', 'anthropic/claude')"
            ),
        },
        "provider": {
            "type": "string",
            "description": (
                "Filter to a specific provider (e.g. 'anthropic', 'openai', 'google', 'openrouter')"
            ),
        },
    },
    "required": ["action"],
}


async def run_switch_model(
    host: ModelHost,
    action: str | None,
    search: str | None = None,
    provider: str | None = None,
    aliases: AliasConfig | None = None,
) -> ToolResult:
    """Execute one switch_model request against ``host``.

    Every SwitchError is reported as an error result; nothing is raised.
    """
    aliases = aliases or AliasConfig()
    try:
        models = filter_by_provider(host.available_models(), provider)
        current = host.current_model()

        if action == "list":
            if not models:
                text = NO_MODELS_TEXT
            else:
                text = format_listings("Available models", list_models(models, current))
            if aliases.warning:
                text = f"{text}\n\nWarning: {aliases.warning}"
            return ToolResult(content=text)

        if action == "search":
            matches = search_models(models, search)
            if not matches:
                return ToolResult(content=f'No models found matching "{search}"')
            header = f'Models matching "{search}"'
            return ToolResult(content=format_listings(header, list_models(matches, current)))

        if action == "switch":
            outcome = await resolve_and_switch(
                models, search, current, host.set_model, aliases.aliases
            )
            return ToolResult(content=format_outcome(outcome))

        raise InvalidActionError(action)
    except SwitchError as e:
        logger.debug("switch_model %s failed: %s", action, e.kind)
        return ToolResult(content=str(e), is_error=True)
    except Exception as e:
        logger.exception("switch_model %s raised", action)
        return ToolResult(content=f"switch_model error: {e}", is_error=True)


def make_switch_model_tool(host: ModelHost, aliases: AliasConfig | None = None) -> ToolDefinition:
    """Create the switch_model tool bound to a host and alias config."""

    async def execute(
        action: str, search: str | None = None, provider: str | None = None
    ) -> ToolResult:
        return await run_switch_model(host, action, search, provider, aliases)

    return ToolDefinition(
        name="switch_model",
        label="Switch Model",
        description=(
            "List, search, or switch models. Use when the user asks to change models "
            "or when you need a model with different capabilities (reasoning, vision, "
            "cost, context window)."
        ),
        parameters=SWITCH_MODEL_PARAMETERS,
        execute=execute,
    )
