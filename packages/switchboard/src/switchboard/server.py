"""HTTP server exposing model listing and switching."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from switchboard.config import SwitchboardConfig, build_host, load_alias_config
from switchboard_agent.aliases import AliasConfig
from switchboard_agent.host import ModelHost
from switchboard_agent.resolver import (
    ModelListing,
    filter_by_provider,
    list_models,
    resolve_and_switch,
    search_models,
)
from switchboard_agent.tools.formatting import format_outcome
from switchboard_agent.tools.switch_model import run_switch_model
from switchboard_llm.errors import (
    ActivationFailedError,
    AliasUnavailableError,
    AmbiguousModelError,
    InvalidActionError,
    MissingSearchTermError,
    ModelNotFoundError,
    ProviderNotFoundError,
    SwitchError,
)

_STATUS_CODES: dict[type[SwitchError], int] = {
    MissingSearchTermError: 400,
    InvalidActionError: 400,
    ProviderNotFoundError: 404,
    ModelNotFoundError: 404,
    AliasUnavailableError: 404,
    AmbiguousModelError: 409,
    ActivationFailedError: 424,
}


class SwitchRequest(BaseModel):
    search: str
    provider: str | None = None


class ToolCall(BaseModel):
    action: str
    search: str | None = None
    provider: str | None = None


def _http_error(error: SwitchError) -> HTTPException:
    status = _STATUS_CODES.get(type(error), 400)
    return HTTPException(status_code=status, detail={"kind": error.kind, "message": str(error)})


def _listing_json(listing: ModelListing) -> dict[str, Any]:
    model = listing.model
    return {
        "provider": model.provider,
        "id": model.id,
        "ref": model.ref,
        "name": model.name,
        "context_window": model.context_window,
        "max_tokens": model.max_tokens,
        "capabilities": list(listing.capabilities),
        "cost": {"input": model.cost.input, "output": model.cost.output},
        "current": listing.is_current,
    }


def create_app(host: ModelHost, aliases: AliasConfig | None = None) -> FastAPI:
    """Build the app around a host and an alias config loaded at start-up."""
    aliases = aliases or AliasConfig()
    app = FastAPI(title="Switchboard Model Server")

    @app.get("/models")
    async def get_models(provider: str | None = None):
        """List available models."""
        try:
            models = filter_by_provider(host.available_models(), provider)
        except SwitchError as e:
            raise _http_error(e)
        listings = list_models(models, host.current_model())
        result: dict[str, Any] = {"models": [_listing_json(item) for item in listings]}
        if aliases.warning:
            result["warning"] = aliases.warning
        return result

    @app.get("/models/search")
    async def get_search(q: str = "", provider: str | None = None):
        """Search models by provider, id, or name."""
        try:
            models = filter_by_provider(host.available_models(), provider)
            matches = search_models(models, q)
        except SwitchError as e:
            raise _http_error(e)
        listings = list_models(matches, host.current_model())
        return {"query": q, "models": [_listing_json(item) for item in listings]}

    @app.post("/models/switch")
    async def post_switch(request: SwitchRequest):
        """Switch the active model."""
        try:
            models = filter_by_provider(host.available_models(), request.provider)
            outcome = await resolve_and_switch(
                models, request.search, host.current_model(), host.set_model, aliases.aliases
            )
        except SwitchError as e:
            raise _http_error(e)
        return {
            "status": outcome.status.value,
            "model": outcome.model.ref,
            "alias": outcome.via_alias,
            "message": format_outcome(outcome),
        }

    @app.get("/aliases")
    async def get_aliases():
        """Show the alias table loaded at start-up."""
        table = {
            name: value if isinstance(value, str) else list(value)
            for name, value in aliases.aliases.items()
        }
        return {"aliases": table, "source": aliases.source, "warning": aliases.warning}

    @app.post("/tools/switch_model")
    async def post_tool_call(call: ToolCall):
        """Run the switch_model tool and return its text result."""
        result = await run_switch_model(host, call.action, call.search, call.provider, aliases)
        return {"content": result.content, "is_error": result.is_error}

    return app


def create_default_app() -> FastAPI:
    config = SwitchboardConfig.from_env()
    return create_app(build_host(config), load_alias_config(config))
