"""CLI entry point for Switchboard."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from switchboard.config import SwitchboardConfig, build_host, load_alias_config
from switchboard_agent.resolver import split_ref
from switchboard_agent.tools.switch_model import run_switch_model
from switchboard_llm.errors import CatalogError
from switchboard_llm.types import ToolResult


@click.group()
@click.option("--catalog", default="", help="Catalog JSON file (default: built-in catalog)")
@click.option("--aliases", "aliases_path", default="", help="Alias JSON file")
@click.option("--state", "state_path", default="", help="File that remembers the active model")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, catalog: str, aliases_path: str, state_path: str, verbose: bool):
    """Switchboard: list, search and switch the active model."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = SwitchboardConfig.from_env().with_overrides(
        catalog_path=catalog, aliases_path=aliases_path, state_path=state_path
    )


def _run(config: SwitchboardConfig, action: str, search: str | None, provider: str | None) -> None:
    try:
        host = build_host(config)
    except CatalogError as e:
        click.echo(f"Catalog error: {e}", err=True)
        sys.exit(1)
    aliases = load_alias_config(config)
    result: ToolResult = asyncio.run(
        run_switch_model(host, action, search, provider or None, aliases)
    )
    if result.is_error:
        click.echo(result.content, err=True)
        sys.exit(1)
    click.echo(result.content)


@main.command("list")
@click.option("--provider", default="", help="Only show models from this provider")
@click.pass_obj
def list_cmd(config: SwitchboardConfig, provider: str):
    """List available models."""
    _run(config, "list", None, provider)


@main.command()
@click.argument("term")
@click.option("--provider", default="", help="Only search this provider")
@click.pass_obj
def search(config: SwitchboardConfig, term: str, provider: str):
    """Search models by provider, id, or name."""
    _run(config, "search", term, provider)


@main.command()
@click.argument("term")
@click.option("--provider", default="", help="Only consider this provider")
@click.pass_obj
def switch(config: SwitchboardConfig, term: str, provider: str):
    """Switch the active model by alias, provider/id, id, or partial name."""
    _run(config, "switch", term, provider)


@main.command("aliases")
@click.pass_obj
def aliases_cmd(config: SwitchboardConfig):
    """Show configured aliases and whether each resolves."""
    aliases = load_alias_config(config)
    if aliases.warning:
        click.echo(f"WARN  {aliases.warning}", err=True)
    if not aliases.aliases:
        click.echo("No aliases configured.")
        return
    try:
        known = {m.key for m in build_host(config).available_models()}
    except CatalogError as e:
        click.echo(f"Catalog error: {e}", err=True)
        sys.exit(1)
    for name, value in aliases.aliases.items():
        chain = [value] if isinstance(value, str) else list(value)
        marks = []
        for ref in chain:
            provider, model_id = split_ref(ref)
            ok = (provider.lower(), model_id.lower()) in known
            marks.append(f"{ref}{'' if ok else ' (unavailable)'}")
        click.echo(f"{name} -> {', '.join(marks) if marks else '(empty)'}")


if __name__ == "__main__":
    main()
