"""Model resolution and the switch_model agent tool."""

from switchboard_agent.resolver import (
    AliasMatch,
    ModelListing,
    SwitchOutcome,
    SwitchStatus,
    execute_switch,
    filter_by_provider,
    list_models,
    match_model,
    resolve_alias,
    resolve_and_switch,
    search_models,
    split_ref,
)
from switchboard_agent.aliases import AliasConfig, load_aliases, parse_aliases
from switchboard_agent.host import InMemoryHost, ModelHost, StateFileHost
from switchboard_agent.tools.formatting import format_listing, format_listings, format_outcome
from switchboard_agent.tools.switch_model import make_switch_model_tool, run_switch_model
