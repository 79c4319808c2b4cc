"""Text rendering for model listings."""

from __future__ import annotations

from typing import Sequence

from switchboard_agent.resolver import ModelListing, SwitchOutcome, SwitchStatus

NO_MODELS_TEXT = (
    "No models available. Configure API keys for the providers you want to use."
)


def format_cost(listing: ModelListing) -> str:
    return (
        f"${listing.cost.input:.2f}/${listing.cost.output:.2f} "
        "per 1M tokens (in/out)"
    )


def format_listing(listing: ModelListing) -> str:
    marker = " (current)" if listing.is_current else ""
    caps = f" [{', '.join(listing.capabilities)}]" if listing.capabilities else ""
    return (
        f"{listing.ref}{marker}{caps}\n"
        f"  {listing.name} | ctx: {listing.context_window:,} | max: {listing.max_tokens:,}\n"
        f"  {format_cost(listing)}"
    )


def format_listings(header: str, listings: Sequence[ModelListing]) -> str:
    blocks = "\n\n".join(format_listing(item) for item in listings)
    return f"{header} ({len(listings)}):\n\n{blocks}"


def format_outcome(outcome: SwitchOutcome) -> str:
    model = outcome.model
    via = f' via alias "{outcome.via_alias}"' if outcome.via_alias else ""
    if outcome.status == SwitchStatus.ALREADY_ACTIVE:
        return f"Already using {model.ref}{via}"
    return f"Switched to {model.ref} ({model.name}){via}"
