"""Alias file loading.

The alias file is a JSON object mapping a short name to either one
"provider/id" reference or an ordered fallback chain of them::

    {
        "cheap": "google/gemini-2.5-flash",
        "budget": ["openai/gpt-5-mini", "anthropic/claude-haiku-4-5"]
    }

Loading never raises. A malformed file yields an empty table and a warning
that is surfaced on the next listing.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from pydantic import TypeAdapter, ValidationError

from switchboard_llm.errors import ConfigLoadError

logger = logging.getLogger(__name__)

_ALIAS_TABLE = TypeAdapter(dict[str, str | list[str]])


@dataclass(frozen=True)
class AliasConfig:
    aliases: Mapping[str, str | tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source: str | None = None
    warning: str | None = None

    @classmethod
    def from_mapping(cls, aliases: Mapping[str, str | list[str]], source: str | None = None) -> AliasConfig:
        frozen = {
            name: value if isinstance(value, str) else tuple(value)
            for name, value in aliases.items()
        }
        return cls(aliases=MappingProxyType(frozen), source=source)

    def __len__(self) -> int:
        return len(self.aliases)

    def __contains__(self, name: str) -> bool:
        wanted = name.lower()
        return any(a.lower() == wanted for a in self.aliases)


def parse_aliases(text: str, source: str = "<string>") -> AliasConfig:
    """Parse alias JSON. Raises ConfigLoadError on malformed input."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(source, f"invalid JSON ({e.msg} at line {e.lineno})", cause=e)
    try:
        table = _ALIAS_TABLE.validate_python(data, strict=True)
    except ValidationError as e:
        raise ConfigLoadError(
            source,
            'expected an object mapping names to "provider/id" or a list of them',
            cause=e,
        )
    return AliasConfig.from_mapping(table, source=source)


def load_aliases(path: str | None) -> AliasConfig:
    """Load the alias file at ``path``.

    A missing path or file is not an error. Unreadable or malformed files
    produce an empty config carrying a warning.
    """
    if not path or not os.path.exists(path):
        return AliasConfig(source=path)
    try:
        with open(path) as f:
            text = f.read()
        config = parse_aliases(text, source=path)
    except OSError as e:
        error = ConfigLoadError(path, str(e), cause=e)
        logger.warning("%s", error)
        return AliasConfig(source=path, warning=str(error))
    except ConfigLoadError as e:
        logger.warning("%s", e)
        return AliasConfig(source=path, warning=str(e))
    logger.debug("Loaded %d model aliases from %s", len(config), path)
    return config
