"""Switchboard: model selection for agent runtimes."""

from switchboard.config import SwitchboardConfig, build_host, load_alias_config, load_models
