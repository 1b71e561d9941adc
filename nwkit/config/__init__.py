"""
Configuration management for nwkit.

Reads nwkit.yaml into an NwKitConfig used as defaults by the CLI.
"""

from nwkit.config.parser import (
    NwKitConfig,
    parse_config,
    load_config,
    DEFAULT_CONFIG_NAME,
)
from nwkit.core.exceptions import ConfigError

__all__ = [
    "NwKitConfig",
    "parse_config",
    "load_config",
    "DEFAULT_CONFIG_NAME",
    "ConfigError",
]
