"""YAML configuration parser for nwkit.

This module provides parsing and validation for nwkit.yaml configuration files.

Example nwkit.yaml::

    version: stable
    flavor: sdk
    platform: win
    architecture: x64
    cache_dir: .nwkit-cache
    timeout: 120
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from nwkit.binary.models import DEFAULT_BASE_URL
from nwkit.core.exceptions import ConfigError

DEFAULT_CONFIG_NAME = "nwkit.yaml"


@dataclass
class NwKitConfig:
    """Acquisition settings read from nwkit.yaml."""

    version: str = "latest"
    flavor: str = "normal"
    platform: Optional[str] = None  # host platform when unset
    architecture: Optional[str] = None  # host architecture when unset
    cache_dir: Optional[Path] = None  # global cache when unset
    base_url: str = DEFAULT_BASE_URL
    manifest_url: Optional[str] = None
    timeout: Optional[float] = 60
    lock_timeout: Optional[float] = 600


_STRING_FIELDS = (
    "version",
    "flavor",
    "platform",
    "architecture",
    "base_url",
    "manifest_url",
)
_NUMBER_FIELDS = ("timeout", "lock_timeout")


def parse_config(config_path: Path) -> NwKitConfig:
    """
    Parse nwkit.yaml configuration file.

    Args:
        config_path: Path to nwkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        return NwKitConfig()

    return _parse_and_validate(data, base_dir=config_path.parent)


def load_config(
    config_path: Optional[Path] = None, search_dir: Optional[Path] = None
) -> NwKitConfig:
    """
    Load configuration from an explicit file or the default location.

    An explicit path must exist. Without one, ``nwkit.yaml`` in
    ``search_dir`` (default: current directory) is used when present,
    and built-in defaults otherwise.

    Raises:
        ConfigError: If the file is missing (explicit path only) or invalid
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    default_path = Path(search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
    if default_path.exists():
        return parse_config(default_path)
    return NwKitConfig()


def _parse_and_validate(data: Any, base_dir: Path) -> NwKitConfig:
    """Validate raw YAML data and build NwKitConfig."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    known = {f.name for f in fields(NwKitConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values: Dict[str, Any] = {}

    for key in _STRING_FIELDS:
        if key in data and data[key] is not None:
            value = data[key]
            # YAML reads 0.50 as the float 0.5
            if (
                key == "version"
                and isinstance(value, (int, float))
                and not isinstance(value, bool)
            ):
                raise ConfigError(
                    f"'version' was read as the number {value!r}; "
                    "quote it in the config file"
                )
            if not isinstance(value, str):
                raise ConfigError(
                    f"'{key}' must be a string, got {type(value).__name__}"
                )
            values[key] = value

    for key in _NUMBER_FIELDS:
        if key in data:
            value = data[key]
            if value is not None and (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or value <= 0
            ):
                raise ConfigError(f"'{key}' must be a positive number or null")
            values[key] = value

    if data.get("cache_dir") is not None:
        if not isinstance(data["cache_dir"], str):
            raise ConfigError("'cache_dir' must be a string")
        cache_dir = Path(data["cache_dir"]).expanduser()
        # Relative cache paths are relative to the config file
        if not cache_dir.is_absolute():
            cache_dir = base_dir / cache_dir
        values["cache_dir"] = cache_dir

    return NwKitConfig(**values)
