"""
Shared utilities for CLI commands.

Merges nwkit.yaml settings with command-line flags and builds the
acquisition request every binary command works from.
"""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from nwkit.binary.downloader import BinaryDownloader
from nwkit.binary.models import AcquisitionRequest
from nwkit.config.parser import NwKitConfig, load_config
from nwkit.core.directory import get_global_cache_dir
from nwkit.core.download import HttpClient
from nwkit.core.platform import detect_host

logger = logging.getLogger(__name__)

# Flag attribute on the argparse namespace -> NwKitConfig field
_FLAG_FIELDS = {
    "nw_version": "version",
    "flavor": "flavor",
    "platform": "platform",
    "architecture": "architecture",
    "cache_dir": "cache_dir",
    "base_url": "base_url",
    "manifest_url": "manifest_url",
    "timeout": "timeout",
    "lock_timeout": "lock_timeout",
}


# ============================================================================
# Configuration Management
# ============================================================================


def load_settings(args) -> NwKitConfig:
    """
    Load nwkit.yaml and apply command-line overrides.

    Flags that were not given (None) leave the file value in place.

    Args:
        args: Parsed command-line arguments

    Returns:
        Effective configuration

    Raises:
        ConfigError: If the configuration file is missing or invalid
    """
    config = load_config(getattr(args, "config", None))

    overrides = {}
    for attr, field_name in _FLAG_FIELDS.items():
        value = getattr(args, attr, None)
        if value is not None:
            overrides[field_name] = value

    if overrides:
        logger.debug(f"Command-line overrides: {overrides}")
        config = dataclasses.replace(config, **overrides)
    return config


def resolve_cache_dir(config: NwKitConfig) -> Path:
    """Return the configured cache directory or the global default."""
    if config.cache_dir is not None:
        return Path(config.cache_dir)
    return get_global_cache_dir()


def build_request(config: NwKitConfig) -> AcquisitionRequest:
    """
    Build an acquisition request, filling platform and arch from the host.

    Raises:
        InvalidRequestError: If a field is invalid or the host is unsupported
    """
    platform = config.platform
    architecture = config.architecture
    if platform is None or architecture is None:
        host = detect_host()
        platform = platform or host.platform
        architecture = architecture or host.architecture

    return AcquisitionRequest(
        version=config.version,
        platform=platform,
        architecture=architecture,
        cache_dir=resolve_cache_dir(config),
        flavor=config.flavor,
        base_url=config.base_url,
    )


def create_downloader(config: NwKitConfig) -> BinaryDownloader:
    """Create a downloader honoring the configured timeouts and manifest."""
    return BinaryDownloader(
        client=HttpClient(timeout=config.timeout),
        manifest_url=config.manifest_url,
        lock_timeout=config.lock_timeout,
    )


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)
