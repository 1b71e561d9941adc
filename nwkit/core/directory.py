"""
Directory locations for nwkit.

Global Cache (~/.nwkit/ or %USERPROFILE%\\.nwkit\\):
    - cache/            : Extracted NW.js binaries and transient archives
      - .locks/         : Per-archive lock files
"""

import os
from pathlib import Path

from nwkit.core.exceptions import NwKitError


class DirectoryError(NwKitError):
    """Base exception for directory-related errors."""

    pass


def get_global_dir() -> Path:
    """
    Get the platform-specific global nwkit directory.

    Returns:
        Path: The global directory path.
            - Windows: %USERPROFILE%\\.nwkit
            - Linux/macOS: ~/.nwkit/

    Raises:
        DirectoryError: If USERPROFILE is unset on Windows
    """
    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global cache directory."
            )
        return Path(user_profile) / ".nwkit"
    else:
        return Path.home() / ".nwkit"


def get_global_cache_dir() -> Path:
    """
    Get the default cache root for downloaded binaries.

    Example:
        >>> get_global_cache_dir()
        PosixPath('/home/user/.nwkit/cache')
    """
    return get_global_dir() / "cache"
