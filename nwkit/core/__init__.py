"""
Core functionality for nwkit.

This package contains the foundational modules the acquisition pipeline
depends on: HTTP access, archive expansion, locking, directories and errors.
"""

from .directory import (
    get_global_dir,
    get_global_cache_dir,
    DirectoryError,
)

from .download import (
    HttpClient,
    DownloadProgress,
    format_progress,
)

from .interfaces import FetchCapability

from .locking import (
    LockManager,
    LockTimeout,
)

from .platform import (
    HostPlatform,
    detect_host,
    normalize_platform,
    normalize_architecture,
    SUPPORTED_PLATFORMS,
    SUPPORTED_ARCHITECTURES,
)

from .exceptions import (
    NwKitError,
    InvalidRequestError,
    ConfigError,
    AcquisitionError,
    ResolutionError,
    FetchError,
    ExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
    CleanupWarning,
)

__all__ = [
    # Directory
    "get_global_dir",
    "get_global_cache_dir",
    "DirectoryError",
    # Download
    "HttpClient",
    "DownloadProgress",
    "format_progress",
    "FetchCapability",
    # Locking
    "LockManager",
    "LockTimeout",
    # Platform
    "HostPlatform",
    "detect_host",
    "normalize_platform",
    "normalize_architecture",
    "SUPPORTED_PLATFORMS",
    "SUPPORTED_ARCHITECTURES",
    # Exceptions
    "NwKitError",
    "InvalidRequestError",
    "ConfigError",
    "AcquisitionError",
    "ResolutionError",
    "FetchError",
    "ExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "CleanupWarning",
]
