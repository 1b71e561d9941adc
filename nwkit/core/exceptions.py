"""
Centralized exception hierarchy for nwkit.

This module defines all custom exceptions used across the codebase so every
acquisition stage reports failures with a type that names the stage.
"""

from filelock import Timeout as LockTimeout


# ============================================================================
# Base Exceptions
# ============================================================================


class NwKitError(Exception):
    """Base exception for all nwkit errors."""

    pass


class InvalidRequestError(NwKitError, ValueError):
    """Raised when an acquisition request has an unsupported field value."""

    pass


class ConfigError(NwKitError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Acquisition Pipeline Exceptions
# ============================================================================


class AcquisitionError(NwKitError):
    """Base exception for failures of an acquisition stage."""

    pass


class ResolutionError(AcquisitionError):
    """Raised when a version alias cannot be resolved."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"Could not resolve version '{token}': {reason}")


class FetchError(AcquisitionError):
    """Raised when an archive cannot be downloaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class ExtractionError(AcquisitionError):
    """Raised when an archive cannot be extracted."""

    pass


class UnsupportedArchiveFormat(ExtractionError):
    """Archive format has no extraction strategy."""

    pass


class InsecureArchiveError(ExtractionError):
    """Archive contains member paths that escape the destination."""

    pass


# ============================================================================
# Warnings
# ============================================================================


class CleanupWarning(UserWarning):
    """Emitted when the transient archive cannot be removed after extraction."""

    pass


__all__ = [
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
    "LockTimeout",
]
