"""
Host platform detection for nwkit.

NW.js release archives are named with their own platform and architecture
vocabulary ('linux', 'osx', 'win' and 'x64', 'ia32'). This module maps the
running interpreter's host onto that vocabulary so the CLI can default to
the current machine.

Usage:
    from nwkit.core.platform import detect_host

    host = detect_host()
    print(host.platform_string())  # e.g. 'linux-x64'
"""

import functools
import platform
from dataclasses import dataclass

from nwkit.core.exceptions import InvalidRequestError

SUPPORTED_PLATFORMS = ("linux", "osx", "win")
SUPPORTED_ARCHITECTURES = ("x64", "ia32")

_SYSTEM_MAP = {
    "linux": "linux",
    "darwin": "osx",
    "windows": "win",
}

_MACHINE_MAP = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
}


@dataclass(frozen=True)
class HostPlatform:
    """
    Host platform expressed in NW.js release naming.

    Attributes:
        platform: 'linux', 'osx' or 'win'
        architecture: 'x64' or 'ia32'
    """

    platform: str
    architecture: str

    def platform_string(self) -> str:
        """
        Get the platform/architecture pair used in archive names.

        Example:
            >>> HostPlatform("osx", "x64").platform_string()
            'osx-x64'
        """
        return f"{self.platform}-{self.architecture}"


@functools.lru_cache(maxsize=1)
def detect_host() -> HostPlatform:
    """
    Detect the current host platform.

    This function is cached - it only runs detection once per process.

    Returns:
        HostPlatform for the running machine

    Raises:
        InvalidRequestError: If the host has no matching NW.js build
    """
    return HostPlatform(
        platform=normalize_platform(platform.system()),
        architecture=normalize_architecture(platform.machine()),
    )


def normalize_platform(system: str) -> str:
    """
    Map an operating system name onto NW.js platform naming.

    Args:
        system: Value such as ``platform.system()`` or an NW.js name

    Returns:
        'linux', 'osx' or 'win'

    Raises:
        InvalidRequestError: If the system is not supported
    """
    name = system.lower()
    if name in SUPPORTED_PLATFORMS:
        return name
    try:
        return _SYSTEM_MAP[name]
    except KeyError:
        raise InvalidRequestError(
            f"Unsupported operating system: {system}. "
            f"Supported: {', '.join(SUPPORTED_PLATFORMS)}"
        ) from None


def normalize_architecture(machine: str) -> str:
    """
    Map a CPU architecture name onto NW.js architecture naming.

    Args:
        machine: Value such as ``platform.machine()`` or an NW.js name

    Returns:
        'x64' or 'ia32'

    Raises:
        InvalidRequestError: If the architecture is not supported
    """
    name = machine.lower()
    if name in SUPPORTED_ARCHITECTURES:
        return name
    try:
        return _MACHINE_MAP[name]
    except KeyError:
        raise InvalidRequestError(
            f"Unsupported architecture: {machine}. "
            f"Supported: {', '.join(SUPPORTED_ARCHITECTURES)}"
        ) from None


def clear_platform_cache() -> None:
    """Clear the cached host detection (used by tests)."""
    detect_host.cache_clear()
