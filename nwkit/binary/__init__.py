"""
NW.js binary acquisition for nwkit.

This package provides:
- Version alias resolution against the NW.js version manifest
- Archive naming and URL computation
- Cache lookup, download and format-specific extraction
"""

from nwkit.binary.models import (
    AcquisitionRequest,
    AcquisitionResult,
    ArchiveFormat,
    ResolvedArchive,
    ResolvedRequest,
    DEFAULT_BASE_URL,
    FLAVORS,
)
from nwkit.binary.versions import (
    VersionResolver,
    canonicalize_version,
    is_alias,
    ALIASES,
    VERSIONS_MANIFEST_URL,
)
from nwkit.binary.locator import ArchiveLocator
from nwkit.binary.cache import CacheStore
from nwkit.binary.fetcher import Fetcher
from nwkit.binary.extractor import (
    Extractor,
    ExtractionState,
    ExtractionStrategy,
    TarGzStrategy,
    ZipStrategy,
)
from nwkit.binary.downloader import BinaryDownloader, acquire_binary

__all__ = [
    # Models
    "AcquisitionRequest",
    "AcquisitionResult",
    "ArchiveFormat",
    "ResolvedArchive",
    "ResolvedRequest",
    "DEFAULT_BASE_URL",
    "FLAVORS",
    # Versions
    "VersionResolver",
    "canonicalize_version",
    "is_alias",
    "ALIASES",
    "VERSIONS_MANIFEST_URL",
    # Pipeline
    "ArchiveLocator",
    "CacheStore",
    "Fetcher",
    "Extractor",
    "ExtractionState",
    "ExtractionStrategy",
    "TarGzStrategy",
    "ZipStrategy",
    "BinaryDownloader",
    "acquire_binary",
]
