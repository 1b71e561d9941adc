"""
Value types for NW.js binary acquisition.

Every type here is immutable. Resolving a version produces a new
``ResolvedRequest`` instead of rewriting the caller's request, so one
``AcquisitionRequest`` can be reused across calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from nwkit.core.exceptions import InvalidRequestError
from nwkit.core.platform import SUPPORTED_ARCHITECTURES, SUPPORTED_PLATFORMS

DEFAULT_BASE_URL = "https://dl.nwjs.io"
PRODUCT_NAME = "nwjs"
FLAVORS = ("normal", "sdk")


class ArchiveFormat(Enum):
    """Compression format of a release archive."""

    TAR_GZ = ".tar.gz"
    ZIP = ".zip"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def for_platform(cls, platform: str) -> "ArchiveFormat":
        """
        Select the archive format published for a platform.

        Linux builds ship as gzip-compressed tarballs; every other platform
        ships as a zip.

        Example:
            >>> ArchiveFormat.for_platform("linux")
            <ArchiveFormat.TAR_GZ: '.tar.gz'>
        """
        return cls.TAR_GZ if platform == "linux" else cls.ZIP


@dataclass(frozen=True)
class AcquisitionRequest:
    """
    Everything needed to acquire one NW.js binary.

    Attributes:
        version: Literal version ('0.44.5', 'v0.44.5') or alias
            ('latest', 'stable', 'lts')
        platform: 'linux', 'osx' or 'win'
        architecture: 'x64' or 'ia32'
        cache_dir: Directory holding extracted binaries and transient archives
        flavor: 'normal' or 'sdk'
        base_url: Release server root
    """

    version: str
    platform: str
    architecture: str
    cache_dir: Path
    flavor: str = "normal"
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        if self.flavor not in FLAVORS:
            raise InvalidRequestError(
                f"Unsupported flavor: {self.flavor}. Supported: {', '.join(FLAVORS)}"
            )
        if self.platform not in SUPPORTED_PLATFORMS:
            raise InvalidRequestError(
                f"Unsupported platform: {self.platform}. "
                f"Supported: {', '.join(SUPPORTED_PLATFORMS)}"
            )
        if self.architecture not in SUPPORTED_ARCHITECTURES:
            raise InvalidRequestError(
                f"Unsupported architecture: {self.architecture}. "
                f"Supported: {', '.join(SUPPORTED_ARCHITECTURES)}"
            )

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "cache_dir", Path(self.cache_dir))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


@dataclass(frozen=True)
class ResolvedRequest:
    """An ``AcquisitionRequest`` paired with its canonical version."""

    request: AcquisitionRequest
    canonical_version: str

    @property
    def flavor(self) -> str:
        return self.request.flavor

    @property
    def platform(self) -> str:
        return self.request.platform

    @property
    def architecture(self) -> str:
        return self.request.architecture


@dataclass(frozen=True)
class ResolvedArchive:
    """
    Location of a release archive and the cache key derived from it.

    Attributes:
        name: Cache key and archive stem (e.g., 'nwjs-sdk-v0.44.5-win-x64')
        version: Canonical version used in the name and URL
        archive_format: Format the extractor must use
        url: Remote location of the archive
    """

    name: str
    version: str
    archive_format: ArchiveFormat
    url: str

    @property
    def extension(self) -> str:
        return self.archive_format.extension

    @property
    def filename(self) -> str:
        return f"{self.name}{self.extension}"


@dataclass
class AcquisitionResult:
    """Result of an acquisition."""

    path: Path
    """Absolute path of the extracted binary directory"""

    archive: ResolvedArchive
    """Archive the directory was extracted from"""

    was_cached: bool
    """Whether the directory was already present (no download needed)"""

    download_time: float = 0.0
    """Time spent downloading in seconds"""

    extraction_time: float = 0.0
    """Time spent extracting in seconds"""

    warnings: list = field(default_factory=list)
    """Non-fatal problems, such as a transient archive that could not be removed"""
