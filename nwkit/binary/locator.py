"""
Archive naming and location.

The archive name doubles as the cache key, so it must stay a pure function
of (flavor, canonical version, platform, architecture).
"""

from nwkit.binary.models import (
    DEFAULT_BASE_URL,
    PRODUCT_NAME,
    ArchiveFormat,
    ResolvedArchive,
    ResolvedRequest,
)


class ArchiveLocator:
    """
    Computes archive names and download URLs.

    Example:
        >>> archive = ArchiveLocator.locate("normal", "v0.44.5", "linux", "x64")
        >>> archive.name
        'nwjs-v0.44.5-linux-x64'
        >>> archive.url
        'https://dl.nwjs.io/v0.44.5/nwjs-v0.44.5-linux-x64.tar.gz'
    """

    @staticmethod
    def archive_name(
        flavor: str, canonical_version: str, platform: str, architecture: str
    ) -> str:
        """
        Build the archive name (e.g., nwjs-sdk-v0.28.1-linux-ia32).

        Args:
            flavor: 'normal' or 'sdk'
            canonical_version: Resolved version
            platform: 'linux', 'osx' or 'win'
            architecture: 'x64' or 'ia32'

        Returns:
            Archive name without extension
        """
        product = f"{PRODUCT_NAME}-sdk" if flavor == "sdk" else PRODUCT_NAME
        return "-".join([product, canonical_version, platform, architecture])

    @classmethod
    def locate(
        cls,
        flavor: str,
        canonical_version: str,
        platform: str,
        architecture: str,
        base_url: str = DEFAULT_BASE_URL,
    ) -> ResolvedArchive:
        """
        Compute the archive name, format and URL.

        Args:
            flavor: 'normal' or 'sdk'
            canonical_version: Resolved version
            platform: 'linux', 'osx' or 'win'
            architecture: 'x64' or 'ia32'
            base_url: Release server root

        Returns:
            ResolvedArchive describing the download
        """
        name = cls.archive_name(flavor, canonical_version, platform, architecture)
        archive_format = ArchiveFormat.for_platform(platform)
        url = (
            f"{base_url.rstrip('/')}/{canonical_version}/"
            f"{name}{archive_format.extension}"
        )

        return ResolvedArchive(
            name=name,
            version=canonical_version,
            archive_format=archive_format,
            url=url,
        )

    @classmethod
    def locate_request(cls, resolved: ResolvedRequest) -> ResolvedArchive:
        """Locate the archive for a resolved request."""
        return cls.locate(
            resolved.flavor,
            resolved.canonical_version,
            resolved.platform,
            resolved.architecture,
            resolved.request.base_url,
        )
