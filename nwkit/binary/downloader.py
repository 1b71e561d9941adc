"""
NW.js binary acquisition.

This module orchestrates the complete acquisition workflow:
1. Resolve the version token (alias lookup when needed)
2. Compute archive name, format and URL
3. Return the cached directory if present
4. Lock the cache key and re-check the cache
5. Download the archive next to the cache entry
6. Extract it and remove the archive

Stage errors (ResolutionError, FetchError, ExtractionError) propagate to the
caller as raised by the stage. Nothing is retried.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from nwkit.binary.cache import CacheStore
from nwkit.binary.extractor import Extractor
from nwkit.binary.fetcher import Fetcher
from nwkit.binary.locator import ArchiveLocator
from nwkit.binary.models import (
    DEFAULT_BASE_URL,
    AcquisitionRequest,
    AcquisitionResult,
    ResolvedArchive,
)
from nwkit.binary.versions import VersionResolver
from nwkit.core.download import DEFAULT_TIMEOUT, DownloadProgress, HttpClient
from nwkit.core.exceptions import ExtractionError
from nwkit.core.filesystem import FilesystemError
from nwkit.core.interfaces import FetchCapability
from nwkit.core.locking import LockManager

logger = logging.getLogger(__name__)


class BinaryDownloader:
    """
    Resolves, downloads, caches and extracts NW.js binaries.

    Example:
        >>> downloader = BinaryDownloader()
        >>> request = AcquisitionRequest(
        ...     version="0.44.5", platform="linux", architecture="x64",
        ...     cache_dir=Path("cache"),
        ... )
        >>> result = downloader.acquire(request)
        >>> print(f"Binary at: {result.path}")
    """

    def __init__(
        self,
        client: Optional[FetchCapability] = None,
        manifest_url: Optional[str] = None,
        lock_timeout: Optional[float] = None,
    ):
        """
        Initialize binary downloader.

        Args:
            client: Fetch capability for the manifest and archives.
                If None, an HttpClient with the default timeout is created.
            manifest_url: Override for the alias manifest location
            lock_timeout: Seconds to wait for another process holding the
                same cache key (default: 600)
        """
        self.client = client or HttpClient()
        self.resolver = VersionResolver(self.client, manifest_url=manifest_url)
        self.fetcher = Fetcher(self.client)
        self.lock_timeout = lock_timeout

    def locate(self, request: AcquisitionRequest) -> ResolvedArchive:
        """
        Resolve the version and compute the archive for ``request``.

        Performs the alias lookup when needed but touches no files.

        Raises:
            ResolutionError: If an alias cannot be resolved
        """
        resolved = self.resolver.resolve_request(request)
        return ArchiveLocator.locate_request(resolved)

    def acquire(
        self,
        request: AcquisitionRequest,
        force: bool = False,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ) -> AcquisitionResult:
        """
        Make the binary for ``request`` available in the cache.

        Args:
            request: What to acquire and where to cache it
            force: Re-download and re-extract even if cached
            progress_callback: Optional callback for download progress

        Returns:
            AcquisitionResult with the extracted directory path

        Raises:
            ResolutionError: If an alias cannot be resolved
            FetchError: If the archive download fails
            ExtractionError: If the archive cannot be extracted
            LockTimeout: If another process holds the cache key too long
        """
        archive = self.locate(request)
        cache = CacheStore(request.cache_dir)
        binary_dir = cache.entry_path(archive.name)

        if not force and cache.has(archive.name):
            logger.info(f"Retrieved cached {archive.name} NW.js binary")
            return AcquisitionResult(path=binary_dir, archive=archive, was_cached=True)

        cache.ensure_root()
        lock_manager = LockManager(cache.lock_dir)

        with lock_manager.archive_lock(archive.name, timeout=self.lock_timeout):
            # Another process may have finished while we waited for the lock
            if not force and cache.has(archive.name):
                logger.info(f"{archive.name} was downloaded by another process")
                return AcquisitionResult(
                    path=binary_dir, archive=archive, was_cached=True
                )

            return self._download_and_extract(archive, cache, progress_callback)

    def _download_and_extract(
        self,
        archive: ResolvedArchive,
        cache: CacheStore,
        progress_callback: Optional[Callable[[DownloadProgress], None]],
    ) -> AcquisitionResult:
        archive_path = cache.archive_path(archive)

        download_start = time.time()
        self.fetcher.fetch(archive, archive_path, progress_callback)
        download_time = time.time() - download_start

        # Either forced or left over from an interrupted extraction
        try:
            cache.remove_entry(archive.name)
        except FilesystemError as e:
            raise ExtractionError(f"Cannot replace {archive.name}: {e}") from e

        cache.mark_partial(archive.name)
        extractor = Extractor(archive, cache.cache_dir)
        binary_dir = extractor.extract(archive_path)
        cache.clear_partial(archive.name)

        logger.info(f"{archive.name} ready at {binary_dir}")

        return AcquisitionResult(
            path=binary_dir,
            archive=archive,
            was_cached=False,
            download_time=download_time,
            extraction_time=extractor.elapsed,
            warnings=list(extractor.warnings),
        )


# Convenience function for one-off acquisitions
def acquire_binary(
    version: str,
    platform: str,
    architecture: str,
    cache_dir: Union[str, Path],
    flavor: str = "normal",
    base_url: str = DEFAULT_BASE_URL,
    force: bool = False,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    client: Optional[FetchCapability] = None,
) -> Path:
    """
    Acquire an NW.js binary and return its directory.

    Creates a downloader instance and performs the acquisition in one call.
    For multiple acquisitions, create a BinaryDownloader and reuse it.

    Args:
        version: Literal version or alias ('latest', 'stable', 'lts')
        platform: 'linux', 'osx' or 'win'
        architecture: 'x64' or 'ia32'
        cache_dir: Cache root
        flavor: 'normal' or 'sdk'
        base_url: Release server root
        force: Re-download even if cached
        timeout: Per-request network timeout in seconds
        client: Optional fetch capability (overrides ``timeout``)

    Returns:
        Absolute path of the extracted binary directory

    Example:
        >>> from nwkit.binary.downloader import acquire_binary
        >>> acquire_binary("0.44.5", "linux", "x64", "cache")
        PosixPath('/abs/cache/nwjs-v0.44.5-linux-x64')
    """
    request = AcquisitionRequest(
        version=version,
        platform=platform,
        architecture=architecture,
        cache_dir=Path(cache_dir),
        flavor=flavor,
        base_url=base_url,
    )
    downloader = BinaryDownloader(client=client or HttpClient(timeout=timeout))
    return downloader.acquire(request, force=force).path
