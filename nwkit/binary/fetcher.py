"""
Archive retrieval.

Downloads a release archive to its transient location in the cache root.
There is no retry and no resume: any transport failure aborts the
acquisition and leaves whatever was written for inspection.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import requests

from nwkit.binary.models import ResolvedArchive
from nwkit.core.download import DownloadProgress
from nwkit.core.exceptions import FetchError
from nwkit.core.interfaces import FetchCapability

logger = logging.getLogger(__name__)


class Fetcher:
    """Downloads release archives through a fetch capability."""

    def __init__(self, client: FetchCapability):
        self.client = client

    def fetch(
        self,
        archive: ResolvedArchive,
        destination: Path,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ) -> Path:
        """
        Download ``archive`` to ``destination``.

        Args:
            archive: Archive to download
            destination: Transient archive path
            progress_callback: Optional callback for progress updates

        Returns:
            Path to the downloaded archive

        Raises:
            FetchError: On DNS, connection, timeout or HTTP status failures,
                or when the file cannot be written
        """
        logger.info(f"Downloading {archive.name} NW.js binary from {archive.url}")

        try:
            return self.client.download(
                archive.url, destination, progress_callback=progress_callback
            )
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.error(f"Server returned HTTP {status} for {archive.url}")
            raise FetchError(archive.url, f"HTTP {status}") from e
        except requests.RequestException as e:
            logger.error(f"Download failed: {e}")
            raise FetchError(archive.url, str(e)) from e
        except OSError as e:
            logger.error(f"Could not write {destination}: {e}")
            raise FetchError(archive.url, f"cannot write {destination}: {e}") from e
