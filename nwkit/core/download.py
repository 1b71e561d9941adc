"""
HTTP client used to fetch the version manifest and binary archives.

This module provides:
- JSON and raw byte GET requests
- Streaming downloads to a file with progress reporting
- A per-call timeout so a stalled server cannot block forever

Requests are made exactly once. Callers decide what a failure means; this
module only raises ``requests`` exceptions.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import requests

from nwkit.core.interfaces import FetchCapability

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
CHUNK_SIZE = 8192


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


class HttpClient(FetchCapability):
    """
    ``requests``-backed implementation of :class:`FetchCapability`.

    Example:
        >>> client = HttpClient(timeout=30)
        >>> versions = client.get_json("https://nwjs.io/versions.json")
        >>> client.download(url, Path("cache/nwjs-v0.44.5-linux-x64.tar.gz"))
    """

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Seconds to wait for connect/read on every call
                (None waits indefinitely)
            session: Optional pre-configured session
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, url: str, stream: bool = False) -> requests.Response:
        logger.debug(f"GET {url}")
        response = self.session.get(
            url, stream=stream, timeout=self.timeout, allow_redirects=True
        )
        response.raise_for_status()
        return response

    def get_json(self, url: str) -> Any:
        return self._get(url).json()

    def get_bytes(self, url: str) -> bytes:
        return self._get(url).content

    def download(
        self,
        url: str,
        destination: Path,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ) -> Path:
        """
        Stream ``url`` into ``destination``.

        The destination is opened before the first chunk arrives, so a failure
        mid-transfer leaves a partial file behind.

        Args:
            url: URL to download
            destination: Local file path
            progress_callback: Optional callback for progress updates

        Returns:
            Path to downloaded file

        Raises:
            requests.RequestException: On transport errors or non-2xx status
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)

        response = self._get(url, stream=True)

        content_length = response.headers.get("content-length")
        total_size = int(content_length) if content_length else 0

        downloaded = 0
        start_time = time.time()
        last_progress_time = start_time

        with response, open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                f.write(chunk)
                downloaded += len(chunk)

                # Report progress (max once per 0.5 seconds)
                current_time = time.time()
                if progress_callback and (
                    current_time - last_progress_time >= 0.5
                    or downloaded == total_size
                ):
                    elapsed = current_time - start_time
                    speed = downloaded / elapsed if elapsed > 0 else 0
                    remaining = total_size - downloaded if total_size > 0 else 0
                    eta = remaining / speed if speed > 0 else 0

                    progress_callback(
                        DownloadProgress(
                            bytes_downloaded=downloaded,
                            total_bytes=total_size if total_size > 0 else downloaded,
                            percentage=(downloaded / total_size * 100)
                            if total_size > 0
                            else 0,
                            speed_bps=speed,
                            eta_seconds=eta,
                        )
                    )
                    last_progress_time = current_time

        logger.debug(f"Wrote {downloaded} bytes to {destination}")
        return destination

    def close(self) -> None:
        self.session.close()


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Args:
        progress: Download progress information

    Returns:
        Formatted progress string

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB " f"at {speed_mbps:.1f} MB/s"
