"""
Core interfaces for nwkit.

This module defines the abstract interfaces the acquisition pipeline depends
on. The resolver and fetcher receive an implementation at construction.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional


class FetchCapability(ABC):
    """
    Abstract interface for retrieving remote resources.

    Implementations raise ``requests.RequestException`` (or a subclass) for
    transport failures and non-2xx responses. The pipeline stages translate
    these into their own error types.
    """

    @abstractmethod
    def get_json(self, url: str) -> Any:
        """
        Fetch a URL and decode the body as JSON.

        Args:
            url: URL to fetch

        Returns:
            Decoded JSON document

        Raises:
            ValueError: If the body is not valid JSON
        """
        pass

    @abstractmethod
    def get_bytes(self, url: str) -> bytes:
        """
        Fetch a URL and return the raw body.

        Args:
            url: URL to fetch

        Returns:
            Response body
        """
        pass

    @abstractmethod
    def download(
        self,
        url: str,
        destination: Path,
        progress_callback: Optional[Callable[[Any], None]] = None,
    ) -> Path:
        """
        Stream a URL to a local file.

        Args:
            url: URL to fetch
            destination: File to write
            progress_callback: Optional callback receiving progress updates

        Returns:
            Path to the written file
        """
        pass
