"""
Fetch command implementation.

Downloads and extracts an NW.js binary into the cache, then prints the
extracted directory on stdout so scripts can capture it.
"""

import logging

from nwkit.cli.utils import (
    build_request,
    create_downloader,
    load_settings,
    print_warning,
)
from nwkit.core.download import DownloadProgress

logger = logging.getLogger(__name__)


def _report_progress(progress: DownloadProgress):
    logger.info(f"  {progress}")


def run(args) -> int:
    """
    Run the fetch command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)

    Raises:
        NwKitError: On invalid settings or a failed acquisition
    """
    config = load_settings(args)
    request = build_request(config)
    logger.debug(f"Acquisition request: {request}")

    downloader = create_downloader(config)
    try:
        result = downloader.acquire(
            request,
            force=getattr(args, "force", False),
            progress_callback=_report_progress,
        )
    finally:
        downloader.client.close()

    for warning in result.warnings:
        print_warning(warning)

    if not result.was_cached:
        logger.info(
            f"Fetched {result.archive.name} "
            f"(download {result.download_time:.1f}s, "
            f"extract {result.extraction_time:.1f}s)"
        )

    print(result.path)
    return 0
