"""
Resolve command implementation.

Prints the canonical version, archive name and download URL for the
requested binary without downloading it.
"""

import logging

from nwkit.cli.utils import build_request, create_downloader, load_settings

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_settings(args)
    request = build_request(config)

    downloader = create_downloader(config)
    try:
        archive = downloader.locate(request)
    finally:
        downloader.client.close()

    print(f"version: {archive.version}")
    print(f"archive: {archive.name}")
    print(f"url:     {archive.url}")
    return 0
