"""
Cache command implementation.

Lists the complete binaries stored in the cache directory.
"""

import logging

from nwkit.binary.cache import CacheStore
from nwkit.cli.utils import load_settings, resolve_cache_dir

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the cache command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_settings(args)
    cache = CacheStore(resolve_cache_dir(config))
    logger.debug(f"Cache directory: {cache.cache_dir}")

    entries = cache.list_entries()
    if not entries:
        logger.info(f"No cached binaries in {cache.cache_dir}")
        return 0

    for name in entries:
        print(cache.entry_path(name))
    return 0
