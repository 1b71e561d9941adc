"""
Fixtures for CLI tests.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the logging.basicConfig(force=True) done by CLI.run()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
