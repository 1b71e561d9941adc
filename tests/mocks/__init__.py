"""
Mock implementations for testing nwkit components.

This package provides test doubles for external dependencies so tests run
isolated and deterministic.
"""

from .network import FakeFetchClient, FailingFetchClient, http_error

__all__ = ["FakeFetchClient", "FailingFetchClient", "http_error"]
