"""Test configuration for pytest."""

import logging
import os

import pytest

import graph_invariants.log as log

# Headless backend for the drawing script tests.
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture(autouse=True)
def configure_test_logging(monkeypatch):
    """Keep the package quiet and drop any handler a CLI run installed."""
    monkeypatch.setenv(log.LOG_LEVEL_ENV, "WARNING")
    package_logger = logging.getLogger(log.PACKAGE_LOGGER)
    yield
    if log._cli_handler is not None:
        package_logger.removeHandler(log._cli_handler)
        log._cli_handler = None
    package_logger.setLevel(logging.NOTSET)
