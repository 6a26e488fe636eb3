"""Shared pytest fixtures."""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logger():
    # CLI runs attach sinks to captured streams that close after each invoke.
    yield
    logger.remove()
