from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.plugin_builder import PluginBuilder


@pytest.fixture
def plugin_builder(tmp_path: Path) -> PluginBuilder:
    """Provide a plugin workspace rooted at the pytest tmp_path."""
    return PluginBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_bdpack_logger():
    """Undo configure_logging so caplog sees bdpack records in every test."""
    yield
    logger = logging.getLogger("bdpack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
