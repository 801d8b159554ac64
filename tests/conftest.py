from __future__ import annotations

import logging
from pathlib import Path

import pytest

from bundlestats.config import BundleStatsConfig
from bundlestats.parser import StatsParser


@pytest.fixture
def config() -> BundleStatsConfig:
    """Default thresholds: 2 MiB per file, 10 MiB total."""
    return BundleStatsConfig(
        stats_path=Path("webpack-stats.json"),
        bundle_size_threshold=2097152,
        total_size_threshold=10485760,
        fail_on_threshold_exceed=True,
    )


@pytest.fixture
def stats_parser() -> StatsParser:
    return StatsParser()


@pytest.fixture(autouse=True)
def _reset_logger():
    """Undo configure_logging() so caplog keeps seeing bundlestats records."""
    yield
    logger = logging.getLogger("bundlestats")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
