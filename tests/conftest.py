"""Shared fixtures for uicov tests."""

from pathlib import Path

import pytest

from uicov.config import CoverageConfig
from uicov.coverage.registry import CoverageRegistry

pytest_plugins = ["pytester"]


@pytest.fixture
def registry() -> CoverageRegistry:
    """Fresh registry per test."""
    return CoverageRegistry()


@pytest.fixture
def fast_config() -> CoverageConfig:
    """Configuration without pauses."""
    return CoverageConfig(
        settle_after_navigation_ms=0,
        settle_after_click_ms=0,
        settle_after_fill_ms=0,
    )


@pytest.fixture
def report_dir(tmp_path: Path) -> Path:
    """Directory for report artifacts."""
    return tmp_path / "target"
