"""
pytest integration for uicov.

Registered through the ``pytest11`` entry point. Provides:
- ``uicov_session``: session-wide CoverageSession
- ``uicov_registry``: that session's registry
- ``tracked_page``: the host's ``page`` fixture (e.g. from pytest-playwright)
  wrapped in a TrackedPage

The report is rendered in the terminal summary, only for runs that used
one of the fixtures.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import pytest

from uicov.config import CoverageConfig, CoverageConfigLoader
from uicov.coverage.registry import CoverageRegistry
from uicov.reporting.console import summary_lines
from uicov.session import CoverageSession

if TYPE_CHECKING:
    from uicov.actions.tracked_page import TrackedPage

PLUGIN_NAME = "uicov-session"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("uicov", "UI interaction coverage")
    group.addoption(
        "--uicov-report",
        dest="uicov_report",
        default=None,
        help="Path of the HTML coverage report.",
    )
    group.addoption(
        "--uicov-config",
        dest="uicov_config",
        default=None,
        help="YAML file with uicov settings.",
    )
    parser.addini("uicov_report", "Path of the HTML coverage report.", default=None)


def pytest_configure(config: pytest.Config) -> None:
    config.pluginmanager.register(UICoveragePlugin(config), PLUGIN_NAME)


def load_config(pytest_config: pytest.Config) -> CoverageConfig:
    """Resolve settings from --uicov-config, UICOV_* variables and --uicov-report."""
    config_path = pytest_config.getoption("uicov_config")
    base = CoverageConfigLoader.from_yaml(config_path) if config_path else CoverageConfig()
    config = CoverageConfigLoader.from_env(base=base)

    report_path = pytest_config.getoption("uicov_report") or pytest_config.getini("uicov_report")
    if report_path:
        config = config.model_copy(update={"report_path": str(report_path)})
    return config


class UICoveragePlugin:
    """Owns the CoverageSession of a pytest run."""

    def __init__(self, config: pytest.Config):
        self.pytest_config = config
        self._session: CoverageSession | None = None

    @property
    def active(self) -> bool:
        """Whether any test requested the coverage session."""
        return self._session is not None

    @property
    def session(self) -> CoverageSession:
        """The run's coverage session, created on first use."""
        if self._session is None:
            config = load_config(self.pytest_config)
            # The terminal summary prints the numbers instead of rich
            config = config.model_copy(update={"console_report": False})
            self._session = CoverageSession(config)
        return self._session

    def pytest_terminal_summary(self, terminalreporter: Any) -> None:
        if self._session is None:
            return
        report = self._session.report()
        terminalreporter.section("UI coverage")
        for line in summary_lines(report):
            terminalreporter.write_line(line)

        path = self._session.finish()
        if path is not None:
            terminalreporter.write_line(f"HTML report: {path}")
        elif self._session.config.html_report:
            terminalreporter.write_line("HTML report could not be written")


@pytest.fixture(scope="session")
def uicov_session(pytestconfig: pytest.Config) -> CoverageSession:
    """Session-wide coverage session."""
    plugin: UICoveragePlugin = pytestconfig.pluginmanager.get_plugin(PLUGIN_NAME)
    return plugin.session


@pytest.fixture(scope="session")
def uicov_registry(uicov_session: CoverageSession) -> CoverageRegistry:
    """Registry of the session-wide coverage session."""
    return uicov_session.registry


@pytest.fixture
def tracked_page(page: Any, uicov_session: CoverageSession) -> Iterator[TrackedPage]:
    """Coverage-tracking wrapper around the ``page`` fixture."""
    yield uicov_session.track(page)
