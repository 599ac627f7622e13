"""
CoverageSession - Owner of one coverage measurement.

A session holds the configuration and the registry for a test run, hands
out scanners and tracked pages bound to that registry, and renders the
report once at the end.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from rich.console import Console

from uicov.actions.tracked_page import TrackedPage
from uicov.config import CoverageConfig
from uicov.coverage.identifiers import IdentifierPolicy
from uicov.coverage.registry import CoverageRegistry, CoverageReport
from uicov.discovery.scanner import PageScanner
from uicov.reporting.generator import CoverageReportGenerator

if TYPE_CHECKING:
    from playwright.sync_api import BrowserContext, Page

logger = structlog.get_logger(__name__)


class CoverageSession:
    """
    Coordinate scanning, action tracking and reporting for one run.

    Example:
        >>> session = CoverageSession()
        >>> tracked = session.track(page)
        >>> tracked.navigate("https://demoqa.com/buttons", "Buttons page")
        >>> tracked.double_click("#doubleClickBtn", "Double Click Button")
        >>> session.finish()
    """

    def __init__(
        self,
        config: CoverageConfig | None = None,
        registry: CoverageRegistry | None = None,
        console: Console | None = None,
        session_id: str | None = None,
    ):
        """
        Initialize coverage session.

        Args:
            config: Session configuration (defaults if None)
            registry: Registry to record into (a new one if None)
            console: Console for the summary (stdout if None)
            session_id: Identifier for the report (generated if None)
        """
        self.config = config or CoverageConfig()
        self.registry = registry if registry is not None else CoverageRegistry()
        self.session_id = session_id or f"uicov-{uuid4().hex[:8]}"
        self.policy = IdentifierPolicy(text_limit=self.config.text_limit)
        self.reporter = CoverageReportGenerator(self.config, console=console)
        self._finished = False
        self._report_path: Path | None = None
        self._log = logger.bind(component="coverage_session", session_id=self.session_id)

    @property
    def finished(self) -> bool:
        """Whether finish() has already rendered the report."""
        return self._finished

    def scanner(self, page: Page) -> PageScanner:
        """Create a scanner bound to this session's registry."""
        return PageScanner(
            page,
            self.registry,
            policy=self.policy,
            selectors=self.config.selectors,
        )

    def track(self, page: Page) -> TrackedPage:
        """Wrap a page so its actions record coverage in this session."""
        return TrackedPage(
            page,
            self.registry,
            config=self.config,
            scanner=self.scanner(page),
            policy=self.policy,
        )

    def configure_context(self, context: BrowserContext) -> None:
        """Apply the session's default timeouts to a browser context."""
        context.set_default_navigation_timeout(self.config.navigation_timeout_ms)
        context.set_default_timeout(self.config.action_timeout_ms)

    def report(self) -> CoverageReport:
        """Snapshot the current coverage."""
        return self.registry.snapshot(session_id=self.session_id)

    def finish(self) -> Path | None:
        """
        Render the report once.

        Returns:
            Path of the HTML report, or None if it was not written. Later
            calls return the first result without rendering again.
        """
        if self._finished:
            return self._report_path
        self._finished = True

        report = self.report()
        self._log.info(
            "Coverage session finished",
            discovered=report.total_discovered,
            exercised=report.total_exercised,
            percentage=round(report.percentage, 2),
        )
        self._report_path = self.reporter.render(report)
        return self._report_path

    def reset(self) -> None:
        """Clear recorded coverage and allow the report to render again."""
        self.registry.reset()
        self._finished = False
        self._report_path = None
