"""
CoverageReportGenerator - End-of-run coverage reporting.

Builds a CoverageReport from discovered/exercised sets, prints the console
summary and writes the HTML (and optional JSON) artifacts. Artifact write
failures are logged; they never abort the run and never suppress the
console summary.
"""

import json
from collections.abc import Iterable
from pathlib import Path

import structlog
from jinja2 import TemplateError
from rich.console import Console

from uicov.config import CoverageConfig
from uicov.coverage.registry import CoverageReport
from uicov.reporting.console import print_summary
from uicov.reporting.html import HTMLReportGenerator

logger = structlog.get_logger(__name__)


class CoverageReportGenerator:
    """Turn coverage sets into console output and report files."""

    def __init__(
        self,
        config: CoverageConfig | None = None,
        console: Console | None = None,
        html_generator: HTMLReportGenerator | None = None,
    ):
        self.config = config or CoverageConfig()
        self.console = console or Console()
        self.html_generator = html_generator or HTMLReportGenerator()
        self._log = logger.bind(component="report_generator")

    def generate(
        self,
        discovered: Iterable[str],
        exercised: Iterable[str],
        session_id: str | None = None,
    ) -> CoverageReport:
        """
        Build a report from copies of the given sets.

        Args:
            discovered: Identifiers seen by page scans
            exercised: Identifiers marked by UI actions
            session_id: Optional identifier recorded in the report

        Returns:
            CoverageReport snapshot
        """
        if session_id is None:
            return CoverageReport(discovered=frozenset(discovered), exercised=frozenset(exercised))
        return CoverageReport(
            discovered=frozenset(discovered),
            exercised=frozenset(exercised),
            session_id=session_id,
        )

    def render(self, report: CoverageReport) -> Path | None:
        """
        Print the console summary and write the report artifacts.

        Returns:
            Path of the HTML report, or None if it was disabled or not written
        """
        if self.config.console_report:
            print_summary(report, self.console)

        if self.config.json_report_path:
            self._write_json(report, Path(self.config.json_report_path))

        if not self.config.html_report:
            return None
        return self._write_html(report, Path(self.config.report_path))

    def _write_html(self, report: CoverageReport, path: Path) -> Path | None:
        try:
            written = self.html_generator.generate(
                path,
                report,
                create_dirs=self.config.create_report_dir,
            )
        except (OSError, TemplateError) as e:
            self._log.error("Could not write HTML coverage report", path=str(path), error=str(e))
            return None
        self._log.info("HTML coverage report written", path=str(written))
        return written

    def _write_json(self, report: CoverageReport, path: Path) -> Path | None:
        try:
            if self.config.create_report_dir:
                path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            self._log.error("Could not write JSON coverage report", path=str(path), error=str(e))
            return None
        self._log.info("JSON coverage report written", path=str(path))
        return path
