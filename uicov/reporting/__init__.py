"""
uicov Reporting.

Generate console and HTML coverage reports.
"""

from uicov.reporting.console import print_elements, print_summary, summary_lines
from uicov.reporting.generator import CoverageReportGenerator
from uicov.reporting.html import HTMLReportGenerator

__all__ = [
    "CoverageReportGenerator",
    "HTMLReportGenerator",
    "print_elements",
    "print_summary",
    "summary_lines",
]
