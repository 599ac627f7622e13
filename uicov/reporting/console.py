"""
Console rendering of coverage reports.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from uicov.coverage.registry import CoverageReport


def summary_lines(report: CoverageReport) -> list[str]:
    """Fixed-format summary of a coverage report."""
    return [
        "=== UI COVERAGE REPORT ===",
        f"Total elements: {report.total_discovered}",
        f"Covered elements: {report.total_exercised}",
        f"Coverage: {report.percentage:.2f}%",
        f"Uncovered elements: {report.uncovered_count}",
    ]


def print_summary(report: CoverageReport, console: Console) -> None:
    """Print the summary lines without markup interpretation."""
    for line in summary_lines(report):
        console.print(line, markup=False, highlight=False)


def print_elements(report: CoverageReport, console: Console, title: str = "Discovered Elements") -> None:
    """Print every discovered element with its coverage status."""
    table = Table(title=title, show_header=True)
    table.add_column("Element", style="cyan")
    table.add_column("Status")

    for identifier in sorted(report.discovered):
        status = "[green]covered[/green]" if report.is_covered(identifier) else "[red]uncovered[/red]"
        table.add_row(escape(identifier), status)

    console.print(table)
