"""
uicov Discovery.

Scan pages for interactive elements.
"""

from uicov.discovery.scanner import (
    PageScanner,
    ScanResult,
    ScanShapeError,
    parse_records,
)

__all__ = [
    "PageScanner",
    "ScanResult",
    "ScanShapeError",
    "parse_records",
]
