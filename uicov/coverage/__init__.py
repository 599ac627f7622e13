"""
uicov Coverage Tracking.

Element identifiers and the discovered/exercised registry.
"""

from uicov.coverage.identifiers import (
    ElementSnapshot,
    IdentifierPolicy,
    IdentifierSource,
    action_identifier,
    identify,
)
from uicov.coverage.registry import (
    CoverageRegistry,
    CoverageReport,
    coverage_ratio,
    get_registry,
)

__all__ = [
    "CoverageRegistry",
    "CoverageReport",
    "ElementSnapshot",
    "IdentifierPolicy",
    "IdentifierSource",
    "action_identifier",
    "coverage_ratio",
    "get_registry",
    "identify",
]
