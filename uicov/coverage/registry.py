"""
CoverageRegistry - Discovered vs. exercised element bookkeeping.

A registry holds two sets of element identifiers:
- Discovered: elements the page scanner saw on visited pages
- Exercised: elements a wrapped UI action interacted with

Registries are normally created by a CoverageSession and passed to the
scanner and action wrappers. get_registry() returns a lazily created
process-wide instance for code that has no session at hand.
"""

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4


@dataclass(frozen=True)
class CoverageReport:
    """Read-only snapshot of a registry."""

    discovered: frozenset[str]
    exercised: frozenset[str]
    session_id: str = field(default_factory=lambda: f"uicov-{uuid4().hex[:8]}")
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_discovered(self) -> int:
        """Number of discovered elements."""
        return len(self.discovered)

    @property
    def total_exercised(self) -> int:
        """Number of exercised elements."""
        return len(self.exercised)

    @property
    def percentage(self) -> float:
        """Coverage percentage (0.0 to 100.0)."""
        return coverage_ratio(self.total_exercised, self.total_discovered)

    @property
    def uncovered_count(self) -> int:
        """Discovered minus exercised, never negative."""
        return max(0, self.total_discovered - self.total_exercised)

    @property
    def covered_items(self) -> list[str]:
        """Discovered identifiers that were also exercised, sorted."""
        return sorted(self.discovered & self.exercised)

    @property
    def uncovered_items(self) -> list[str]:
        """Discovered identifiers that were never exercised, sorted."""
        return sorted(self.discovered - self.exercised)

    @property
    def unmatched_items(self) -> list[str]:
        """Exercised identifiers that no scan discovered, sorted."""
        return sorted(self.exercised - self.discovered)

    def is_covered(self, identifier: str) -> bool:
        """Check whether an identifier was exercised."""
        return identifier in self.exercised

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "total_discovered": self.total_discovered,
            "total_exercised": self.total_exercised,
            "coverage_percentage": round(self.percentage, 2),
            "uncovered_count": self.uncovered_count,
            "covered_items": self.covered_items,
            "uncovered_items": self.uncovered_items,
            "unmatched_items": self.unmatched_items,
        }


def coverage_ratio(exercised_count: int, discovered_count: int) -> float:
    """
    Compute coverage from raw set sizes.

    Exercised identifiers are not checked against the discovered set, so the
    raw ratio can exceed 1; the result is capped at 100.0.
    """
    if discovered_count == 0:
        return 0.0
    return min(100.0, exercised_count / discovered_count * 100.0)


class CoverageRegistry:
    """
    Track discovered and exercised element identifiers.

    All operations are serialized by one lock, so a registry may be shared
    by tests running on several threads. Reads for reporting should happen
    after those threads finish.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._discovered: set[str] = set()
        self._exercised: set[str] = set()

    def add_discovered(self, identifier: str) -> None:
        """Record an element seen on a page."""
        with self._lock:
            self._discovered.add(identifier)

    def add_discovered_many(self, identifiers: Iterable[str]) -> None:
        """Record several discovered elements at once."""
        identifiers = list(identifiers)
        with self._lock:
            self._discovered.update(identifiers)

    def mark_exercised(self, identifier: str) -> None:
        """Record an element a test interacted with."""
        with self._lock:
            self._exercised.add(identifier)

    def coverage_percentage(self) -> float:
        """Exercised count over discovered count, as 0.0 to 100.0."""
        with self._lock:
            return coverage_ratio(len(self._exercised), len(self._discovered))

    def reset(self) -> None:
        """Clear both sets for a fresh measurement."""
        with self._lock:
            self._discovered.clear()
            self._exercised.clear()

    @property
    def discovered(self) -> frozenset[str]:
        """Copy of the discovered identifiers."""
        with self._lock:
            return frozenset(self._discovered)

    @property
    def exercised(self) -> frozenset[str]:
        """Copy of the exercised identifiers."""
        with self._lock:
            return frozenset(self._exercised)

    def snapshot(self, session_id: str | None = None) -> CoverageReport:
        """
        Take a consistent snapshot of both sets.

        Args:
            session_id: Optional identifier recorded in the report

        Returns:
            CoverageReport holding copies of the current sets
        """
        with self._lock:
            discovered = frozenset(self._discovered)
            exercised = frozenset(self._exercised)
        if session_id is None:
            return CoverageReport(discovered=discovered, exercised=exercised)
        return CoverageReport(discovered=discovered, exercised=exercised, session_id=session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._discovered)


_default_registry: CoverageRegistry | None = None
_default_lock = threading.Lock()


def get_registry() -> CoverageRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = CoverageRegistry()
    return _default_registry
