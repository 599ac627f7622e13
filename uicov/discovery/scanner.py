"""
PageScanner - Discover the interactive elements of a loaded page.

Runs a script in the page context that queries a fixed list of selectors,
keeps rendered elements only, and returns plain element records. The
records are validated on the host, turned into identifiers by the
IdentifierPolicy, deduplicated and added to the registry.

Scanning is instrumentation: it never raises into the calling test.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from uicov.config import DEFAULT_SELECTORS
from uicov.coverage.identifiers import ElementSnapshot, IdentifierPolicy
from uicov.coverage.registry import CoverageRegistry
from uicov.discovery.scripts import COLLECT_ELEMENTS_SCRIPT, MAX_TEXT_PAYLOAD

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = structlog.get_logger(__name__)


@dataclass
class ScanResult:
    """Identifiers collected by one scan call, in first-seen order."""

    url: str
    identifiers: list[str] = field(default_factory=list)
    rejected: int = 0
    error: str | None = None

    @property
    def count(self) -> int:
        """Number of distinct identifiers collected."""
        return len(self.identifiers)

    @property
    def ok(self) -> bool:
        """Whether the scan completed without a total failure."""
        return self.error is None


class ScanShapeError(ValueError):
    """Raised when the in-page script returns an unexpected structure."""


def parse_records(raw: Any) -> tuple[list[ElementSnapshot], int]:
    """
    Validate the raw result of the collection script.

    Records are validated one by one; a malformed record is dropped without
    affecting the others.

    Args:
        raw: Value returned by page.evaluate

    Returns:
        Tuple of (valid element snapshots, number of rejected records)

    Raises:
        ScanShapeError: If the value is not a list, or no record in a
            non-empty list is an element record
    """
    if not isinstance(raw, list):
        msg = f"expected a list of element records, got {type(raw).__name__}"
        raise ScanShapeError(msg)

    elements: list[ElementSnapshot] = []
    errors: list[str] = []
    for item in raw:
        try:
            elements.append(ElementSnapshot.model_validate(item))
        except ValidationError as e:
            errors.append(str(e))

    if errors and not elements:
        raise ScanShapeError(errors[0])
    return elements, len(errors)


class PageScanner:
    """
    Collect interactive elements from a page into a CoverageRegistry.

    Example:
        >>> scanner = PageScanner(page, registry)
        >>> result = scanner.scan()
        >>> result.count
        12
    """

    def __init__(
        self,
        page: Page,
        registry: CoverageRegistry,
        policy: IdentifierPolicy | None = None,
        selectors: Sequence[str] = DEFAULT_SELECTORS,
    ):
        """
        Initialize page scanner.

        Args:
            page: Playwright page to scan
            registry: Registry receiving discovered identifiers
            policy: Identifier policy (default policy if None)
            selectors: Ordered selectors that define interactive elements
        """
        self.page = page
        self.registry = registry
        self.policy = policy or IdentifierPolicy()
        self.selectors = list(selectors)
        self._log = logger.bind(component="page_scanner")

    def collect(self) -> tuple[list[ElementSnapshot], int]:
        """
        Run the collection script and validate its result.

        Returns:
            Tuple of (element snapshots, number of rejected records)

        Raises whatever the driver raises; see scan() for the safe variant.
        """
        raw = self.page.evaluate(
            COLLECT_ELEMENTS_SCRIPT,
            {"selectors": self.selectors, "maxText": MAX_TEXT_PAYLOAD},
        )
        return parse_records(raw)

    def identify_all(self, elements: Sequence[ElementSnapshot]) -> list[str]:
        """Derive identifiers for elements, dropping duplicates."""
        seen: dict[str, None] = {}
        for element in elements:
            seen.setdefault(self.policy.identify(element), None)
        return list(seen)

    def scan(self) -> ScanResult:
        """
        Discover interactive elements and record them as discovered.

        Returns:
            ScanResult with the identifiers collected by this call. On any
            failure the result is empty and carries the error message.
        """
        url = self.page.url
        try:
            elements, rejected = self.collect()
        except ScanShapeError as e:
            self._log.error("Scan returned unexpected result", url=url, error=str(e))
            return ScanResult(url=url, error=str(e))
        except Exception as e:
            self._log.warning("Could not collect elements", url=url, error=str(e))
            return ScanResult(url=url, error=str(e))

        if rejected:
            self._log.warning("Skipped malformed element records", url=url, rejected=rejected)
        identifiers = self.identify_all(elements)
        self.registry.add_discovered_many(identifiers)
        self._log.info(
            "Collected interactive elements",
            url=url,
            count=len(identifiers),
        )
        return ScanResult(url=url, identifiers=identifiers, rejected=rejected)
