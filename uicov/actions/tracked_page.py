"""
TrackedPage - Playwright page wrapper that records exercised elements.

Actions come in two kinds:
- Required (navigate, click, fill, wait_for): failures are logged and
  raised, failing the test
- Optional (double_click, right_click, check_visibility): failures are
  logged and returned as an ActionResult

Each successful action marks the target element as exercised. In the
default ``resolved`` identifier mode the element's attributes are read and
the scanner's identifier policy is applied, so exercised identifiers line
up with discovered ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from playwright.sync_api import Error as PlaywrightError
from pydantic import ValidationError

from uicov.actions.models import ActionKind, ActionResult
from uicov.config import CoverageConfig, IdentifierMode
from uicov.coverage.identifiers import ElementSnapshot, IdentifierPolicy
from uicov.coverage.registry import CoverageRegistry
from uicov.discovery.scanner import PageScanner, ScanResult
from uicov.discovery.scripts import DESCRIBE_ELEMENT_SCRIPT, MAX_TEXT_PAYLOAD
from uicov.errors import ElementInteractionError, NavigationError

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = structlog.get_logger(__name__)


class TrackedPage:
    """
    Coverage-aware wrapper around a Playwright page.

    Example:
        >>> tracked = TrackedPage(page, registry)
        >>> tracked.navigate("https://demoqa.com/text-box", "Text Box page")
        >>> tracked.fill("#userName", "John Doe", "Full Name field")
        >>> tracked.click("#submit", "Submit button")
    """

    def __init__(
        self,
        page: Page,
        registry: CoverageRegistry,
        config: CoverageConfig | None = None,
        scanner: PageScanner | None = None,
        policy: IdentifierPolicy | None = None,
    ):
        """
        Initialize tracked page.

        Args:
            page: Playwright page to drive
            registry: Registry receiving discovered and exercised identifiers
            config: Timeouts, pauses and identifier mode (defaults if None)
            scanner: Scanner used after navigation (built from config if None)
            policy: Identifier policy shared with the scanner
        """
        self.page = page
        self.registry = registry
        self.config = config or CoverageConfig()
        self.policy = policy or IdentifierPolicy(text_limit=self.config.text_limit)
        self.scanner = scanner or PageScanner(
            page,
            registry,
            policy=self.policy,
            selectors=self.config.selectors,
        )
        self._log = logger.bind(component="tracked_page")

    # -------------------------------------------------------------------------
    # Required actions
    # -------------------------------------------------------------------------

    def navigate(self, url: str, page_name: str) -> ScanResult:
        """
        Load a page and scan it for interactive elements.

        Raises:
            NavigationError: If the page does not load within the timeout
        """
        self._log.info("Navigating", url=url)
        timeout = self.config.navigation_timeout_ms
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            self.page.wait_for_load_state("domcontentloaded", timeout=timeout)
        except PlaywrightError as e:
            self._log.error("Navigation failed", url=url, page=page_name, error=str(e))
            raise NavigationError(url, page_name, str(e)) from e

        self._settle(self.config.settle_after_navigation_ms)
        result = self.scanner.scan()
        self._log.info("Analyzed page", page=page_name, elements=result.count)
        return result

    def click(self, selector: str, description: str) -> str:
        """
        Click an element and mark it exercised.

        Returns:
            The identifier marked as exercised

        Raises:
            ElementInteractionError: If the element is not clickable in time
        """
        try:
            self._wait_attached(selector)
            self._wait_visible(selector, self.config.action_timeout_ms)
            identifier = self._exercised_identifier(selector, description)
            self.page.click(selector, timeout=self.config.action_timeout_ms)
        except PlaywrightError as e:
            self._log.error("Failed to click", element=description, error=str(e))
            raise ElementInteractionError(selector, description, str(e)) from e

        self.registry.mark_exercised(identifier)
        self._log.info("Clicked", element=description, identifier=identifier)
        self._settle(self.config.settle_after_click_ms)
        return identifier

    def fill(self, selector: str, value: str, description: str) -> str:
        """
        Clear and fill an input and mark it exercised.

        Returns:
            The identifier marked as exercised

        Raises:
            ElementInteractionError: If the element is not fillable in time
        """
        timeout = self.config.action_timeout_ms
        try:
            self._wait_attached(selector)
            self._wait_visible(selector, timeout)
            identifier = self._exercised_identifier(selector, description)
            self.page.fill(selector, "", timeout=timeout)
            self.page.fill(selector, value, timeout=timeout)
        except PlaywrightError as e:
            self._log.error("Failed to fill", element=description, error=str(e))
            raise ElementInteractionError(selector, description, str(e)) from e

        self.registry.mark_exercised(identifier)
        self._log.info("Filled", element=description, value=value, identifier=identifier)
        self._settle(self.config.settle_after_fill_ms)
        return identifier

    def wait_for(self, selector: str, description: str) -> None:
        """
        Wait until an element is attached and visible.

        Raises:
            ElementInteractionError: If the element does not appear in time
        """
        self._log.info("Waiting for element", element=description)
        try:
            self._wait_attached(selector)
            self._wait_visible(selector, self.config.action_timeout_ms)
        except PlaywrightError as e:
            self._log.error("Element not found", element=description, error=str(e))
            raise ElementInteractionError(selector, description, str(e)) from e
        self._log.info("Element ready", element=description)

    # -------------------------------------------------------------------------
    # Optional actions
    # -------------------------------------------------------------------------

    def double_click(self, selector: str, description: str) -> ActionResult:
        """Double-click an element; failures are returned, not raised."""
        try:
            self._wait_visible(selector, self.config.action_timeout_ms)
            identifier = self._exercised_identifier(selector, description)
            self.page.dblclick(selector, timeout=self.config.action_timeout_ms)
        except PlaywrightError as e:
            return self._soft_failure(ActionKind.DOUBLE_CLICK, selector, description, str(e))

        self.registry.mark_exercised(identifier)
        self._log.info("Double clicked", element=description, identifier=identifier)
        self._settle(self.config.settle_after_click_ms)
        return ActionResult(
            action=ActionKind.DOUBLE_CLICK,
            selector=selector,
            description=description,
            succeeded=True,
            identifier=identifier,
        )

    def right_click(self, selector: str, description: str) -> ActionResult:
        """Right-click an element; failures are returned, not raised."""
        try:
            self._wait_visible(selector, self.config.action_timeout_ms)
            identifier = self._exercised_identifier(selector, description)
            self.page.click(selector, button="right", timeout=self.config.action_timeout_ms)
        except PlaywrightError as e:
            return self._soft_failure(ActionKind.RIGHT_CLICK, selector, description, str(e))

        self.registry.mark_exercised(identifier)
        self._log.info("Right clicked", element=description, identifier=identifier)
        self._settle(self.config.settle_after_click_ms)
        return ActionResult(
            action=ActionKind.RIGHT_CLICK,
            selector=selector,
            description=description,
            succeeded=True,
            identifier=identifier,
        )

    def check_visibility(self, selector: str, description: str) -> ActionResult:
        """
        Mark an element exercised if it is currently visible.

        An invisible element is a soft failure, as is any driver error.
        """
        try:
            visible = self.page.is_visible(selector, timeout=self.config.visibility_timeout_ms)
            if not visible:
                return self._soft_failure(
                    ActionKind.VISIBILITY, selector, description, "element not visible"
                )
            identifier = self._exercised_identifier(selector, description)
        except PlaywrightError as e:
            return self._soft_failure(ActionKind.VISIBILITY, selector, description, str(e))

        self.registry.mark_exercised(identifier)
        self._log.info("Visible", element=description, identifier=identifier)
        return ActionResult(
            action=ActionKind.VISIBILITY,
            selector=selector,
            description=description,
            succeeded=True,
            identifier=identifier,
        )

    # -------------------------------------------------------------------------
    # Passthrough
    # -------------------------------------------------------------------------

    def text_content(self, selector: str) -> str | None:
        """Read the text content of an element."""
        return self.page.text_content(selector, timeout=self.config.action_timeout_ms)

    def scan(self) -> ScanResult:
        """Re-scan the current page, e.g. after it changed dynamically."""
        return self.scanner.scan()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _wait_attached(self, selector: str) -> None:
        self.page.wait_for_selector(
            selector, state="attached", timeout=self.config.action_timeout_ms
        )

    def _wait_visible(self, selector: str, timeout: float) -> None:
        self.page.wait_for_selector(selector, state="visible", timeout=timeout)

    def _settle(self, delay_ms: float) -> None:
        """Pause after an action; the action itself has already succeeded."""
        if delay_ms <= 0:
            return
        try:
            self.page.wait_for_timeout(delay_ms)
        except PlaywrightError as e:
            self._log.warning("Settle interrupted", delay_ms=delay_ms, error=str(e))

    def _exercised_identifier(self, selector: str, description: str) -> str:
        """
        Identifier recorded for the element an action targets.

        Falls back to the action form when attributes cannot be read or the
        element has nothing stable to identify it by.
        """
        if self.config.identifier_mode is IdentifierMode.LEGACY:
            return self.policy.for_action(selector, description)

        try:
            raw = self.page.locator(selector).first.evaluate(
                DESCRIBE_ELEMENT_SCRIPT,
                {"selector": selector, "maxText": MAX_TEXT_PAYLOAD},
                timeout=self.config.action_timeout_ms,
            )
            element = ElementSnapshot.model_validate(raw)
        except (PlaywrightError, ValidationError) as e:
            self._log.debug("Could not resolve element", selector=selector, error=str(e))
            return self.policy.for_action(selector, description)

        if not self.policy.is_stable(element):
            return self.policy.for_action(selector, description)
        return self.policy.identify(element)

    def _soft_failure(
        self,
        action: ActionKind,
        selector: str,
        description: str,
        error: str,
    ) -> ActionResult:
        self._log.warning(
            "Optional action skipped",
            action=action.value,
            element=description,
            error=error,
        )
        return ActionResult(
            action=action,
            selector=selector,
            description=description,
            succeeded=False,
            error=error,
        )
