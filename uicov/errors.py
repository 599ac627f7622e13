"""
Exceptions raised by uicov.

Only required UI actions and configuration loading raise; coverage
instrumentation itself logs and degrades instead.
"""


class UICoverageError(Exception):
    """Base class for uicov errors."""


class ElementInteractionError(UICoverageError):
    """Raised when a required action cannot be performed on an element."""

    summary = "Element not interactable"

    def __init__(self, selector: str, description: str, reason: str = "") -> None:
        self.selector = selector
        self.description = description
        self.reason = reason
        message = f"{self.summary}: {selector} ({description})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NavigationError(ElementInteractionError):
    """Raised when a page cannot be loaded."""

    summary = "Navigation failed"

    @property
    def url(self) -> str:
        """The URL that failed to load."""
        return self.selector


class ConfigurationError(UICoverageError, ValueError):
    """Raised when a configuration source fails validation."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Invalid uicov configuration in {source}: {reason}")
