"""
Outcome models for wrapped UI actions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from uicov.errors import ElementInteractionError


class ActionKind(str, Enum):
    """UI actions that can mark coverage."""

    CLICK = "click"
    DOUBLE_CLICK = "double_click"
    RIGHT_CLICK = "right_click"
    FILL = "fill"
    WAIT = "wait"
    VISIBILITY = "visibility"


@dataclass(frozen=True)
class ActionResult:
    """
    Result of an optional UI action.

    Optional actions report failures here instead of raising, so a test can
    carry on or escalate with raise_for_failure().
    """

    action: ActionKind
    selector: str
    description: str
    succeeded: bool
    identifier: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Whether the action did not complete."""
        return not self.succeeded

    def raise_for_failure(self) -> "ActionResult":
        """
        Escalate a soft failure.

        Returns:
            This result, when the action succeeded

        Raises:
            ElementInteractionError: If the action failed
        """
        if self.failed:
            raise ElementInteractionError(self.selector, self.description, self.error or "")
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "action": self.action.value,
            "selector": self.selector,
            "description": self.description,
            "succeeded": self.succeeded,
            "identifier": self.identifier,
            "error": self.error,
        }
