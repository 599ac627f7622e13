"""
uicov Actions.

Coverage-aware wrappers around Playwright page actions.
"""

from uicov.actions.models import ActionKind, ActionResult
from uicov.actions.tracked_page import TrackedPage

__all__ = [
    "ActionKind",
    "ActionResult",
    "TrackedPage",
]
