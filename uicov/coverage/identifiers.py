"""
Element identifier policy.

Turns what is known about a DOM element into the string that represents it
in the coverage registry. Two forms exist:

- Element identifiers, derived by a priority chain over the element's
  attributes (test-id, id, visible text, selector fallback)
- Action identifiers, ``selector::description``, used when a wrapped UI
  action cannot resolve the element's attributes
"""

from collections.abc import Callable
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TEXT_LIMIT = 30
DEFAULT_DESCRIPTION = "element"


class IdentifierSource(str, Enum):
    """Which branch of the policy produced an identifier."""

    TEST_ID = "data-testid"
    ID = "id"
    TEXT = "text"
    FALLBACK = "fallback"
    ACTION = "action"


class ElementSnapshot(BaseModel):
    """Attributes of one DOM element as reported by the in-page script.

    Field aliases match the keys produced by the browser-side script, so a
    raw record validates directly:

        >>> ElementSnapshot.model_validate(
        ...     {"selector": "button", "tag": "BUTTON", "id": "submit"}
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    selector: str
    tag: str = ""
    test_id: str | None = Field(default=None, alias="testId")
    element_id: str | None = Field(default=None, alias="id")
    text: str | None = None


def _random_suffix() -> str:
    return uuid4().hex[:6]


class IdentifierPolicy:
    """
    Derive registry identifiers for elements and actions.

    Priority chain for elements, first match wins:
    1. ``data-testid:<value>``
    2. ``id:<value>`` for a non-blank id
    3. ``<TAG>:text=<first N chars of trimmed text>``
    4. ``<selector>:<random suffix>``

    The last branch is not deterministic: the same element gets a new
    identifier on every scan.
    """

    def __init__(
        self,
        text_limit: int = DEFAULT_TEXT_LIMIT,
        suffix_factory: Callable[[], str] | None = None,
    ):
        """
        Initialize identifier policy.

        Args:
            text_limit: Maximum number of text characters kept in text identifiers
            suffix_factory: Produces fallback suffixes (random by default)
        """
        if text_limit < 1:
            msg = f"text_limit must be positive, got {text_limit}"
            raise ValueError(msg)
        self.text_limit = text_limit
        self.suffix_factory = suffix_factory or _random_suffix

    def source_of(self, element: ElementSnapshot) -> IdentifierSource:
        """Return the branch of the chain that applies to an element."""
        if element.test_id:
            return IdentifierSource.TEST_ID
        if element.element_id and element.element_id.strip():
            return IdentifierSource.ID
        if element.text and element.text.strip():
            return IdentifierSource.TEXT
        return IdentifierSource.FALLBACK

    def is_stable(self, element: ElementSnapshot) -> bool:
        """Whether repeated scans yield the same identifier for this element."""
        return self.source_of(element) is not IdentifierSource.FALLBACK

    def identify(self, element: ElementSnapshot) -> str:
        """Derive the identifier for a scanned element."""
        source = self.source_of(element)
        if source is IdentifierSource.TEST_ID:
            return f"data-testid:{element.test_id}"
        if source is IdentifierSource.ID:
            return f"id:{element.element_id}"
        if source is IdentifierSource.TEXT:
            text = (element.text or "").strip()[: self.text_limit]
            return f"{element.tag}:text={text}"
        return f"{element.selector}:{self.suffix_factory()}"

    def for_action(self, selector: str, description: str | None = None) -> str:
        """Derive the identifier for an element targeted by a UI action."""
        return f"{selector}::{description or DEFAULT_DESCRIPTION}"


_default_policy = IdentifierPolicy()


def identify(element: ElementSnapshot) -> str:
    """Derive an element identifier with the default policy."""
    return _default_policy.identify(element)


def action_identifier(selector: str, description: str | None = None) -> str:
    """Derive an action identifier with the default policy."""
    return _default_policy.for_action(selector, description)
