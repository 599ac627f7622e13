"""Browser-free stand-ins for Playwright objects."""

from typing import Any

from playwright.sync_api import Error as PlaywrightError


class FakeLocator:
    """Stand-in for ``page.locator(selector).first``."""

    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    def evaluate(self, expression: str, arg: Any = None, timeout: float | None = None) -> Any:
        self.page.calls.append(("locator.evaluate", self.selector))
        if self.selector not in self.page.elements:
            raise PlaywrightError(f"No element matches {self.selector}")
        return self.page.elements[self.selector]


class FakePage:
    """
    Browser-free stand-in for a Playwright sync Page.

    - ``records``: what the collection script returns (or an exception to raise)
    - ``elements``: attribute records per selector for action targets
    - ``failures``: method name -> exception raised when it is called
    - ``hidden``: selectors reported as not visible
    """

    def __init__(
        self,
        records: Any = None,
        elements: dict[str, Any] | None = None,
        failures: dict[str, Exception] | None = None,
        hidden: set[str] | None = None,
        url: str = "https://example.test/form",
    ):
        self.records = [] if records is None else records
        self.elements = elements or {}
        self.failures = failures or {}
        self.hidden = hidden or set()
        self.url = url
        self.calls: list[tuple[str, Any]] = []
        self.text: dict[str, str] = {}

    def _call(self, name: str, detail: Any = None) -> None:
        self.calls.append((name, detail))
        if name in self.failures:
            raise self.failures[name]

    def called(self, name: str) -> list[Any]:
        return [detail for call, detail in self.calls if call == name]

    def evaluate(self, expression: str, arg: Any = None) -> Any:
        self._call("evaluate", arg)
        if isinstance(self.records, Exception):
            raise self.records
        return self.records

    def goto(self, url: str, wait_until: str | None = None, timeout: float | None = None) -> None:
        self._call("goto", url)
        self.url = url

    def wait_for_load_state(self, state: str | None = None, timeout: float | None = None) -> None:
        self._call("wait_for_load_state", state)

    def wait_for_timeout(self, timeout: float) -> None:
        self._call("wait_for_timeout", timeout)

    def wait_for_selector(self, selector: str, state: str | None = None, timeout: float | None = None) -> None:
        self._call("wait_for_selector", (selector, state))

    def click(self, selector: str, button: str = "left", timeout: float | None = None) -> None:
        self._call("right_click" if button == "right" else "click", selector)

    def dblclick(self, selector: str, timeout: float | None = None) -> None:
        self._call("dblclick", selector)

    def fill(self, selector: str, value: str, timeout: float | None = None) -> None:
        self._call("fill", (selector, value))

    def is_visible(self, selector: str, timeout: float | None = None) -> bool:
        self._call("is_visible", selector)
        return selector not in self.hidden

    def text_content(self, selector: str, timeout: float | None = None) -> str | None:
        self._call("text_content", selector)
        return self.text.get(selector)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)


def record(
    selector: str = "button",
    tag: str = "BUTTON",
    test_id: str | None = None,
    element_id: str | None = None,
    text: str = "",
) -> dict[str, Any]:
    """Build a record shaped like the in-page script output."""
    return {"selector": selector, "tag": tag, "testId": test_id, "id": element_id, "text": text}
