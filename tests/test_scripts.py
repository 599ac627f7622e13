"""
Tests for the in-page collection script, evaluated by Node against a
minimal fake DOM.

Skipped when ``node`` is not on PATH.
"""

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest
from fakes import FakePage

from uicov.config import DEFAULT_SELECTORS
from uicov.coverage import CoverageRegistry
from uicov.discovery import PageScanner
from uicov.discovery.scripts import COLLECT_ELEMENTS_SCRIPT, MAX_TEXT_PAYLOAD

NODE = shutil.which("node")

pytestmark = pytest.mark.skipif(NODE is None, reason="node is not installed")

# Elements are described as JSON: tag, attrs, text, visible, and optionally
# `idProperty` to shadow el.id the way a named form control does.
HARNESS = """
const spec = JSON.parse(process.argv[2]);

function makeElement(desc) {
    const attrs = desc.attrs || {};
    return {
        tagName: desc.tag,
        id: 'idProperty' in desc ? desc.idProperty : (attrs.id || ''),
        textContent: desc.text || '',
        getAttribute: (name) => (name in attrs ? attrs[name] : null),
        getClientRects: () => (desc.visible === false ? [] : [{}]),
    };
}

const bySelector = {};
for (const [selector, descs] of Object.entries(spec.dom)) {
    bySelector[selector] = descs.map(makeElement);
}

globalThis.document = {
    querySelectorAll: (selector) => {
        if (spec.invalid.includes(selector)) {
            throw new SyntaxError(`'${selector}' is not a valid selector`);
        }
        return bySelector[selector] || [];
    },
};

const collect = (SCRIPT);
process.stdout.write(JSON.stringify(collect(spec.arg)));
"""


def run_collect_script(
    tmp_path: Path,
    dom: dict[str, list[dict[str, Any]]],
    selectors: list[str],
    invalid: list[str] | None = None,
) -> Any:
    """Evaluate COLLECT_ELEMENTS_SCRIPT under node and return its result."""
    harness = tmp_path / "collect.js"
    harness.write_text(HARNESS.replace("(SCRIPT)", f"({COLLECT_ELEMENTS_SCRIPT})"), encoding="utf-8")
    spec = {
        "dom": dom,
        "invalid": invalid or [],
        "arg": {"selectors": selectors, "maxText": MAX_TEXT_PAYLOAD},
    }
    completed = subprocess.run(
        [NODE, str(harness), json.dumps(spec)],
        check=True,
        text=True,
        capture_output=True,
        timeout=60,
    )
    return json.loads(completed.stdout)


def button(element_id: str, visible: bool = True) -> dict[str, Any]:
    return {"tag": "BUTTON", "attrs": {"id": element_id}, "text": element_id.upper(), "visible": visible}


class TestCollectElementsScript:
    """Test the browser-side collection script."""

    def test_skips_elements_without_rendered_box(self, tmp_path):
        """Test that five visible and two hidden buttons yield five elements."""
        buttons = [button(f"b{i}") for i in range(1, 6)] + [button("h1", False), button("h2", False)]
        raw = run_collect_script(tmp_path, {"button": buttons, "[id]": buttons}, list(DEFAULT_SELECTORS))

        registry = CoverageRegistry()
        result = PageScanner(FakePage(records=raw), registry).scan()

        assert result.count == 5
        assert registry.discovered == {"id:b1", "id:b2", "id:b3", "id:b4", "id:b5"}

    def test_reads_id_attribute_not_property(self, tmp_path):
        """Test that a form whose id property is a named control still scans."""
        form = {"tag": "FORM", "attrs": {"onclick": "go()"}, "text": "Search", "idProperty": {"name": "id"}}
        raw = run_collect_script(
            tmp_path,
            {"button": [button("ok")], "[onclick]": [form]},
            ["button", "[onclick]"],
        )

        assert raw[1]["id"] is None

        registry = CoverageRegistry()
        result = PageScanner(FakePage(records=raw), registry).scan()

        assert result.rejected == 0
        assert registry.discovered == {"id:ok", "FORM:text=Search"}

    def test_trims_and_bounds_text(self, tmp_path):
        """Test text trimming and the payload limit."""
        link = {"tag": "A", "attrs": {}, "text": "   " + "x" * (MAX_TEXT_PAYLOAD + 50) + "   "}
        raw = run_collect_script(tmp_path, {"a": [link]}, ["a"])

        assert raw[0]["text"] == "x" * MAX_TEXT_PAYLOAD
        assert raw[0]["testId"] is None

    def test_invalid_selector_is_skipped(self, tmp_path):
        """Test that a selector the page rejects does not stop the others."""
        raw = run_collect_script(
            tmp_path,
            {"button": [button("ok")]},
            ["li:bad(", "button"],
            invalid=["li:bad("],
        )

        assert [record["id"] for record in raw] == ["ok"]
        assert raw[0]["selector"] == "button"
