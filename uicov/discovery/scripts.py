"""
Scripts evaluated inside the browser page.

Both scripts emit records with the same keys (selector, tag, testId, id,
text) so that scanned elements and action targets go through the same
identifier policy on the host side.
"""

# Text is cut to maxText only to bound the payload; the identifier policy
# applies its own, shorter limit.
MAX_TEXT_PAYLOAD = 1000

# Builds one record for element `el` matched by `selector`. Attributes are
# read with getAttribute: element properties such as `id` can be shadowed by
# named form controls.
_ELEMENT_RECORD = """
    ({
        selector: selector,
        tag: typeof el.tagName === 'string' ? el.tagName : '',
        testId: el.getAttribute('data-testid'),
        id: el.getAttribute('id') || null,
        text: (typeof el.textContent === 'string' ? el.textContent : '').trim().slice(0, maxText),
    })
"""

# Arg: {selectors: string[], maxText: number}. Elements without a rendered
# box are skipped; a selector that fails to parse is skipped on its own.
COLLECT_ELEMENTS_SCRIPT = (
    """({selectors, maxText}) => {
    const records = [];
    for (const selector of selectors) {
        let found;
        try {
            found = document.querySelectorAll(selector);
        } catch (e) {
            continue;
        }
        for (const el of found) {
            if (el.getClientRects().length === 0) {
                continue;
            }
            records.push("""
    + _ELEMENT_RECORD
    + """);
        }
    }
    return records;
}"""
)

# Evaluated on a locator; arg: {selector: string, maxText: number}.
DESCRIBE_ELEMENT_SCRIPT = (
    """(el, {selector, maxText}) => """
    + _ELEMENT_RECORD
)
