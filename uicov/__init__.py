"""
uicov - Interaction coverage for browser-driven UI tests.

Discovers the interactive elements of every page a test visits, records
which of them the test actually exercised, and reports the ratio.

Usage:
    uicov scan <url>           # Discover interactive elements on a page
    pytest --uicov-report r.html  # Collect coverage during a pytest run
"""

__version__ = "0.1.0"
