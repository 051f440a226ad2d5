"""Browser-side operations (Playwright async API).

Provides visible text and HTML extraction (``extraction``), locator
resolution for tagged elements (``locator``), text expectations
(``expectation``) and the CLI host's page session (``session``).
"""
