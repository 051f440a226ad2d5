"""pagetools exception hierarchy."""

from __future__ import annotations


class PageToolsError(Exception):
    """Base exception for all pagetools errors."""


class ConnectivityError(PageToolsError):
    """Raised when the browser is no longer connected.

    Raising this is always paired with the caller's reset callback so the
    connection layer recreates the browser on the next navigation.
    """

    def __init__(self) -> None:
        super().__init__(
            "Browser is not connected. The connection has been reset - please retry your navigation."
        )


class UnavailablePageError(PageToolsError):
    """Raised when there is no page, or the page has been closed."""

    def __init__(self) -> None:
        super().__init__("Page is not available or has been closed. Please retry your navigation.")


class SelectorNotFoundError(PageToolsError):
    """Raised when an explicit selector matches no element.

    Attributes:
        selector: The selector that matched nothing.
    """

    def __init__(self, selector: str, message: str | None = None) -> None:
        self.selector = selector
        super().__init__(message or f'Element with selector "{selector}" not found')


class ConfigurationError(PageToolsError):
    """Raised when the tag configuration is missing or invalid."""


class EvaluationError(PageToolsError):
    """Raised when an in-page evaluation fails unexpectedly.

    Attributes:
        operation: Short description of what was being evaluated.
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Failed to {operation}: {message}")


class MissingArgumentError(PageToolsError):
    """Raised when a tool is invoked without a required argument."""

    def __init__(self, *names: str) -> None:
        self.names = names
        super().__init__(f"Missing required parameters: {', '.join(names)} must be provided")
