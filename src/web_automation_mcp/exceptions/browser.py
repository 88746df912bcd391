"""
Browser-related exceptions and engine error classification.
"""

from enum import Enum

from web_automation_mcp.exceptions.base import WebAutomationError


class BrowserError(WebAutomationError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.

    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries
    - Invalid browser options
    - Resource constraints
    """
    pass


class BrowserConnectionError(BrowserError):
    """
    Connection to the browser was lost.

    Transient: the session state is reset and the caller may retry.
    """
    pass


class EngineErrorKind(str, Enum):
    """Kinds of failure reported by the automation engine."""
    DISCONNECTED = "disconnected"
    TIMEOUT = "timeout"
    OTHER = "other"


# Message fragments Playwright uses when the browser, context or page is gone.
DISCONNECT_SIGNATURES = (
    "Target page, context or browser has been closed",
    "Target closed",
    "Protocol error",
    "Connection closed",
    "Browser has been closed",
    "browser has disconnected",
)


def classify_engine_error(error: BaseException) -> EngineErrorKind:
    """
    Map an engine exception to an EngineErrorKind.

    This is the only place that inspects engine error text; callers
    switch on the returned kind.

    Args:
        error: Exception raised by the browser engine

    Returns:
        The classified kind
    """
    if isinstance(error, BrowserConnectionError):
        return EngineErrorKind.DISCONNECTED

    message = str(error)
    if any(signature in message for signature in DISCONNECT_SIGNATURES):
        return EngineErrorKind.DISCONNECTED

    if type(error).__name__ == "TimeoutError" or ("Timeout" in message and "exceeded" in message):
        return EngineErrorKind.TIMEOUT

    return EngineErrorKind.OTHER
