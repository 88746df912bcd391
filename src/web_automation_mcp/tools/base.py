"""
Tool Bases - Shared error handling for browser and HTTP tools.

Concrete tools run exactly one engine operation through safe_execute,
which validates the resource first and turns any failure into an error
response. Nothing raised by the engine reaches the dispatcher from here.
"""

import logging
from typing import Any, Awaitable, Callable, TYPE_CHECKING

from web_automation_mcp.exceptions import EngineErrorKind, classify_engine_error
from web_automation_mcp.tools.types import (
    ToolContext,
    ToolHandler,
    ToolResponse,
    create_error_response,
)

if TYPE_CHECKING:
    import httpx
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

PAGE_NOT_INITIALIZED = "Browser page not initialized"
SESSION_CLOSED = "Browser session has been closed. Please try again with a new action."
CONNECTION_LOST = "Browser connection was lost. Please try again with a new action."
API_NOT_INITIALIZED = "API context not initialized"

BrowserOperation = Callable[["Page"], Awaitable[ToolResponse]]
ApiOperation = Callable[["httpx.AsyncClient"], Awaitable[ToolResponse]]


def _error_message(error: BaseException) -> str:
    # Playwright errors carry the engine text on .message
    return getattr(error, "message", None) or str(error)


class BrowserToolBase(ToolHandler):
    """Base class for tools that drive the browser page."""

    async def safe_execute(self, context: ToolContext, operation: BrowserOperation) -> ToolResponse:
        """
        Run a page operation with resource checks and error classification.

        Args:
            context: Resources for this call
            operation: Coroutine function taking the page

        Returns:
            The operation's response, or an error response
        """
        page = context.page
        if page is None:
            return create_error_response(PAGE_NOT_INITIALIZED)

        browser = context.browser
        if browser is None or not browser.is_connected() or page.is_closed():
            logger.warning("Browser session is gone, resetting state")
            context.reset_browser_state()
            return create_error_response(SESSION_CLOSED)

        try:
            return await operation(page)
        except Exception as e:
            message = _error_message(e)
            if classify_engine_error(e) is EngineErrorKind.DISCONNECTED:
                logger.warning(f"{type(self).__name__}: browser connection lost: {message}")
                context.reset_browser_state()
                return create_error_response(CONNECTION_LOST)

            logger.debug(f"{type(self).__name__} failed: {message}")
            return create_error_response(f"Operation failed: {message}")


class ApiToolBase(ToolHandler):
    """Base class for tools that issue HTTP requests."""

    async def safe_execute(self, context: ToolContext, operation: ApiOperation) -> ToolResponse:
        """
        Run an HTTP operation, converting failures into error responses.
        """
        client = context.api_context
        if client is None:
            return create_error_response(API_NOT_INITIALIZED)

        try:
            return await operation(client)
        except Exception as e:
            message = _error_message(e)
            logger.debug(f"{type(self).__name__} failed: {message}")
            return create_error_response(f"API operation failed: {message}")


def require_args(args: Any, *names: str) -> None:
    """
    Check that every named argument is present.

    Raises:
        ValueError: Naming the first missing argument
    """
    for name in names:
        if not isinstance(args, dict) or args.get(name) is None:
            raise ValueError(f"Missing required argument: {name}")
