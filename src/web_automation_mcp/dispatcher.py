"""
Tool Dispatcher - Routes a named tool call to its handler.

dispatch() is total: whatever happens inside, the caller receives a
ToolResponse and nothing is raised.

Call order:
    1. Session-control tools run directly and are never recorded.
    2. Unknown names fail without side effects.
    3. The call is recorded into the active codegen session (except close).
    4. playwright_close tears the browser down and always succeeds.
    5. A disconnected browser handle is discarded before context building.
    6. The context is built and the handler runs.
    7. The per-call HTTP client, if any, is closed.

Example:
    >>> dispatcher = ToolDispatcher(ServerState.create())
    >>> response = await dispatcher.dispatch("playwright_navigate", {"url": "https://example.com"})
    >>> response.is_error
    False
"""

import logging
from typing import Any, Dict, Optional

# Imported for their side effect of registering handlers
import web_automation_mcp.tools.api  # noqa: F401
import web_automation_mcp.tools.browser  # noqa: F401
import web_automation_mcp.tools.codegen  # noqa: F401
from web_automation_mcp.config.settings import Settings
from web_automation_mcp.exceptions import UnknownToolError
from web_automation_mcp.registry import get_tool_handler
from web_automation_mcp.state import ServerState
from web_automation_mcp.tools.catalog import CLOSE_TOOL, ToolCategory, classify_tool
from web_automation_mcp.tools.context import ToolContextBuilder
from web_automation_mcp.tools.types import (
    ToolContext,
    ToolResponse,
    create_error_response,
    create_success_response,
)

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """
    Dispatches tool calls against one ServerState.

    Assumes a single in-flight call; concurrent dispatches on the same
    state are not supported.
    """

    def __init__(
        self,
        state: ServerState,
        settings: Optional[Settings] = None,
        context_builder: Optional[ToolContextBuilder] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            state: Shared per-connection state
            settings: Overrides state.settings if given
            context_builder: Custom context builder (defaults to one on state)
        """
        self.state = state
        if settings is not None:
            self.state.settings = settings
        self.context_builder = context_builder or ToolContextBuilder(state)

    async def dispatch(
        self,
        name: str,
        args: Optional[Dict[str, Any]] = None,
        server: Any = None,
    ) -> ToolResponse:
        """
        Execute a tool call.

        Args:
            name: Tool name
            args: Raw tool arguments
            server: Transport-level server reference passed to handlers

        Returns:
            The tool's response, or an error response. Never raises.
        """
        args = dict(args or {})
        category = classify_tool(name)
        handler_class = get_tool_handler(name)
        logger.debug(f"Dispatching {name} ({category.value})")

        try:
            if category is ToolCategory.SESSION_CONTROL and handler_class is not None:
                context = ToolContext(server=server, state=self.state)
                return await handler_class(server).execute(args, context)

            if category is ToolCategory.UNKNOWN or handler_class is None:
                raise UnknownToolError(name)
        except Exception as e:
            return self._error_response(name, e)

        if name != CLOSE_TOOL:
            self.state.recorder.record(name, args)

        if name == CLOSE_TOOL:
            return await self._close(args, server)

        context: Optional[ToolContext] = None
        try:
            if category is ToolCategory.BROWSER:
                await self.state.browser.discard_if_disconnected()

            context = await self.context_builder.build(name, args, server)
            return await handler_class(server).execute(args, context)
        except Exception as e:
            return self._error_response(name, e)
        finally:
            if context is not None and context.api_context is not None:
                await self._close_http_client(context)

    async def _close(self, args: Dict[str, Any], server: Any) -> ToolResponse:
        handler_class = get_tool_handler(CLOSE_TOOL)
        context = ToolContext(
            browser=self.state.browser.browser,
            server=server,
            state=self.state,
        )
        try:
            return await handler_class(server).execute(args, context)
        except Exception as e:
            logger.warning(f"Error while closing browser: {e}")
            return create_success_response("Browser closed successfully")
        finally:
            self.state.cancel_pending_responses()
            self.state.browser.reset()

    @staticmethod
    async def _close_http_client(context: ToolContext) -> None:
        try:
            await context.api_context.aclose()
        except Exception as e:
            logger.debug(f"Ignoring error while closing HTTP client: {e}")

    @staticmethod
    def _error_response(name: str, error: Exception) -> ToolResponse:
        if isinstance(error, UnknownToolError):
            logger.warning(str(error))
        else:
            logger.error(f"Tool {name} failed: {error}")
        return create_error_response(str(error))
