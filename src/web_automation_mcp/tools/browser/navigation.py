"""
Navigation Tools - Page navigation, history and browser teardown.
"""

import logging
from typing import Any, Dict

from web_automation_mcp.registry import register_tool
from web_automation_mcp.tools.base import BrowserToolBase, require_args
from web_automation_mcp.tools.catalog import CLOSE_TOOL
from web_automation_mcp.tools.types import ToolContext, ToolResponse, create_success_response

logger = logging.getLogger(__name__)


@register_tool("playwright_navigate")
class NavigateTool(BrowserToolBase):
    """Navigate the page to a URL."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        timeout = args.get("timeout") or context.settings.browser.navigation_timeout_ms
        wait_until = args.get("waitUntil") or "load"

        async def operation(page: Any) -> ToolResponse:
            require_args(args, "url")
            await page.goto(args["url"], timeout=timeout, wait_until=wait_until)
            return create_success_response(f"Navigated to {args['url']}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_go_back")
class GoBackTool(BrowserToolBase):
    """Navigate back in history."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            await page.go_back()
            return create_success_response("Navigated back in browser history")

        return await self.safe_execute(context, operation)


@register_tool("playwright_go_forward")
class GoForwardTool(BrowserToolBase):
    """Navigate forward in history."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            await page.go_forward()
            return create_success_response("Navigated forward in browser history")

        return await self.safe_execute(context, operation)


@register_tool(CLOSE_TOOL)
class CloseBrowserTool(BrowserToolBase):
    """
    Close the browser.

    Never fails: closing an already closed or missing browser is reported
    as success, and session state is always left empty.
    """

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        if context.state is not None:
            closed = await context.state.browser.close()
        elif context.browser is not None:
            try:
                await context.browser.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing browser: {e}")
            closed = True
        else:
            closed = False

        if closed:
            return create_success_response("Browser closed successfully")
        return create_success_response("No browser instance to close")
