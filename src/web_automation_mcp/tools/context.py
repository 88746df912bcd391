"""
Tool Context Builder - Acquires the resources a tool call needs.

Resources are built lazily per category: the browser is only ensured for
browser tools and an HTTP client only exists for HTTP tools.
"""

import logging
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

import httpx

from web_automation_mcp.browsers.session import LaunchOptions
from web_automation_mcp.tools.catalog import ToolCategory, classify_tool
from web_automation_mcp.tools.types import ToolContext

if TYPE_CHECKING:
    from web_automation_mcp.state import ServerState

logger = logging.getLogger(__name__)

# base_url -> client
HttpClientFactory = Callable[[str], httpx.AsyncClient]

USER_AGENT_TOOL = "playwright_custom_user_agent"


def launch_options_from_args(name: str, args: Dict[str, Any]) -> LaunchOptions:
    """
    Extract per-call browser options from tool arguments.

    Args:
        name: Tool name
        args: Raw tool arguments

    Returns:
        Options with only the fields the call specified
    """
    headless = args.get("headless")
    return LaunchOptions(
        headless=bool(headless) if headless is not None else None,
        viewport_width=args.get("width"),
        viewport_height=args.get("height"),
        user_agent=args.get("userAgent") if name == USER_AGENT_TOOL else None,
        browser_type=args.get("browserType"),
    )


class ToolContextBuilder:
    """
    Builds the ToolContext for one call.

    Example:
        >>> builder = ToolContextBuilder(state)
        >>> context = await builder.build("playwright_click", {"selector": "#go"})
        >>> context.page is not None
        True
    """

    def __init__(
        self,
        state: "ServerState",
        http_client_factory: Optional[HttpClientFactory] = None,
    ):
        self._state = state
        self._http_client_factory = http_client_factory or self._default_http_client

    async def build(self, name: str, args: Dict[str, Any], server: Any = None) -> ToolContext:
        """
        Build the context for a call.

        Raises:
            BrowserError: If a browser tool's page cannot be brought up
        """
        context = ToolContext(server=server, state=self._state)
        category = classify_tool(name)

        if category is ToolCategory.BROWSER:
            page = await self._state.browser.ensure(launch_options_from_args(name, args))
            context.page = page
            context.browser = self._state.browser.browser

        elif category is ToolCategory.HTTP:
            url = args.get("url")
            if url:
                context.api_context = self._http_client_factory(str(url))

        return context

    def _default_http_client(self, base_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=self._state.settings.http.timeout_s,
        )
