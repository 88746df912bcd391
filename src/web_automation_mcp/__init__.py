"""
Web Automation MCP - Browser and HTTP automation tools over the Model Context Protocol.

This package exposes Playwright-driven browser tools and httpx-driven HTTP
tools behind a single dispatcher, and can record tool calls into pytest
test modules.

Example:
    >>> from web_automation_mcp import ServerState, ToolDispatcher
    >>> dispatcher = ToolDispatcher(ServerState.create())
    >>> await dispatcher.dispatch("playwright_navigate", {"url": "https://example.com"})
"""

__version__ = "0.1.0"

# Public API exports
from web_automation_mcp.config.settings import Settings
from web_automation_mcp.state import ServerState
from web_automation_mcp.dispatcher import ToolDispatcher

__all__ = [
    "Settings",
    "ServerState",
    "ToolDispatcher",
    "__version__",
]
