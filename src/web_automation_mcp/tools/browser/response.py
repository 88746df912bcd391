"""
Response Tools - Wait for a network response in one call, check it in another.

playwright_expect_response starts the wait and returns at once;
playwright_assert_response later awaits it under the same id. Waits live on
ServerState so they survive between calls and are cancelled on close.
"""

import asyncio
import logging
from fnmatch import fnmatchcase
from typing import Any, Dict

from web_automation_mcp.registry import register_tool
from web_automation_mcp.tools.base import BrowserToolBase, require_args
from web_automation_mcp.tools.types import (
    ToolContext,
    ToolResponse,
    create_error_response,
    create_success_response,
)

logger = logging.getLogger(__name__)


def url_matches(pattern: str, url: str) -> bool:
    """Exact URL or shell-style glob (``**/api/*``)."""
    return url == pattern or fnmatchcase(url, pattern)


@register_tool("playwright_expect_response")
class ExpectResponseTool(BrowserToolBase):
    """Start waiting for a response whose URL matches a pattern."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "id", "url")
            if context.state is None:
                return create_error_response("Server state not initialized")

            response_id = str(args["id"])
            pattern = str(args["url"])
            previous = context.state.pending_responses.pop(response_id, None)
            if previous is not None and not previous.done():
                previous.cancel()

            waiter = asyncio.ensure_future(
                page.wait_for_event("response", lambda response: url_matches(pattern, response.url))
            )
            context.state.pending_responses[response_id] = waiter
            logger.debug(f"Waiting for response {response_id} matching {pattern}")
            return create_success_response(f"Started waiting for response with ID {response_id}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_assert_response")
class AssertResponseTool(BrowserToolBase):
    """Await a response started by playwright_expect_response and check its body."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "id")
            response_id = str(args["id"])
            pending = context.state.pending_responses if context.state is not None else {}
            waiter = pending.pop(response_id, None)
            if waiter is None:
                return create_error_response(f"No response wait operation found with ID: {response_id}")

            response = await waiter
            body = await response.text()

            expected = args.get("value")
            if expected is not None and str(expected) not in body:
                return create_error_response(
                    f"Response body does not contain expected value: {expected}"
                )

            return create_success_response([
                f"Response assertion for ID {response_id} successful",
                f"URL: {response.url}",
                f"Status: {response.status}",
                f"Body: {body}",
            ])

        return await self.safe_execute(context, operation)
