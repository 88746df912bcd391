"""
HTTP Request Tools - GET, POST, PUT, PATCH and DELETE through httpx.

Each tool issues exactly one request on the per-call client and reports
the method, the status line and the response body.
"""

import json
from typing import Any, Dict, List, Optional

import httpx

from web_automation_mcp.registry import register_tool
from web_automation_mcp.tools.base import ApiToolBase, require_args
from web_automation_mcp.tools.types import ToolContext, ToolResponse, create_success_response


class HttpRequestTool(ApiToolBase):
    """
    Shared request logic. Subclasses set the method and whether a body is sent.
    """

    method: str = "GET"
    sends_body: bool = False

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(client: httpx.AsyncClient) -> ToolResponse:
            required = ("url", "value") if self.sends_body else ("url",)
            require_args(args, *required)

            headers = self._headers(args, context)
            kwargs: Dict[str, Any] = {"headers": headers}
            if self.sends_body:
                value = args["value"]
                kwargs["content"] = value if isinstance(value, str) else json.dumps(value)

            response = await client.request(self.method, args["url"], **kwargs)
            return create_success_response(self._describe(args["url"], response))

        return await self.safe_execute(context, operation)

    def _headers(self, args: Dict[str, Any], context: ToolContext) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.sends_body:
            headers.update(context.settings.http.default_headers)
        extra: Optional[Dict[str, Any]] = args.get("headers")
        if isinstance(extra, dict):
            headers.update({str(k): str(v) for k, v in extra.items()})
        return headers

    def _describe(self, url: str, response: httpx.Response) -> List[str]:
        lines = [
            f"{self.method} request to {url}",
            f"Status: {response.status_code} {response.reason_phrase}".rstrip(),
        ]
        body = response.text
        if body:
            lines.append(f"Response: {body}")
        return lines


@register_tool("playwright_get")
class GetRequestTool(HttpRequestTool):
    """Perform a GET request."""
    method = "GET"


@register_tool("playwright_post")
class PostRequestTool(HttpRequestTool):
    """Perform a POST request."""
    method = "POST"
    sends_body = True


@register_tool("playwright_put")
class PutRequestTool(HttpRequestTool):
    """Perform a PUT request."""
    method = "PUT"
    sends_body = True


@register_tool("playwright_patch")
class PatchRequestTool(HttpRequestTool):
    """Perform a PATCH request."""
    method = "PATCH"
    sends_body = True


@register_tool("playwright_delete")
class DeleteRequestTool(HttpRequestTool):
    """Perform a DELETE request."""
    method = "DELETE"
