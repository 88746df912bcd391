"""
HTTP tools - Request handlers backed by httpx.

Importing this package registers every HTTP tool.
"""

from web_automation_mcp.tools.api.requests import (
    HttpRequestTool,
    GetRequestTool,
    PostRequestTool,
    PutRequestTool,
    PatchRequestTool,
    DeleteRequestTool,
)

__all__ = [
    "HttpRequestTool",
    "GetRequestTool",
    "PostRequestTool",
    "PutRequestTool",
    "PatchRequestTool",
    "DeleteRequestTool",
]
