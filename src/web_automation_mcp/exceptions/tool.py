"""
Tool dispatch exceptions.
"""

from web_automation_mcp.exceptions.base import WebAutomationError


class ToolError(WebAutomationError):
    """Base exception for tool-related errors."""
    pass


class UnknownToolError(ToolError):
    """
    Tool name is not in the catalog.

    Raised when a call names a tool no handler is registered for.
    """

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ResourceNotInitializedError(ToolError):
    """
    A resource the tool needs is missing from its context.

    Raised before any engine call is attempted.
    """

    def __init__(self, message: str, resource: str):
        super().__init__(message, {"resource": resource})
        self.resource = resource
