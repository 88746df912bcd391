"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout web-automation-mcp,
providing clear error types for different failure scenarios.
"""

from web_automation_mcp.exceptions.base import (
    WebAutomationError,
    ConfigurationError,
)
from web_automation_mcp.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    BrowserConnectionError,
    EngineErrorKind,
    classify_engine_error,
)
from web_automation_mcp.exceptions.tool import (
    ToolError,
    UnknownToolError,
    ResourceNotInitializedError,
)
from web_automation_mcp.exceptions.codegen import (
    CodegenError,
    SessionNotFoundError,
    InvalidSessionError,
    CodegenConfigurationError,
)

__all__ = [
    # Base exceptions
    "WebAutomationError",
    "ConfigurationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "BrowserConnectionError",
    "EngineErrorKind",
    "classify_engine_error",
    # Tool exceptions
    "ToolError",
    "UnknownToolError",
    "ResourceNotInitializedError",
    # Codegen exceptions
    "CodegenError",
    "SessionNotFoundError",
    "InvalidSessionError",
    "CodegenConfigurationError",
]
