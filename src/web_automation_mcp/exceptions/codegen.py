"""
Code generation exceptions.
"""

from web_automation_mcp.exceptions.base import ConfigurationError, WebAutomationError


class CodegenError(WebAutomationError):
    """Base exception for recording and test generation errors."""
    pass


class SessionNotFoundError(CodegenError):
    """
    No codegen session exists with the given id.
    """

    def __init__(self, session_id: str | None):
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class InvalidSessionError(CodegenError):
    """
    Session data is structurally invalid.

    Raised when the session is missing, has no id, or its actions
    are not a list.
    """
    pass


class CodegenConfigurationError(CodegenError, ConfigurationError):
    """
    Generator options have the wrong types.
    """
    pass
