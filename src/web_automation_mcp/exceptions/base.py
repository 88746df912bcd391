"""
Base exceptions for web-automation-mcp.
"""


class WebAutomationError(Exception):
    """
    Base exception for all web-automation-mcp errors.

    All custom exceptions inherit from this class, making it easy
    to catch any error raised by the tool server.

    Attributes:
        message: Human-readable error message
        details: Optional additional error details
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(WebAutomationError):
    """
    Error in configuration.

    Raised when there's an issue with settings, environment variables,
    configuration files or options passed to a component.
    """
    pass
