"""
Utility helpers.
"""

from web_automation_mcp.utils.logging import setup_logging
from web_automation_mcp.utils.retry import RetryConfig, retry_async

__all__ = [
    "setup_logging",
    "RetryConfig",
    "retry_async",
]
