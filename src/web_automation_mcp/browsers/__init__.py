"""
Browsers module - Browser session management.
"""

from web_automation_mcp.browsers.session import (
    BrowserSessionManager,
    LaunchOptions,
    PlaywrightLauncher,
)

__all__ = [
    "BrowserSessionManager",
    "LaunchOptions",
    "PlaywrightLauncher",
]
