"""
Configuration module - Centralized settings management.

This module provides type-safe configuration management using Pydantic,
supporting environment variables, YAML files, and CLI arguments.

Usage:
    from web_automation_mcp.config import load_config

    settings = load_config()

    # With overrides
    settings = load_config(browser={"headless": True})

Environment Variables:
    WEB_AUTOMATION_MCP__BROWSER__HEADLESS=true
    WEB_AUTOMATION_MCP__BROWSER__BROWSER_TYPE=firefox
    WEB_AUTOMATION_MCP__CODEGEN__OUTPUT_DIRECTORY=generated
"""

from web_automation_mcp.config.settings import (
    Settings,
    BrowserSettings,
    HttpSettings,
    CodegenSettings,
    LoggingSettings,
)
from web_automation_mcp.config.loader import ConfigLoader, load_config

__all__ = [
    "Settings",
    "BrowserSettings",
    "HttpSettings",
    "CodegenSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
]
