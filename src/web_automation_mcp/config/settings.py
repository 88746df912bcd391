"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from web_automation_mcp.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.browser.browser_type)
    'chromium'
"""

from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserSettings(BaseModel):
    """
    Browser session settings.

    Attributes:
        browser_type: Playwright browser to launch
        headless: Run browser in headless mode
        viewport_width: Default viewport width in pixels
        viewport_height: Default viewport height in pixels
        user_agent: Custom user agent string
        navigation_timeout_ms: Default timeout for page navigation
        downloads_dir: Where screenshots are saved as PNG (None for ~/Downloads)
    """
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = False
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=720, ge=240, le=2160)
    user_agent: Optional[str] = None
    navigation_timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    downloads_dir: Optional[str] = None


class HttpSettings(BaseModel):
    """
    Settings for the HTTP request tools.

    Attributes:
        timeout_s: Request timeout in seconds
        default_headers: Headers sent with every body-carrying request
    """
    timeout_s: float = Field(default=30.0, gt=0, le=600)
    default_headers: Dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )


class CodegenSettings(BaseModel):
    """
    Defaults for test generation from recorded sessions.
    """
    output_directory: str = "tests"
    test_name_prefix: str = "MCP"
    include_comments: bool = True


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for the file log
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with WEB_AUTOMATION_MCP__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(browser=BrowserSettings(headless=True))  # Override
    """

    model_config = SettingsConfigDict(
        env_prefix="WEB_AUTOMATION_MCP__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    codegen: CodegenSettings = Field(default_factory=CodegenSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    server_name: str = "web-automation-mcp"
    debug: bool = False

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
