"""
Browser Session Manager - Owns the shared browser connection and its page.

Tool calls arrive independently and carry no browser state of their own.
The manager makes them behave like one session: the browser is launched
on first need, validated whenever a page is requested, and relaunched
when it is found dead.

Validity is only checked at the moment a page is requested (lazy
recreate); there is no background health checking. The manager assumes
at most one in-flight caller.

Example:
    >>> manager = BrowserSessionManager(BrowserSettings(headless=True))
    >>> page = await manager.ensure()
    >>> await page.goto("https://example.com")
    >>> await manager.close()
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TYPE_CHECKING

from web_automation_mcp.config.settings import BrowserSettings
from web_automation_mcp.exceptions import BrowserError, BrowserLaunchError
from web_automation_mcp.utils.retry import RetryConfig, retry_async

if TYPE_CHECKING:
    from playwright.async_api import Browser, Page

logger = logging.getLogger(__name__)

# (browser_type, headless) -> Browser
Launcher = Callable[[str, bool], Awaitable["Browser"]]
ConsoleCallback = Callable[[str, str], None]

# One attempt plus one full reset-and-relaunch.
MAX_ENSURE_ATTEMPTS = 2


@dataclass
class LaunchOptions:
    """
    Per-call browser options.

    Unset fields follow the running browser; a fresh launch fills them
    from BrowserSettings.
    """
    headless: Optional[bool] = None
    viewport_width: Optional[int] = None
    viewport_height: Optional[int] = None
    user_agent: Optional[str] = None
    browser_type: Optional[str] = None

    def resolve(self, settings: BrowserSettings) -> "LaunchOptions":
        """Return a copy with every field filled in from settings."""
        return LaunchOptions(
            headless=settings.headless if self.headless is None else self.headless,
            viewport_width=self.viewport_width or settings.viewport_width,
            viewport_height=self.viewport_height or settings.viewport_height,
            user_agent=self.user_agent or settings.user_agent,
            browser_type=self.browser_type or settings.browser_type,
        )


class PlaywrightLauncher:
    """
    Default launcher backed by Playwright's async API.

    The Playwright driver is started on first launch and kept for the
    lifetime of the launcher.
    """

    def __init__(self) -> None:
        self._playwright: Any = None

    async def __call__(self, browser_type: str, headless: bool) -> "Browser":
        try:
            if self._playwright is None:
                from playwright.async_api import async_playwright

                self._playwright = await async_playwright().start()

            launcher = getattr(self._playwright, browser_type)
            browser = await launcher.launch(headless=headless)
        except Exception as e:
            raise BrowserLaunchError(
                f"Failed to launch {browser_type} browser: {e}",
                {"browser_type": browser_type, "headless": headless},
            ) from e

        logger.info(f"Launched {browser_type} browser (headless={headless})")
        return browser

    async def stop(self) -> None:
        """Stop the Playwright driver."""
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None


class BrowserSessionManager:
    """
    Owns the single browser handle and its active page.

    The handle is created lazily by ensure(), replaced when it reports
    disconnected, and dropped on close(). A page found closed is replaced
    with a fresh one on the existing browsing context.
    """

    def __init__(
        self,
        settings: Optional[BrowserSettings] = None,
        launcher: Optional[Launcher] = None,
        on_console: Optional[ConsoleCallback] = None,
    ):
        """
        Initialize the manager (no browser is launched yet).

        Args:
            settings: Default browser settings
            launcher: Async callable returning a launched browser
            on_console: Called with (type, text) for every console message
        """
        self._settings = settings or BrowserSettings()
        self._launcher: Launcher = launcher or PlaywrightLauncher()
        self._on_console = on_console
        self._browser: Optional["Browser"] = None
        self._page: Optional["Page"] = None
        self._browser_type: Optional[str] = None
        self._headless: Optional[bool] = None
        self._user_agent: Optional[str] = None

    @property
    def browser(self) -> Optional["Browser"]:
        """The current browser handle, if any."""
        return self._browser

    @property
    def page(self) -> Optional["Page"]:
        """The current page, if any."""
        return self._page

    @property
    def is_connected(self) -> bool:
        """Check if a browser exists and reports connected."""
        return self._browser is not None and self._browser.is_connected()

    def set_console_callback(self, callback: Optional[ConsoleCallback]) -> None:
        """Set the callback receiving (type, text) of page console messages."""
        self._on_console = callback

    def adopt_page(self, page: "Page") -> None:
        """Make page (e.g. a newly opened tab) the active page."""
        page.on("console", self._forward_console)
        self._page = page

    def reset(self) -> None:
        """Forget the handle and page without closing anything."""
        self._browser = None
        self._page = None
        self._browser_type = None
        self._headless = None
        self._user_agent = None

    async def ensure(self, options: Optional[LaunchOptions] = None) -> "Page":
        """
        Return a live page, launching or relaunching the browser as needed.

        A failure anywhere in the attempt triggers exactly one full
        reset-and-relaunch; a second failure propagates.

        Args:
            options: Per-call launch options

        Returns:
            A page bound to a connected browser

        Raises:
            BrowserError: If the browser could not be brought up twice
        """
        requested = options or LaunchOptions()
        config = RetryConfig(
            max_attempts=MAX_ENSURE_ATTEMPTS,
            initial_delay_ms=0,
            on_retry=self._reset_for_retry,
        )
        try:
            return await retry_async(self._ensure_once, config, requested)
        except BrowserError:
            raise
        except Exception as e:
            raise BrowserLaunchError(f"Failed to initialize browser: {e}") from e

    async def discard_if_disconnected(self) -> bool:
        """
        Drop the handle if it reports disconnected.

        Returns:
            True if a stale handle was discarded
        """
        if self._browser is None or self._browser.is_connected():
            return False

        logger.warning("Browser is disconnected, discarding stale handle")
        stale = self._browser
        self.reset()
        await self._close_quietly(stale)
        return True

    async def close(self) -> bool:
        """
        Close the browser. State is always left empty.

        Returns:
            True if there was a browser to close
        """
        browser = self._browser
        self.reset()
        if browser is None:
            return False

        await self._close_quietly(browser)
        logger.info("Browser closed")
        return True

    async def shutdown(self) -> None:
        """Close the browser and stop the launcher's driver."""
        await self.close()
        stop = getattr(self._launcher, "stop", None)
        if stop is not None:
            await stop()

    async def _ensure_once(self, requested: LaunchOptions) -> "Page":
        await self.discard_if_disconnected()

        if self._browser is not None and self._conflicts(requested):
            logger.info(
                f"Relaunching browser: {self._browser_type}/headless={self._headless} "
                f"-> {requested.browser_type or self._browser_type}/headless="
                f"{self._headless if requested.headless is None else requested.headless}"
            )
            stale = self._browser
            self.reset()
            await self._close_quietly(stale)

        options = requested.resolve(self._settings)
        if self._browser is None:
            browser = await self._launcher(options.browser_type, options.headless)
            browser.on("disconnected", self._make_disconnect_handler(browser))
            self._browser = browser
            self._browser_type = options.browser_type
            self._headless = options.headless

        # Only an explicitly requested agent replaces the running context.
        wants_new_agent = (
            requested.user_agent is not None and requested.user_agent != self._user_agent
        )
        if self._page is None or self._page.is_closed() or wants_new_agent:
            self._page = await self._open_page(options, new_context=wants_new_agent)

        return self._page

    def _conflicts(self, requested: LaunchOptions) -> bool:
        """Whether the call explicitly asks for a different browser or mode."""
        if requested.browser_type is not None and requested.browser_type != self._browser_type:
            return True
        return requested.headless is not None and requested.headless != self._headless

    async def _open_page(self, options: LaunchOptions, new_context: bool = False) -> "Page":
        contexts = self._browser.contexts
        if contexts and not new_context:
            context = contexts[0]
        else:
            context_options: dict = {
                "viewport": {
                    "width": options.viewport_width,
                    "height": options.viewport_height,
                },
                "device_scale_factor": 1,
            }
            if options.user_agent:
                context_options["user_agent"] = options.user_agent
            context = await self._browser.new_context(**context_options)
            self._user_agent = options.user_agent

        page = await context.new_page()
        page.on("console", self._forward_console)
        logger.debug("Opened new page")
        return page

    def _make_disconnect_handler(self, browser: "Browser") -> Callable[..., None]:
        def on_disconnected(*_: Any) -> None:
            # A newer handle may already have replaced this one.
            if self._browser is browser:
                logger.warning("Browser disconnected")
                self.reset()
        return on_disconnected

    def _forward_console(self, message: Any) -> None:
        if self._on_console is not None:
            self._on_console(message.type, message.text)

    async def _reset_for_retry(self, attempt: int, error: Exception) -> None:
        logger.warning(f"Browser initialization failed ({error}); resetting and relaunching")
        stale = self._browser
        self.reset()
        if stale is not None:
            await self._close_quietly(stale)

    @staticmethod
    async def _close_quietly(browser: "Browser") -> None:
        try:
            await browser.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing browser: {e}")
