"""
Pytest configuration and fixtures.

Playwright objects are replaced by MagicMock/AsyncMock doubles: no test
launches a real browser or opens a network connection.
"""

from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest


PAGE_COROUTINES = (
    "goto",
    "click",
    "fill",
    "select_option",
    "hover",
    "evaluate",
    "press",
    "drag_and_drop",
    "go_back",
    "go_forward",
    "content",
    "screenshot",
    "set_input_files",
    "pdf",
    "wait_for_event",
    "wait_for_load_state",
)


def make_page(closed: bool = False) -> MagicMock:
    """Create a mock Playwright page."""
    page = MagicMock()
    page.is_closed = MagicMock(return_value=closed)
    page.on = MagicMock()
    for name in PAGE_COROUTINES:
        setattr(page, name, AsyncMock())
    page.keyboard.press = AsyncMock()
    page.screenshot = AsyncMock(return_value=b"png-bytes")
    return page


def make_browser(pages: Optional[List[Any]] = None, connected: bool = True) -> MagicMock:
    """
    Create a mock Playwright browser.

    new_page() hands out the given pages in order, or fresh pages if none
    are given. Contexts created by new_context() appear in .contexts.
    """
    browser = MagicMock()
    browser.is_connected = MagicMock(return_value=connected)
    browser.on = MagicMock()
    browser.close = AsyncMock()
    browser.contexts = []

    context = MagicMock()
    if pages is not None:
        context.new_page = AsyncMock(side_effect=list(pages))
    else:
        context.new_page = AsyncMock(side_effect=lambda: make_page())

    async def new_context(**kwargs: Any) -> MagicMock:
        browser.contexts.append(context)
        return context

    browser.new_context = AsyncMock(side_effect=new_context)
    browser.context = context
    return browser


class FakeLauncher:
    """
    Launcher double returning queued browsers.

    Queue an Exception instance to make that launch fail.
    """

    def __init__(self, *browsers: Any):
        self.queue = list(browsers)
        self.calls: List[tuple] = []
        self.stop = AsyncMock()

    async def __call__(self, browser_type: str, headless: bool) -> Any:
        self.calls.append((browser_type, headless))
        item = self.queue.pop(0) if self.queue else make_browser()
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def settings(tmp_path):
    """Provide test settings writing into a temporary directory."""
    from web_automation_mcp.config import Settings, BrowserSettings, CodegenSettings

    return Settings(
        browser=BrowserSettings(headless=True, downloads_dir=str(tmp_path / "downloads")),
        codegen=CodegenSettings(output_directory=str(tmp_path / "generated")),
    )


@pytest.fixture
def launcher():
    """Provide a launcher that hands out mock browsers."""
    return FakeLauncher()


@pytest.fixture
def state(settings, launcher):
    """Provide a fresh server state backed by mock browsers."""
    from web_automation_mcp.state import ServerState

    return ServerState.create(settings, launcher=launcher)


@pytest.fixture
def dispatcher(state):
    """Provide a dispatcher over the test state."""
    from web_automation_mcp.dispatcher import ToolDispatcher

    return ToolDispatcher(state)


@pytest.fixture
def page():
    """Provide a mock page."""
    return make_page()


@pytest.fixture
def browser(page):
    """Provide a connected mock browser whose first page is `page`."""
    return make_browser(pages=[page])


@pytest.fixture
def tool_context(state, page, browser):
    """Provide a ToolContext with a live mock page and browser."""
    from web_automation_mcp.tools.types import ToolContext

    return ToolContext(page=page, browser=browser, state=state)
