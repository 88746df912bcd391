"""
Server State - Mutable state shared by the tools of one server connection.

Holds the browser session, the action recorder, captured console messages
and stored screenshots. One instance is created per connection and passed
by reference into the dispatcher; there are no module-level globals.

Nothing here is locked. A state object must only ever serve one tool call
at a time.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from web_automation_mcp.browsers.session import BrowserSessionManager, Launcher
from web_automation_mcp.config.settings import Settings
from web_automation_mcp.tools.codegen.recorder import ActionRecorder

logger = logging.getLogger(__name__)


@dataclass
class ServerState:
    """
    Per-connection state.

    Attributes:
        settings: Effective settings for this connection
        browser: Shared browser session
        recorder: Codegen action recorder
        console_logs: Console messages captured from pages, oldest first
        screenshots: Screenshot name -> base64 PNG
        pending_responses: Response waits started by playwright_expect_response,
            keyed by the caller's id
    """
    settings: Settings
    browser: BrowserSessionManager
    recorder: ActionRecorder = field(default_factory=ActionRecorder)
    console_logs: List[str] = field(default_factory=list)
    screenshots: Dict[str, str] = field(default_factory=dict)
    pending_responses: Dict[str, "asyncio.Future[Any]"] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        launcher: Optional[Launcher] = None,
    ) -> "ServerState":
        """
        Build a fresh state with its own browser session.

        Args:
            settings: Settings to use (defaults apply if omitted)
            launcher: Optional browser launcher, mainly for tests
        """
        settings = settings or Settings()
        state = cls(
            settings=settings,
            browser=BrowserSessionManager(settings.browser, launcher=launcher),
        )
        state.browser.set_console_callback(state.register_console_message)
        return state

    def register_console_message(self, message_type: str, text: str) -> None:
        """Record a console message from the active page."""
        self.console_logs.append(f"[{message_type}] {text}")

    def clear_console_logs(self) -> None:
        self.console_logs.clear()

    def cancel_pending_responses(self) -> None:
        """Cancel every outstanding response wait; their pages are going away."""
        for response_id, waiter in self.pending_responses.items():
            if not waiter.done():
                logger.debug(f"Cancelling response wait {response_id}")
                waiter.cancel()
        self.pending_responses.clear()
