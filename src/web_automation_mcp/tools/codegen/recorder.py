"""
Action Recorder - Captures dispatched tool calls into codegen sessions.

The recorder is a two-state machine: either no session is active, or
exactly one session is recording. Ended sessions stay stored until they
are cleared.

Example:
    >>> recorder = ActionRecorder()
    >>> session_id = recorder.start()
    >>> recorder.record("playwright_navigate", {"url": "https://example.com"})
    >>> session = recorder.end(session_id)
    >>> len(session.actions)
    1
"""

import logging
import uuid
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Set

from web_automation_mcp.tools.codegen.types import CodegenAction, CodegenOptions, CodegenSession

logger = logging.getLogger(__name__)


class ActionRecorder:
    """
    Records tool invocations into the active codegen session.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, CodegenSession] = {}
        self._active_id: Optional[str] = None
        self._issued_ids: Set[str] = set()

    @property
    def active_session_id(self) -> Optional[str]:
        """Id of the recording session, if any."""
        return self._active_id

    @property
    def is_recording(self) -> bool:
        return self._active_id is not None

    @property
    def sessions(self) -> Mapping[str, CodegenSession]:
        """Read-only view of all stored sessions."""
        return MappingProxyType(self._sessions)

    def start(self, options: Optional[CodegenOptions] = None) -> str:
        """
        Start a new session and make it the active one.

        A previously active session is not ended; it stays stored but
        stops receiving actions.

        Returns:
            The new session id
        """
        if self._active_id is not None:
            logger.warning(
                f"Starting a new codegen session while {self._active_id} is active; "
                "the previous session stops recording but is not ended"
            )

        session_id = self._new_id()
        self._sessions[session_id] = CodegenSession(
            id=session_id,
            start_time=datetime.now(timezone.utc),
            options=options,
        )
        self._active_id = session_id
        logger.info(f"Started codegen session {session_id}")
        return session_id

    def end(self, session_id: str) -> Optional[CodegenSession]:
        """
        Stamp the session's end time and stop recording into it.

        Returns:
            The ended session, or None if no session has that id
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None

        session.end_time = datetime.now(timezone.utc)
        if self._active_id == session_id:
            self._active_id = None
        logger.info(f"Ended codegen session {session_id} with {len(session.actions)} actions")
        return session

    def record(self, tool_name: str, parameters: Dict[str, Any], result: Any = None) -> None:
        """
        Append an action to the active session. No-op when nothing is recording.
        """
        if self._active_id is None:
            return

        session = self._sessions.get(self._active_id)
        if session is None:
            return

        session.actions.append(
            CodegenAction(
                tool_name=tool_name,
                parameters=dict(parameters),
                timestamp=datetime.now(timezone.utc),
                result=result,
            )
        )

    def get(self, session_id: str) -> Optional[CodegenSession]:
        return self._sessions.get(session_id)

    def get_active(self) -> Optional[CodegenSession]:
        if self._active_id is None:
            return None
        return self._sessions.get(self._active_id)

    def clear(self, session_id: str) -> bool:
        """
        Remove a session, deactivating it first if it is recording.

        Returns:
            True if a session was removed
        """
        if self._active_id == session_id:
            self._active_id = None
        return self._sessions.pop(session_id, None) is not None

    def _new_id(self) -> str:
        while True:
            session_id = str(uuid.uuid4())
            if session_id not in self._issued_ids:
                self._issued_ids.add(session_id)
                return session_id
