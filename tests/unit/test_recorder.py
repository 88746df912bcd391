"""
Tests for the action recorder.
"""

import logging

from web_automation_mcp.tools.codegen import ActionRecorder, CodegenOptions


class TestActionRecorder:
    """Test the recorder state machine."""

    def test_starts_idle(self):
        recorder = ActionRecorder()

        assert recorder.active_session_id is None
        assert not recorder.is_recording
        assert recorder.get_active() is None

    def test_record_without_session_is_noop(self):
        recorder = ActionRecorder()
        recorder.record("playwright_click", {"selector": "#a"})
        assert len(recorder.sessions) == 0

    def test_records_in_call_order(self):
        recorder = ActionRecorder()
        session_id = recorder.start()

        recorder.record("playwright_navigate", {"url": "https://example.com"})
        recorder.record("playwright_click", {"selector": "#login"})

        session = recorder.get(session_id)
        assert [a.tool_name for a in session.actions] == ["playwright_navigate", "playwright_click"]
        assert session.actions[1].parameters == {"selector": "#login"}

    def test_parameters_are_copied(self):
        recorder = ActionRecorder()
        session_id = recorder.start()
        params = {"selector": "#a"}

        recorder.record("playwright_click", params)
        params["selector"] = "#b"

        assert recorder.get(session_id).actions[0].parameters == {"selector": "#a"}

    def test_end_stamps_and_deactivates(self):
        recorder = ActionRecorder()
        session_id = recorder.start()

        session = recorder.end(session_id)

        assert session.is_ended
        assert session.end_time >= session.start_time
        assert not recorder.is_recording
        recorder.record("playwright_click", {"selector": "#a"})
        assert session.actions == []

    def test_end_unknown_session(self):
        assert ActionRecorder().end("missing") is None

    def test_new_session_orphans_previous(self, caplog):
        recorder = ActionRecorder()
        first = recorder.start()

        with caplog.at_level(logging.WARNING):
            second = recorder.start()
        recorder.record("playwright_click", {"selector": "#a"})

        assert first != second
        assert recorder.active_session_id == second
        assert recorder.get(first).actions == []
        assert not recorder.get(first).is_ended
        assert len(recorder.get(second).actions) == 1
        assert first in caplog.text

    def test_clear_removes_and_deactivates(self):
        recorder = ActionRecorder()
        session_id = recorder.start()

        assert recorder.clear(session_id) is True
        assert recorder.get(session_id) is None
        assert not recorder.is_recording
        assert recorder.clear(session_id) is False

    def test_ids_are_never_reused(self):
        recorder = ActionRecorder()
        ids = set()
        for _ in range(20):
            session_id = recorder.start()
            recorder.clear(session_id)
            ids.add(session_id)
        assert len(ids) == 20

    def test_options_are_kept(self):
        recorder = ActionRecorder()
        options = CodegenOptions.parse({"testNamePrefix": "Checkout"})

        session_id = recorder.start(options)

        assert recorder.get(session_id).options.test_name_prefix == "Checkout"
