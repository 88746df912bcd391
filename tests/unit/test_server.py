"""
Tests for the MCP server wrapper.
"""

import base64

import pytest

from conftest import FakeLauncher
from web_automation_mcp.server import CONSOLE_LOGS_URI, WebAutomationServer, to_mcp_content
from web_automation_mcp.tools.types import ImageContent, TextContent, ToolResponse


@pytest.fixture
def server(settings):
    return WebAutomationServer(settings, launcher=FakeLauncher())


class TestResources:
    """Test resource listing and reading."""

    def test_lists_console_and_screenshots(self, server):
        server.state.screenshots["cart"] = base64.b64encode(b"png").decode()

        uris = [str(r.uri).rstrip("/") for r in server.list_resources()]

        assert uris == [CONSOLE_LOGS_URI, "screenshot://cart"]

    def test_read_console_logs(self, server):
        server.state.register_console_message("log", "hello")
        server.state.register_console_message("error", "boom")

        (contents,) = server.read_resource(CONSOLE_LOGS_URI)

        assert contents.content == "[log] hello\n[error] boom"
        assert contents.mime_type == "text/plain"

    def test_read_screenshot(self, server):
        server.state.screenshots["cart"] = base64.b64encode(b"png").decode()

        (contents,) = server.read_resource("screenshot://cart")

        assert contents.content == b"png"
        assert contents.mime_type == "image/png"

    @pytest.mark.parametrize("uri", ["screenshot://missing", "file:///etc/passwd"])
    def test_unknown_resource(self, server, uri):
        with pytest.raises(ValueError, match="Resource not found"):
            server.read_resource(uri)


class TestToolCalls:
    """Test tool calls through the server."""

    @pytest.mark.asyncio
    async def test_call_tool_dispatches(self, server):
        response = await server.call_tool("playwright_click", {"selector": "#go"})

        assert not response.is_error
        assert response.text == "Clicked element: #go"

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self, server):
        response = await server.call_tool("playwright_teleport")

        assert response.is_error
        assert response.text == "Unknown tool: playwright_teleport"

    def test_to_mcp_content(self):
        response = ToolResponse(content=[
            TextContent(text="Screenshot 'cart' taken"),
            ImageContent(data="cG5n", mime_type="image/png"),
        ], is_error=False)

        text, image = to_mcp_content(response)

        assert text.type == "text"
        assert text.text == "Screenshot 'cart' taken"
        assert image.type == "image"
        assert image.data == "cG5n"
        assert image.mimeType == "image/png"
