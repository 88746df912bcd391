"""
MCP Server - Exposes the tool catalog over the Model Context Protocol.

The server owns one ServerState for its lifetime. Tool calls go through
ToolDispatcher; console logs and stored screenshots are published as
resources.

Resources:
    console://logs       Captured console messages, one per line
    screenshot://<name>  A stored screenshot as PNG
"""

import base64
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from web_automation_mcp import __version__
from web_automation_mcp.browsers.session import Launcher
from web_automation_mcp.config.settings import Settings
from web_automation_mcp.dispatcher import ToolDispatcher
from web_automation_mcp.state import ServerState
from web_automation_mcp.tools.catalog import get_tool_definitions
from web_automation_mcp.tools.types import ImageContent, TextContent, ToolResponse

logger = logging.getLogger(__name__)

CONSOLE_LOGS_URI = "console://logs"
SCREENSHOT_SCHEME = "screenshot://"

McpContent = Union[types.TextContent, types.ImageContent]


class ToolCallFailed(Exception):
    """Carries an error ToolResponse through the SDK, which reports it with isError set."""

    def __init__(self, response: ToolResponse):
        super().__init__(response.text)
        self.response = response


def to_mcp_content(response: ToolResponse) -> List[McpContent]:
    """Convert response parts to MCP content blocks."""
    content: List[McpContent] = []
    for part in response.content:
        if isinstance(part, ImageContent):
            content.append(types.ImageContent(type="image", data=part.data, mimeType=part.mime_type))
        elif isinstance(part, TextContent):
            content.append(types.TextContent(type="text", text=part.text))
    return content


class WebAutomationServer:
    """
    MCP server wrapping a ToolDispatcher.

    Example:
        >>> server = WebAutomationServer(load_config())
        >>> await server.run_stdio()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        launcher: Optional[Launcher] = None,
    ):
        self.settings = settings or Settings()
        self.state = ServerState.create(self.settings, launcher=launcher)
        self.dispatcher = ToolDispatcher(self.state)
        self.server: Server = Server(self.settings.server_name, version=__version__)
        self._register_handlers()

    def _register_handlers(self) -> None:
        server = self.server

        @server.list_tools()
        async def list_tools() -> List[types.Tool]:
            return [
                types.Tool(
                    name=definition.name,
                    description=definition.description,
                    inputSchema=definition.input_schema,
                )
                for definition in get_tool_definitions()
            ]

        @server.call_tool()
        async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[McpContent]:
            response = await self.call_tool(name, arguments)
            if response.is_error:
                raise ToolCallFailed(response)
            return to_mcp_content(response)

        @server.list_resources()
        async def list_resources() -> List[types.Resource]:
            return self.list_resources()

        @server.read_resource()
        async def read_resource(uri: Any) -> Iterable[ReadResourceContents]:
            return self.read_resource(str(uri))

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        """Dispatch a tool call with this server as the server reference."""
        return await self.dispatcher.dispatch(name, arguments or {}, server=self)

    def list_resources(self) -> List[types.Resource]:
        """Console log resource plus one resource per stored screenshot."""
        resources = [
            types.Resource(uri=CONSOLE_LOGS_URI, name="Browser console logs", mimeType="text/plain"),
        ]
        for name in self.state.screenshots:
            resources.append(
                types.Resource(
                    uri=f"{SCREENSHOT_SCHEME}{name}",
                    name=f"Screenshot: {name}",
                    mimeType="image/png",
                )
            )
        return resources

    def read_resource(self, uri: str) -> List[ReadResourceContents]:
        """
        Read a resource by URI.

        Raises:
            ValueError: If no such resource exists
        """
        uri = uri.rstrip("/")
        if uri == CONSOLE_LOGS_URI:
            return [ReadResourceContents(content="\n".join(self.state.console_logs), mime_type="text/plain")]

        if uri.startswith(SCREENSHOT_SCHEME):
            name = uri[len(SCREENSHOT_SCHEME):]
            screenshot = self.state.screenshots.get(name)
            if screenshot is not None:
                return [ReadResourceContents(content=base64.b64decode(screenshot), mime_type="image/png")]

        raise ValueError(f"Resource not found: {uri}")

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout until the client disconnects."""
        logger.info(f"Starting {self.settings.server_name} {__version__} on stdio")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.state.browser.shutdown()
            logger.info("Server stopped")
