"""
Tool Types - Response envelope, per-call context and the handler contract.

Every tool call produces a ToolResponse: an ordered, non-empty list of
text/image parts plus an explicit error flag.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    import httpx
    from playwright.async_api import Browser, Page
    from web_automation_mcp.config.settings import Settings
    from web_automation_mcp.state import ServerState


@dataclass(frozen=True)
class TextContent:
    """A text part of a tool response."""
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImageContent:
    """A base64-encoded image part of a tool response."""
    data: str
    mime_type: str = "image/png"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "image", "data": self.data, "mimeType": self.mime_type}


ContentPart = Union[TextContent, ImageContent]


@dataclass
class ToolResponse:
    """
    Uniform result of a tool call.

    Attributes:
        content: Ordered response parts, never empty
        is_error: Whether the call failed
    """
    content: List[ContentPart]
    is_error: bool

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("ToolResponse content must not be empty")

    @property
    def text(self) -> str:
        """All text parts joined by newlines."""
        return "\n".join(p.text for p in self.content if isinstance(p, TextContent))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape."""
        return {
            "content": [part.to_dict() for part in self.content],
            "isError": self.is_error,
        }


def create_error_response(message: str) -> ToolResponse:
    """Create an error response with a single text part."""
    return ToolResponse(content=[TextContent(message)], is_error=True)


def create_success_response(message: Union[str, List[str]]) -> ToolResponse:
    """Create a success response with one text part per message."""
    messages = [message] if isinstance(message, str) else message
    return ToolResponse(content=[TextContent(m) for m in messages], is_error=False)


@dataclass
class ToolContext:
    """
    Live resources attached to a single tool call.

    Built fresh for every call and never persisted.
    """
    page: Optional["Page"] = None
    browser: Optional["Browser"] = None
    api_context: Optional["httpx.AsyncClient"] = None
    server: Any = None
    state: Optional["ServerState"] = None

    @property
    def settings(self) -> "Settings":
        """Settings of the owning state, or defaults when detached."""
        if self.state is not None:
            return self.state.settings
        from web_automation_mcp.config.settings import Settings

        return Settings()

    def reset_browser_state(self) -> None:
        """Drop the shared browser handle so the next call relaunches."""
        if self.state is not None:
            self.state.browser.reset()


class ToolHandler(ABC):
    """
    Contract every tool implements.

    Handlers are stateless with respect to each other; shared data lives
    on the ServerState reachable through the context.
    """

    def __init__(self, server: Any = None):
        self.server = server

    @abstractmethod
    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        """
        Execute the tool.

        Args:
            args: Raw call arguments
            context: Resources for this call

        Returns:
            The tool response
        """
        pass
