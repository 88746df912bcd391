"""
Tool Catalog - Names, categories and input schemas of every tool.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List


class ToolCategory(str, Enum):
    """Which resources a tool needs."""
    BROWSER = "browser"
    HTTP = "http"
    SESSION_CONTROL = "session_control"
    UNKNOWN = "unknown"


CLOSE_TOOL = "playwright_close"

START_CODEGEN_SESSION = "start_codegen_session"
END_CODEGEN_SESSION = "end_codegen_session"
GET_CODEGEN_SESSION = "get_codegen_session"
CLEAR_CODEGEN_SESSION = "clear_codegen_session"


@dataclass(frozen=True)
class ToolDefinition:
    """Schema-described tool as advertised to callers."""
    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def _schema(properties: Dict[str, Any], required: List[str] | None = None) -> Dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required or []}


_SESSION_ID = {"sessionId": {"type": "string", "description": "ID of the codegen session"}}
_HTTP_BODY = {
    "url": {"type": "string", "description": "Request URL"},
    "value": {"type": "string", "description": "Request body"},
    "headers": {"type": "object", "description": "Additional request headers"},
}

TOOL_DEFINITIONS: List[ToolDefinition] = [
    # Codegen session control
    ToolDefinition(
        START_CODEGEN_SESSION,
        "Start a new code generation session to record tool calls",
        _schema({
            "options": {
                "type": "object",
                "description": "Code generation options",
                "properties": {
                    "outputPath": {"type": "string", "description": "Directory for generated tests"},
                    "testNamePrefix": {"type": "string", "description": "Prefix for generated test names (default: MCP)"},
                    "includeComments": {"type": "boolean", "description": "Add a comment per step (default: true)"},
                },
            },
        }),
    ),
    ToolDefinition(
        END_CODEGEN_SESSION,
        "End a code generation session and write the generated test",
        _schema(_SESSION_ID, ["sessionId"]),
    ),
    ToolDefinition(
        GET_CODEGEN_SESSION,
        "Get information about a code generation session",
        _schema(_SESSION_ID, ["sessionId"]),
    ),
    ToolDefinition(
        CLEAR_CODEGEN_SESSION,
        "Clear a code generation session without generating a test",
        _schema(_SESSION_ID, ["sessionId"]),
    ),
    # Browser
    ToolDefinition(
        "playwright_navigate",
        "Navigate to a URL",
        _schema({
            "url": {"type": "string", "description": "URL to navigate to"},
            "browserType": {"type": "string", "enum": ["chromium", "firefox", "webkit"]},
            "width": {"type": "number", "description": "Viewport width in pixels (default: 1280)"},
            "height": {"type": "number", "description": "Viewport height in pixels (default: 720)"},
            "timeout": {"type": "number", "description": "Navigation timeout in milliseconds"},
            "waitUntil": {"type": "string", "description": "Navigation wait condition"},
            "headless": {"type": "boolean", "description": "Run browser in headless mode"},
        }, ["url"]),
    ),
    ToolDefinition(
        "playwright_screenshot",
        "Take a screenshot of the current page or a specific element",
        _schema({
            "name": {"type": "string", "description": "Name for the screenshot"},
            "selector": {"type": "string", "description": "CSS selector for element to screenshot"},
            "fullPage": {"type": "boolean", "description": "Capture the full scrollable page"},
            "storeBase64": {"type": "boolean", "description": "Return and store the screenshot as base64 (default: true)"},
            "savePng": {"type": "boolean", "description": "Save screenshot as PNG file (default: false)"},
            "downloadsDir": {"type": "string", "description": "Directory for saved PNG files"},
        }, ["name"]),
    ),
    ToolDefinition(
        "playwright_click",
        "Click an element on the page",
        _schema({"selector": {"type": "string", "description": "CSS selector for element to click"}}, ["selector"]),
    ),
    ToolDefinition(
        "playwright_iframe_click",
        "Click an element inside an iframe on the page",
        _schema({
            "iframeSelector": {"type": "string", "description": "CSS selector for the iframe"},
            "selector": {"type": "string", "description": "CSS selector for the element inside the iframe"},
        }, ["iframeSelector", "selector"]),
    ),
    ToolDefinition(
        "playwright_iframe_fill",
        "Fill an element inside an iframe on the page",
        _schema({
            "iframeSelector": {"type": "string", "description": "CSS selector for the iframe containing the element to fill"},
            "selector": {"type": "string", "description": "CSS selector for the element to fill"},
            "value": {"type": "string", "description": "Value to fill"},
        }, ["iframeSelector", "selector", "value"]),
    ),
    ToolDefinition(
        "playwright_fill",
        "Fill out an input field",
        _schema({
            "selector": {"type": "string", "description": "CSS selector for input field"},
            "value": {"type": "string", "description": "Value to fill"},
        }, ["selector", "value"]),
    ),
    ToolDefinition(
        "playwright_select",
        "Select an element on the page with Select tag",
        _schema({
            "selector": {"type": "string", "description": "CSS selector for element to select"},
            "value": {"type": "string", "description": "Value to select"},
        }, ["selector", "value"]),
    ),
    ToolDefinition(
        "playwright_hover",
        "Hover an element on the page",
        _schema({"selector": {"type": "string", "description": "CSS selector for element to hover"}}, ["selector"]),
    ),
    ToolDefinition(
        "playwright_upload_file",
        "Upload a file to an input[type='file'] element on the page",
        _schema({
            "selector": {"type": "string", "description": "CSS selector for the file input element"},
            "filePath": {"type": "string", "description": "Absolute path to the file to upload"},
        }, ["selector", "filePath"]),
    ),
    ToolDefinition(
        "playwright_evaluate",
        "Execute JavaScript in the browser console",
        _schema({"script": {"type": "string", "description": "JavaScript code to execute"}}, ["script"]),
    ),
    ToolDefinition(
        "playwright_expect_response",
        "Start waiting for an HTTP response. Returns immediately; use playwright_assert_response to collect it",
        _schema({
            "id": {"type": "string", "description": "Identifier for retrieving this response later with playwright_assert_response"},
            "url": {"type": "string", "description": "URL pattern to match in the response"},
        }, ["id", "url"]),
    ),
    ToolDefinition(
        "playwright_assert_response",
        "Wait for and validate a response started with playwright_expect_response",
        _schema({
            "id": {"type": "string", "description": "Identifier given to playwright_expect_response"},
            "value": {"type": "string", "description": "Text the response body must contain"},
        }, ["id"]),
    ),
    ToolDefinition(
        "playwright_console_logs",
        "Retrieve console logs from the browser with filtering options",
        _schema({
            "type": {"type": "string", "enum": ["all", "error", "warning", "log", "info", "debug"]},
            "search": {"type": "string", "description": "Text to search for in logs"},
            "limit": {"type": "number", "description": "Maximum number of logs to return"},
            "clear": {"type": "boolean", "description": "Clear logs after retrieval (default: false)"},
        }),
    ),
    ToolDefinition(
        CLOSE_TOOL,
        "Close the browser and release all resources",
        _schema({}),
    ),
    ToolDefinition(
        "playwright_custom_user_agent",
        "Set a custom User Agent for the browser",
        _schema({"userAgent": {"type": "string", "description": "Custom User Agent"}}, ["userAgent"]),
    ),
    ToolDefinition(
        "playwright_press_key",
        "Press a keyboard key",
        _schema({
            "key": {"type": "string", "description": "Key to press (e.g. 'Enter', 'ArrowDown', 'a')"},
            "selector": {"type": "string", "description": "Optional CSS selector to focus before pressing"},
        }, ["key"]),
    ),
    ToolDefinition(
        "playwright_drag",
        "Drag an element to a target location",
        _schema({
            "sourceSelector": {"type": "string", "description": "CSS selector for the element to drag"},
            "targetSelector": {"type": "string", "description": "CSS selector for the drop target"},
        }, ["sourceSelector", "targetSelector"]),
    ),
    ToolDefinition(
        "playwright_save_as_pdf",
        "Save the current page as a PDF file",
        _schema({
            "outputPath": {"type": "string", "description": "Directory path where the PDF will be saved"},
            "filename": {"type": "string", "description": "Name of the PDF file (default: page.pdf)"},
            "format": {"type": "string", "description": "Page format (e.g. 'A4', 'Letter')"},
            "printBackground": {"type": "boolean", "description": "Whether to print background graphics (default: true)"},
            "margin": {
                "type": "object",
                "description": "Page margins",
                "properties": {side: {"type": "string"} for side in ("top", "right", "bottom", "left")},
            },
        }, ["outputPath"]),
    ),
    ToolDefinition(
        "playwright_click_and_switch_tab",
        "Click a link and switch to the newly opened tab",
        _schema({"selector": {"type": "string", "description": "CSS selector for the link to click"}}, ["selector"]),
    ),
    ToolDefinition("playwright_go_back", "Navigate back in browser history", _schema({})),
    ToolDefinition("playwright_go_forward", "Navigate forward in browser history", _schema({})),
    ToolDefinition("playwright_get_visible_text", "Get the visible text content of the current page", _schema({})),
    ToolDefinition("playwright_get_visible_html", "Get the HTML content of the current page", _schema({})),
    # HTTP
    ToolDefinition(
        "playwright_get",
        "Perform an HTTP GET request",
        _schema({"url": _HTTP_BODY["url"], "headers": _HTTP_BODY["headers"]}, ["url"]),
    ),
    ToolDefinition("playwright_post", "Perform an HTTP POST request", _schema(_HTTP_BODY, ["url", "value"])),
    ToolDefinition("playwright_put", "Perform an HTTP PUT request", _schema(_HTTP_BODY, ["url", "value"])),
    ToolDefinition("playwright_patch", "Perform an HTTP PATCH request", _schema(_HTTP_BODY, ["url", "value"])),
    ToolDefinition(
        "playwright_delete",
        "Perform an HTTP DELETE request",
        _schema({"url": _HTTP_BODY["url"], "headers": _HTTP_BODY["headers"]}, ["url"]),
    ),
]

SESSION_CONTROL_TOOLS: FrozenSet[str] = frozenset({
    START_CODEGEN_SESSION,
    END_CODEGEN_SESSION,
    GET_CODEGEN_SESSION,
    CLEAR_CODEGEN_SESSION,
})

HTTP_TOOLS: FrozenSet[str] = frozenset({
    "playwright_get",
    "playwright_post",
    "playwright_put",
    "playwright_patch",
    "playwright_delete",
})

BROWSER_TOOLS: FrozenSet[str] = frozenset(
    d.name for d in TOOL_DEFINITIONS
    if d.name not in SESSION_CONTROL_TOOLS and d.name not in HTTP_TOOLS
)


def classify_tool(name: str) -> ToolCategory:
    """Classify a tool name into exactly one category."""
    if name in BROWSER_TOOLS:
        return ToolCategory.BROWSER
    if name in HTTP_TOOLS:
        return ToolCategory.HTTP
    if name in SESSION_CONTROL_TOOLS:
        return ToolCategory.SESSION_CONTROL
    return ToolCategory.UNKNOWN


def get_tool_definitions() -> List[ToolDefinition]:
    """All advertised tools, in catalog order."""
    return list(TOOL_DEFINITIONS)
