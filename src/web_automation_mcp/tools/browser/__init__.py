"""
Browser tools - Handlers that drive the active page.

Importing this package registers every browser tool.
"""

from web_automation_mcp.tools.browser.navigation import (
    NavigateTool,
    GoBackTool,
    GoForwardTool,
    CloseBrowserTool,
)
from web_automation_mcp.tools.browser.interaction import (
    ClickTool,
    IframeClickTool,
    IframeFillTool,
    FillTool,
    SelectTool,
    HoverTool,
    UploadFileTool,
    EvaluateTool,
    PressKeyTool,
    DragTool,
    ClickAndSwitchTabTool,
    CustomUserAgentTool,
)
from web_automation_mcp.tools.browser.output import (
    ScreenshotTool,
    SaveAsPdfTool,
    ConsoleLogsTool,
    VisibleTextTool,
    VisibleHtmlTool,
)
from web_automation_mcp.tools.browser.response import (
    ExpectResponseTool,
    AssertResponseTool,
)

__all__ = [
    # Navigation
    "NavigateTool",
    "GoBackTool",
    "GoForwardTool",
    "CloseBrowserTool",
    # Interaction
    "ClickTool",
    "IframeClickTool",
    "IframeFillTool",
    "FillTool",
    "SelectTool",
    "HoverTool",
    "UploadFileTool",
    "EvaluateTool",
    "PressKeyTool",
    "DragTool",
    "ClickAndSwitchTabTool",
    "CustomUserAgentTool",
    # Output
    "ScreenshotTool",
    "SaveAsPdfTool",
    "ConsoleLogsTool",
    "VisibleTextTool",
    "VisibleHtmlTool",
    # Responses
    "ExpectResponseTool",
    "AssertResponseTool",
]
