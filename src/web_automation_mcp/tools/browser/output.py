"""
Output Tools - Screenshots, console logs and page content.
"""

import base64
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from web_automation_mcp.registry import register_tool
from web_automation_mcp.tools.base import BrowserToolBase, require_args
from web_automation_mcp.tools.types import (
    ContentPart,
    ImageContent,
    TextContent,
    ToolContext,
    ToolResponse,
    create_error_response,
    create_success_response,
)

logger = logging.getLogger(__name__)

# Text of every node whose parent element is rendered, one node per line.
VISIBLE_TEXT_SCRIPT = """() => {
    const walker = document.createTreeWalker(document.body, NodeFilter.SHOW_TEXT, {
        acceptNode: (node) => {
            const style = window.getComputedStyle(node.parentElement);
            return (style.display !== "none" && style.visibility !== "hidden")
                ? NodeFilter.FILTER_ACCEPT
                : NodeFilter.FILTER_REJECT;
        },
    });
    let text = "";
    let node;
    while ((node = walker.nextNode())) {
        const trimmed = node.textContent.trim();
        if (trimmed) {
            text += trimmed + "\\n";
        }
    }
    return text.trim();
}"""

LOG_TYPES = ("all", "error", "warning", "log", "info", "debug")

DEFAULT_PDF_MARGIN = {"top": "20px", "right": "20px", "bottom": "20px", "left": "20px"}


@register_tool("playwright_screenshot")
class ScreenshotTool(BrowserToolBase):
    """
    Capture the page or one element as PNG.

    The image is returned as a base64 part and kept in the screenshot
    store under its name; optionally it is also written to disk.
    """

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "name")
            name = str(args["name"])

            if args.get("selector"):
                data = await page.locator(args["selector"]).screenshot(type="png")
            else:
                data = await page.screenshot(type="png", full_page=bool(args.get("fullPage", False)))

            messages: List[str] = []
            if args.get("savePng", False):
                path = self._save_png(data, name, args.get("downloadsDir"), context)
                messages.append(f"Screenshot saved to: {path}")

            content: List[ContentPart] = []
            if args.get("storeBase64", True):
                encoded = base64.b64encode(data).decode("ascii")
                if context.state is not None:
                    context.state.screenshots[name] = encoded
                messages.append(f"Screenshot '{name}' taken")
                content.append(ImageContent(encoded))
            elif not messages:
                messages.append(f"Screenshot '{name}' taken")

            return ToolResponse(
                content=[TextContent(m) for m in messages] + content,
                is_error=False,
            )

        return await self.safe_execute(context, operation)

    @staticmethod
    def _save_png(data: bytes, name: str, directory: Any, context: ToolContext) -> Path:
        target = directory or context.settings.browser.downloads_dir or "~/Downloads"
        output_dir = Path(target).expanduser()
        output_dir.mkdir(parents=True, exist_ok=True)

        stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
        safe_name = re.sub(r"[^\w.-]", "_", name)
        path = output_dir / f"{safe_name}-{stamp}.png"
        path.write_bytes(data)
        logger.info(f"Screenshot saved to {path}")
        return path


@register_tool("playwright_save_as_pdf")
class SaveAsPdfTool(BrowserToolBase):
    """Print the page to a PDF file (Chromium only)."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "outputPath")
            output_dir = Path(args["outputPath"]).expanduser()
            output_dir.mkdir(parents=True, exist_ok=True)
            path = output_dir / (args.get("filename") or "page.pdf")

            await page.pdf(
                path=str(path),
                format=args.get("format") or "A4",
                print_background=bool(args.get("printBackground", True)),
                margin=args.get("margin") or DEFAULT_PDF_MARGIN,
            )
            logger.info(f"PDF saved to {path}")
            return create_success_response(f"Saved page as PDF: {path}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_console_logs")
class ConsoleLogsTool(BrowserToolBase):
    """Return captured console messages, filtered by type and text."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        logs = list(context.state.console_logs) if context.state is not None else []

        log_type = args.get("type") or "all"
        if log_type != "all":
            logs = [entry for entry in logs if entry.startswith(f"[{log_type}]")]

        search = args.get("search")
        if search:
            logs = [entry for entry in logs if search in entry]

        limit = args.get("limit")
        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, (int, float)) or limit < 1:
                return create_error_response(f"Invalid limit: {limit!r} (must be a positive number)")
            logs = logs[-int(limit):]

        if args.get("clear") and context.state is not None:
            context.state.clear_console_logs()

        if not logs:
            return create_success_response("No console logs matching the criteria")
        return create_success_response([f"Retrieved {len(logs)} console log(s):", *logs])


@register_tool("playwright_get_visible_text")
class VisibleTextTool(BrowserToolBase):
    """Return the rendered text of the page."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            text = await page.evaluate(VISIBLE_TEXT_SCRIPT)
            return create_success_response(f"Visible text content:\n{text}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_get_visible_html")
class VisibleHtmlTool(BrowserToolBase):
    """Return the page's HTML."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            html = await page.content()
            return create_success_response(f"HTML content:\n{html}")

        return await self.safe_execute(context, operation)
