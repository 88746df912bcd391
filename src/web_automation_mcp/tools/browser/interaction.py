"""
Interaction Tools - Element and keyboard interaction on the active page.
"""

import json
from typing import Any, Dict

from web_automation_mcp.registry import register_tool
from web_automation_mcp.tools.base import BrowserToolBase, require_args
from web_automation_mcp.tools.types import (
    ToolContext,
    ToolResponse,
    create_error_response,
    create_success_response,
)


@register_tool("playwright_click")
class ClickTool(BrowserToolBase):
    """Click on an element."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "selector")
            await page.click(args["selector"])
            return create_success_response(f"Clicked element: {args['selector']}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_iframe_click")
class IframeClickTool(BrowserToolBase):
    """Click on an element inside an iframe."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "iframeSelector", "selector")
            frame = page.frame_locator(args["iframeSelector"])
            await frame.locator(args["selector"]).click()
            return create_success_response(
                f"Clicked element {args['selector']} inside iframe {args['iframeSelector']}"
            )

        return await self.safe_execute(context, operation)


@register_tool("playwright_iframe_fill")
class IframeFillTool(BrowserToolBase):
    """Fill an input element inside an iframe."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "iframeSelector", "selector", "value")
            frame = page.frame_locator(args["iframeSelector"])
            await frame.locator(args["selector"]).fill(str(args["value"]))
            return create_success_response(
                f"Filled element {args['selector']} inside iframe {args['iframeSelector']} with: {args['value']}"
            )

        return await self.safe_execute(context, operation)


@register_tool("playwright_fill")
class FillTool(BrowserToolBase):
    """Fill an input element with text."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "selector", "value")
            await page.fill(args["selector"], str(args["value"]))
            return create_success_response(f"Filled {args['selector']} with: {args['value']}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_select")
class SelectTool(BrowserToolBase):
    """Select an option in a dropdown."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "selector", "value")
            await page.select_option(args["selector"], args["value"])
            return create_success_response(f"Selected {args['selector']} with: {args['value']}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_hover")
class HoverTool(BrowserToolBase):
    """Hover over an element."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "selector")
            await page.hover(args["selector"])
            return create_success_response(f"Hovered {args['selector']}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_upload_file")
class UploadFileTool(BrowserToolBase):
    """Set the file of an input[type=file] element."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "selector", "filePath")
            await page.set_input_files(args["selector"], args["filePath"])
            return create_success_response(f"Uploaded file '{args['filePath']}' to '{args['selector']}'")

        return await self.safe_execute(context, operation)


@register_tool("playwright_evaluate")
class EvaluateTool(BrowserToolBase):
    """Evaluate a JavaScript expression in the page."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "script")
            result = await page.evaluate(args["script"])
            try:
                rendered = json.dumps(result, indent=2)
            except (TypeError, ValueError):
                rendered = str(result)
            return create_success_response([
                "Executed JavaScript:",
                args["script"],
                "Result:",
                rendered,
            ])

        return await self.safe_execute(context, operation)


@register_tool("playwright_press_key")
class PressKeyTool(BrowserToolBase):
    """Press a key, optionally on a specific element."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "key")
            if args.get("selector"):
                await page.press(args["selector"], args["key"])
            else:
                await page.keyboard.press(args["key"])
            return create_success_response(f"Pressed key: {args['key']}")

        return await self.safe_execute(context, operation)


@register_tool("playwright_drag")
class DragTool(BrowserToolBase):
    """Drag one element onto another."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "sourceSelector", "targetSelector")
            await page.drag_and_drop(args["sourceSelector"], args["targetSelector"])
            return create_success_response(
                f"Dragged element from {args['sourceSelector']} to {args['targetSelector']}"
            )

        return await self.safe_execute(context, operation)


@register_tool("playwright_click_and_switch_tab")
class ClickAndSwitchTabTool(BrowserToolBase):
    """
    Click a link that opens a new tab and make that tab the active page.

    Later browser tools run against the new tab.
    """

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "selector")
            async with page.context.expect_page() as new_tab:
                await page.click(args["selector"])
            new_page = await new_tab.value
            await new_page.wait_for_load_state()

            if context.state is not None:
                context.state.browser.adopt_page(new_page)
            context.page = new_page
            return create_success_response(
                f"Clicked link and switched to new tab. New URL: {new_page.url}"
            )

        return await self.safe_execute(context, operation)


@register_tool("playwright_custom_user_agent")
class CustomUserAgentTool(BrowserToolBase):
    """
    Confirm the page runs with a requested user agent.

    The user agent itself is applied when the page's context is created;
    this tool reads it back from the page.
    """

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        async def operation(page: Any) -> ToolResponse:
            require_args(args, "userAgent")
            current = await page.evaluate("() => navigator.userAgent")
            if current != args["userAgent"]:
                return create_error_response(
                    f"Page's user agent does not match: expected {args['userAgent']}, got {current}"
                )
            return create_success_response(f"User agent set to: {current}")

        return await self.safe_execute(context, operation)
