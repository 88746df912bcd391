"""
Tests for the browser tool handlers.
"""

import asyncio
import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_page
from web_automation_mcp.tools.browser import (
    AssertResponseTool,
    ClickAndSwitchTabTool,
    ClickTool,
    CloseBrowserTool,
    ConsoleLogsTool,
    CustomUserAgentTool,
    DragTool,
    EvaluateTool,
    ExpectResponseTool,
    FillTool,
    GoBackTool,
    HoverTool,
    IframeClickTool,
    IframeFillTool,
    NavigateTool,
    PressKeyTool,
    SaveAsPdfTool,
    ScreenshotTool,
    SelectTool,
    UploadFileTool,
    VisibleHtmlTool,
    VisibleTextTool,
)
from web_automation_mcp.tools.browser.output import DEFAULT_PDF_MARGIN
from web_automation_mcp.tools.browser.response import url_matches
from web_automation_mcp.tools.types import ImageContent, ToolContext


class TestNavigationTools:
    """Test navigation handlers."""

    @pytest.mark.asyncio
    async def test_navigate_uses_default_timeout(self, tool_context, page):
        result = await NavigateTool().execute({"url": "https://example.com"}, tool_context)

        assert not result.is_error
        assert result.text == "Navigated to https://example.com"
        page.goto.assert_awaited_once_with("https://example.com", timeout=30000, wait_until="load")

    @pytest.mark.asyncio
    async def test_navigate_with_options(self, tool_context, page):
        await NavigateTool().execute(
            {"url": "https://example.com", "timeout": 5000, "waitUntil": "networkidle"},
            tool_context,
        )
        page.goto.assert_awaited_once_with("https://example.com", timeout=5000, wait_until="networkidle")

    @pytest.mark.asyncio
    async def test_navigate_requires_url(self, tool_context, page):
        result = await NavigateTool().execute({}, tool_context)

        assert result.is_error
        assert result.text == "Operation failed: Missing required argument: url"
        page.goto.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_go_back(self, tool_context, page):
        result = await GoBackTool().execute({}, tool_context)

        assert result.text == "Navigated back in browser history"
        page.go_back.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_browser(self, state):
        result = await CloseBrowserTool().execute({}, ToolContext(state=state))

        assert not result.is_error
        assert result.text == "No browser instance to close"

    @pytest.mark.asyncio
    async def test_close_running_browser(self, state):
        await state.browser.ensure()
        browser = state.browser.browser

        result = await CloseBrowserTool().execute({}, ToolContext(browser=browser, state=state))

        assert result.text == "Browser closed successfully"
        browser.close.assert_awaited_once()
        assert state.browser.browser is None


class TestInteractionTools:
    """Test interaction handlers."""

    @pytest.mark.asyncio
    async def test_click(self, tool_context, page):
        result = await ClickTool().execute({"selector": "#submit"}, tool_context)

        assert result.text == "Clicked element: #submit"
        page.click.assert_awaited_once_with("#submit")

    @pytest.mark.asyncio
    async def test_iframe_click(self, tool_context, page):
        locator = MagicMock()
        locator.click = AsyncMock()
        page.frame_locator.return_value.locator.return_value = locator

        result = await IframeClickTool().execute(
            {"iframeSelector": "#frame", "selector": "button"}, tool_context
        )

        assert result.text == "Clicked element button inside iframe #frame"
        page.frame_locator.assert_called_once_with("#frame")
        page.frame_locator.return_value.locator.assert_called_once_with("button")
        locator.click.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_iframe_fill(self, tool_context, page):
        locator = MagicMock()
        locator.fill = AsyncMock()
        page.frame_locator.return_value.locator.return_value = locator

        result = await IframeFillTool().execute(
            {"iframeSelector": "#frame", "selector": "#card", "value": "4242"}, tool_context
        )

        assert result.text == "Filled element #card inside iframe #frame with: 4242"
        page.frame_locator.assert_called_once_with("#frame")
        locator.fill.assert_awaited_once_with("4242")

    @pytest.mark.asyncio
    async def test_upload_file(self, tool_context, page):
        result = await UploadFileTool().execute(
            {"selector": "input[type=file]", "filePath": "/tmp/cv.pdf"}, tool_context
        )

        assert result.text == "Uploaded file '/tmp/cv.pdf' to 'input[type=file]'"
        page.set_input_files.assert_awaited_once_with("input[type=file]", "/tmp/cv.pdf")

    @pytest.mark.asyncio
    async def test_upload_file_requires_path(self, tool_context, page):
        result = await UploadFileTool().execute({"selector": "#file"}, tool_context)

        assert result.text == "Operation failed: Missing required argument: filePath"
        page.set_input_files.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_click_and_switch_tab(self, tool_context, page):
        tab = make_page()
        tab.url = "https://example.com/terms"

        async def opened():
            return tab

        manager = page.context.expect_page.return_value
        manager.__aenter__.return_value = SimpleNamespace(value=opened())
        manager.__aexit__.return_value = False

        result = await ClickAndSwitchTabTool().execute({"selector": "a.terms"}, tool_context)

        assert result.text == "Clicked link and switched to new tab. New URL: https://example.com/terms"
        page.click.assert_awaited_once_with("a.terms")
        tab.wait_for_load_state.assert_awaited_once()
        assert tool_context.state.browser.page is tab
        assert tool_context.page is tab

    @pytest.mark.asyncio
    async def test_fill(self, tool_context, page):
        result = await FillTool().execute({"selector": "#name", "value": "Ada"}, tool_context)

        assert result.text == "Filled #name with: Ada"
        page.fill.assert_awaited_once_with("#name", "Ada")

    @pytest.mark.asyncio
    async def test_select(self, tool_context, page):
        result = await SelectTool().execute({"selector": "#country", "value": "NL"}, tool_context)

        assert result.text == "Selected #country with: NL"
        page.select_option.assert_awaited_once_with("#country", "NL")

    @pytest.mark.asyncio
    async def test_hover(self, tool_context, page):
        result = await HoverTool().execute({"selector": ".menu"}, tool_context)

        assert result.text == "Hovered .menu"
        page.hover.assert_awaited_once_with(".menu")

    @pytest.mark.asyncio
    async def test_evaluate_renders_json(self, tool_context, page):
        page.evaluate.return_value = {"title": "Home"}

        result = await EvaluateTool().execute({"script": "({title: document.title})"}, tool_context)

        assert [part.text for part in result.content] == [
            "Executed JavaScript:",
            "({title: document.title})",
            "Result:",
            '{\n  "title": "Home"\n}',
        ]

    @pytest.mark.asyncio
    async def test_press_key_on_page(self, tool_context, page):
        result = await PressKeyTool().execute({"key": "Enter"}, tool_context)

        assert result.text == "Pressed key: Enter"
        page.keyboard.press.assert_awaited_once_with("Enter")
        page.press.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_press_key_on_element(self, tool_context, page):
        await PressKeyTool().execute({"key": "Tab", "selector": "#email"}, tool_context)

        page.press.assert_awaited_once_with("#email", "Tab")
        page.keyboard.press.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_drag(self, tool_context, page):
        result = await DragTool().execute(
            {"sourceSelector": "#card", "targetSelector": "#done"}, tool_context
        )

        assert result.text == "Dragged element from #card to #done"
        page.drag_and_drop.assert_awaited_once_with("#card", "#done")

    @pytest.mark.asyncio
    async def test_custom_user_agent_match(self, tool_context, page):
        page.evaluate.return_value = "TestAgent/1.0"

        result = await CustomUserAgentTool().execute({"userAgent": "TestAgent/1.0"}, tool_context)

        assert not result.is_error
        assert result.text == "User agent set to: TestAgent/1.0"

    @pytest.mark.asyncio
    async def test_custom_user_agent_mismatch(self, tool_context, page):
        page.evaluate.return_value = "Mozilla/5.0"

        result = await CustomUserAgentTool().execute({"userAgent": "TestAgent/1.0"}, tool_context)

        assert result.is_error
        assert "does not match" in result.text


class TestOutputTools:
    """Test screenshot, console and content handlers."""

    @pytest.mark.asyncio
    async def test_screenshot_is_stored_and_returned(self, tool_context, page):
        result = await ScreenshotTool().execute({"name": "home", "fullPage": True}, tool_context)

        encoded = base64.b64encode(b"png-bytes").decode("ascii")
        assert not result.is_error
        assert result.content[0].text == "Screenshot 'home' taken"
        assert result.content[-1] == ImageContent(encoded)
        assert tool_context.state.screenshots["home"] == encoded
        page.screenshot.assert_awaited_once_with(type="png", full_page=True)

    @pytest.mark.asyncio
    async def test_screenshot_of_element(self, tool_context, page):
        page.locator.return_value.screenshot = AsyncMock(return_value=b"element")

        await ScreenshotTool().execute({"name": "logo", "selector": "#logo"}, tool_context)

        page.locator.assert_called_once_with("#logo")
        page.screenshot.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_screenshot_saved_as_png(self, tool_context, tmp_path):
        result = await ScreenshotTool().execute(
            {"name": "home", "savePng": True, "storeBase64": False, "downloadsDir": str(tmp_path)},
            tool_context,
        )

        saved = list(tmp_path.glob("home-*.png"))
        assert len(saved) == 1
        assert saved[0].read_bytes() == b"png-bytes"
        assert result.text.startswith("Screenshot saved to: ")
        assert "home" not in tool_context.state.screenshots

    @pytest.mark.asyncio
    async def test_save_as_pdf_defaults(self, tool_context, page, tmp_path):
        result = await SaveAsPdfTool().execute({"outputPath": str(tmp_path / "pdfs")}, tool_context)

        path = tmp_path / "pdfs" / "page.pdf"
        assert result.text == f"Saved page as PDF: {path}"
        assert path.parent.is_dir()
        page.pdf.assert_awaited_once_with(
            path=str(path), format="A4", print_background=True, margin=DEFAULT_PDF_MARGIN
        )

    @pytest.mark.asyncio
    async def test_save_as_pdf_with_options(self, tool_context, page, tmp_path):
        margin = {"top": "1cm", "right": "1cm", "bottom": "1cm", "left": "1cm"}

        await SaveAsPdfTool().execute(
            {
                "outputPath": str(tmp_path),
                "filename": "invoice.pdf",
                "format": "Letter",
                "printBackground": False,
                "margin": margin,
            },
            tool_context,
        )

        page.pdf.assert_awaited_once_with(
            path=str(tmp_path / "invoice.pdf"), format="Letter", print_background=False, margin=margin
        )

    @pytest.mark.asyncio
    async def test_save_as_pdf_engine_error(self, tool_context, page, tmp_path):
        page.pdf.side_effect = Exception("PDF generation is only supported for headless chromium")

        result = await SaveAsPdfTool().execute({"outputPath": str(tmp_path)}, tool_context)

        assert result.is_error
        assert result.text == "Operation failed: PDF generation is only supported for headless chromium"

    @pytest.mark.asyncio
    async def test_console_logs_filtering(self, tool_context):
        state = tool_context.state
        state.register_console_message("log", "app started")
        state.register_console_message("error", "failed to fetch /api")
        state.register_console_message("error", "Uncaught TypeError")

        result = await ConsoleLogsTool().execute({"type": "error", "search": "fetch"}, tool_context)

        assert result.text == "Retrieved 1 console log(s):\n[error] failed to fetch /api"

    @pytest.mark.asyncio
    async def test_console_logs_limit_and_clear(self, tool_context):
        state = tool_context.state
        for i in range(5):
            state.register_console_message("log", f"message {i}")

        result = await ConsoleLogsTool().execute({"limit": 2, "clear": True}, tool_context)

        assert [part.text for part in result.content][1:] == ["[log] message 3", "[log] message 4"]
        assert state.console_logs == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [-2, 0, "3", True])
    async def test_console_logs_rejects_bad_limit(self, tool_context, limit):
        state = tool_context.state
        for i in range(5):
            state.register_console_message("log", f"message {i}")

        result = await ConsoleLogsTool().execute({"limit": limit, "clear": True}, tool_context)

        assert result.is_error
        assert result.text.startswith("Invalid limit")
        assert len(state.console_logs) == 5

    @pytest.mark.asyncio
    async def test_console_logs_empty(self, tool_context):
        result = await ConsoleLogsTool().execute({}, tool_context)
        assert result.text == "No console logs matching the criteria"

    @pytest.mark.asyncio
    async def test_visible_text(self, tool_context, page):
        page.evaluate.return_value = "Welcome\nSign in"

        result = await VisibleTextTool().execute({}, tool_context)

        assert result.text == "Visible text content:\nWelcome\nSign in"

    @pytest.mark.asyncio
    async def test_visible_html(self, tool_context, page):
        page.content.return_value = "<html></html>"

        result = await VisibleHtmlTool().execute({}, tool_context)

        assert result.text == "HTML content:\n<html></html>"


class TestResponseTools:
    """Test waiting for and checking network responses."""

    @staticmethod
    def make_response(body, status=200, url="https://api.example.com/orders"):
        response = MagicMock(url=url, status=status)
        response.text = AsyncMock(return_value=body)
        return response

    @pytest.mark.asyncio
    async def test_expect_then_assert(self, tool_context, page):
        page.wait_for_event.return_value = self.make_response('{"id": 7}')

        started = await ExpectResponseTool().execute({"id": "orders", "url": "**/orders"}, tool_context)
        assert started.text == "Started waiting for response with ID orders"
        assert "orders" in tool_context.state.pending_responses

        result = await AssertResponseTool().execute({"id": "orders", "value": '"id": 7'}, tool_context)

        assert not result.is_error
        assert [part.text for part in result.content] == [
            "Response assertion for ID orders successful",
            "URL: https://api.example.com/orders",
            "Status: 200",
            'Body: {"id": 7}',
        ]
        assert tool_context.state.pending_responses == {}

    @pytest.mark.asyncio
    async def test_wait_matches_url_pattern(self, tool_context, page):
        await ExpectResponseTool().execute({"id": "orders", "url": "**/orders"}, tool_context)

        event, predicate = page.wait_for_event.call_args.args
        assert event == "response"
        assert predicate(SimpleNamespace(url="https://api.example.com/orders"))
        assert not predicate(SimpleNamespace(url="https://api.example.com/users"))
        tool_context.state.cancel_pending_responses()

    @pytest.mark.asyncio
    async def test_assert_body_mismatch(self, tool_context, page):
        page.wait_for_event.return_value = self.make_response("[]")
        await ExpectResponseTool().execute({"id": "orders", "url": "**/orders"}, tool_context)

        result = await AssertResponseTool().execute({"id": "orders", "value": "ada"}, tool_context)

        assert result.is_error
        assert result.text == "Response body does not contain expected value: ada"

    @pytest.mark.asyncio
    async def test_assert_unknown_id(self, tool_context):
        result = await AssertResponseTool().execute({"id": "ghost"}, tool_context)

        assert result.is_error
        assert result.text == "No response wait operation found with ID: ghost"

    @pytest.mark.asyncio
    async def test_expect_same_id_replaces_wait(self, tool_context, page):
        await ExpectResponseTool().execute({"id": "orders", "url": "**/v1/orders"}, tool_context)
        first = tool_context.state.pending_responses["orders"]

        await ExpectResponseTool().execute({"id": "orders", "url": "**/v2/orders"}, tool_context)

        await asyncio.sleep(0)
        assert first.cancelled()
        assert tool_context.state.pending_responses["orders"] is not first
        tool_context.state.cancel_pending_responses()

    @pytest.mark.parametrize("pattern,url,expected", [
        ("https://api.example.com/orders", "https://api.example.com/orders", True),
        ("**/orders", "https://api.example.com/orders", True),
        ("**/orders?page=*", "https://api.example.com/orders?page=2", True),
        ("**/orders", "https://api.example.com/users", False),
    ])
    def test_url_matches(self, pattern, url, expected):
        assert url_matches(pattern, url) is expected
