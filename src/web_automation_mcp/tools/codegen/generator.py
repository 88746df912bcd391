"""
Playwright Test Generator - Generates pytest modules from codegen sessions.

Converts a recorded action log into a pytest-playwright test using the
sync API. Each recorded action becomes exactly one statement, in log
order, inside a single test function.

Generation is a pure function of (session, options): no clock,
randomness or filesystem access is involved, so identical inputs give
byte-identical output.
"""

import json
import os
import re
from datetime import timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from web_automation_mcp.exceptions import InvalidSessionError
from web_automation_mcp.tools.codegen.types import (
    CodegenAction,
    CodegenOptions,
    CodegenSession,
    GeneratedTest,
)

# (comment, statement)
Step = Tuple[Optional[str], str]

GENERIC_TOOL_SHIM = "([name, params]) => window.executeTool(name, params)"

TAB_SWITCH_TOOL = "playwright_click_and_switch_tab"

TAB_SWITCH_HELPER = [
    "def click_and_switch_tab(page: Page, selector: str) -> Page:",
    '    """Click a link that opens a new tab and return the new tab."""',
    "    with page.context.expect_page() as new_tab:",
    "        page.click(selector)",
    "    new_page = new_tab.value",
    "    new_page.wait_for_load_state()",
    "    return new_page",
]


class PlaywrightTestGenerator:
    """
    Generates pytest-playwright test modules from codegen sessions.

    Example:
        >>> generator = PlaywrightTestGenerator({"testNamePrefix": "Checkout"})
        >>> result = generator.generate(session)
        >>> print(result.file_path)
        tests/checkout_<session-id>_test.py
    """

    FILE_SUFFIX = "_test.py"

    def __init__(self, options: Any = None):
        """
        Initialize the generator.

        Args:
            options: CodegenOptions or a mapping with outputPath,
                testNamePrefix and includeComments

        Raises:
            CodegenConfigurationError: If an option has the wrong type
        """
        self._options = CodegenOptions.parse(options)
        self._builders: Dict[str, Callable[[Dict[str, Any]], Step]] = {
            "playwright_navigate": self._navigate_step,
            "playwright_click": self._click_step,
            "playwright_iframe_click": self._iframe_click_step,
            "playwright_iframe_fill": self._iframe_fill_step,
            "playwright_fill": self._fill_step,
            "playwright_select": self._select_step,
            "playwright_hover": self._hover_step,
            "playwright_upload_file": self._upload_file_step,
            "playwright_evaluate": self._evaluate_step,
            "playwright_expect_response": self._expect_response_step,
            "playwright_assert_response": self._assert_response_step,
            "playwright_screenshot": self._screenshot_step,
            "playwright_press_key": self._press_key_step,
            "playwright_drag": self._drag_step,
            "playwright_save_as_pdf": self._save_as_pdf_step,
            TAB_SWITCH_TOOL: self._click_and_switch_tab_step,
            "playwright_go_back": self._go_back_step,
            "playwright_go_forward": self._go_forward_step,
            "playwright_custom_user_agent": self._user_agent_step,
            "playwright_get_visible_text": self._visible_text_step,
            "playwright_get_visible_html": self._visible_html_step,
            "playwright_get": self._http_step("get"),
            "playwright_post": self._http_step("post"),
            "playwright_put": self._http_step("put"),
            "playwright_patch": self._http_step("patch"),
            "playwright_delete": self._http_step("delete"),
        }

    @property
    def options(self) -> CodegenOptions:
        return self._options

    def generate(self, session: CodegenSession) -> GeneratedTest:
        """
        Generate a test module from a session.

        Args:
            session: The session to convert

        Returns:
            Source text, target file path and session id

        Raises:
            InvalidSessionError: If the session is missing, has no id,
                or its actions are not a list
        """
        self._validate_session(session)

        steps = [self._convert_action(action) for action in session.actions]
        used = {action.tool_name for action in session.actions}
        uses_json = any(name not in self._builders for name in used)
        uses_tab_switch = TAB_SWITCH_TOOL in used

        return GeneratedTest(
            source_text=self._render(session, steps, uses_json, uses_tab_switch),
            file_path=self.output_path(session),
            session_id=session.id,
        )

    def test_name(self, session: CodegenSession) -> str:
        """Name of the generated test function: prefix plus the session's start date."""
        start = session.start_time
        if start.tzinfo is not None:
            start = start.astimezone(timezone.utc)
        date = start.date().isoformat().replace("-", "_")
        return f"test_{self._sanitize(self._options.test_name_prefix)}_{date}"

    def output_path(self, session: CodegenSession) -> str:
        """Target file path for the session's test module."""
        if not getattr(session, "id", None):
            raise InvalidSessionError("Session ID is required")
        prefix = self._sanitize(self._options.test_name_prefix)
        file_name = f"{prefix}_{session.id}{self.FILE_SUFFIX}"
        return os.path.join(self._options.output_directory, file_name)

    def _validate_session(self, session: Any) -> None:
        if session is None:
            raise InvalidSessionError("Invalid session data: no session")
        if not getattr(session, "id", None):
            raise InvalidSessionError("Session ID is required")
        if not isinstance(getattr(session, "actions", None), list):
            raise InvalidSessionError(
                "Invalid session data: actions must be a list",
                {"session_id": session.id},
            )

    def _convert_action(self, action: CodegenAction) -> Step:
        params = action.parameters or {}
        builder = self._builders.get(action.tool_name)
        if builder is None:
            return self._generic_step(action.tool_name, params)
        return builder(params)

    def _render(
        self,
        session: CodegenSession,
        steps: List[Step],
        uses_json: bool,
        uses_tab_switch: bool,
    ) -> str:
        lines: List[str] = []

        if self._options.include_comments:
            lines.append('"""')
            lines.append(f"Generated test: {self._options.test_name_prefix}")
            lines.append(f"Session: {session.id}")
            lines.append(f"Recorded at: {session.start_time.isoformat()}")
            lines.append(f"Actions: {len(steps)}")
            lines.append('"""')
            lines.append("")

        if uses_json:
            lines.append("import json")
            lines.append("")
        lines.append("from playwright.sync_api import Page")
        lines.append("")
        lines.append("")
        if uses_tab_switch:
            lines.extend(TAB_SWITCH_HELPER)
            lines.append("")
            lines.append("")
        lines.append(f"def {self.test_name(session)}(page: Page) -> None:")

        if not steps:
            lines.append("    pass")

        for number, (comment, statement) in enumerate(steps, start=1):
            if self._options.include_comments and comment:
                lines.append(f"    # Step {number}: {' '.join(comment.split())}")
            lines.append(f"    {statement}")

        lines.append("")
        return "\n".join(lines)

    # ==================== Step builders ====================

    def _navigate_step(self, params: Dict[str, Any]) -> Step:
        url = params.get("url", "")
        args = [self._literal(url)]
        if params.get("waitUntil"):
            args.append(f"wait_until={self._literal(params['waitUntil'])}")
        if params.get("timeout"):
            args.append(f"timeout={self._literal(params['timeout'])}")
        return f"Navigate to {self._truncate(url, 60)}", f"page.goto({', '.join(args)})"

    def _click_step(self, params: Dict[str, Any]) -> Step:
        selector = params.get("selector", "")
        return f"Click on {self._truncate(selector)}", f"page.click({self._literal(selector)})"

    def _iframe_click_step(self, params: Dict[str, Any]) -> Step:
        iframe = params.get("iframeSelector", "")
        selector = params.get("selector", "")
        return (
            f"Click on {self._truncate(selector)} inside iframe {self._truncate(iframe)}",
            f"page.frame_locator({self._literal(iframe)}).locator({self._literal(selector)}).click()",
        )

    def _iframe_fill_step(self, params: Dict[str, Any]) -> Step:
        iframe = params.get("iframeSelector", "")
        selector = params.get("selector", "")
        value = params.get("value", "")
        return (
            f"Fill {self._truncate(selector)} inside iframe {self._truncate(iframe)}",
            f"page.frame_locator({self._literal(iframe)}).locator({self._literal(selector)})"
            f".fill({self._literal(value)})",
        )

    def _fill_step(self, params: Dict[str, Any]) -> Step:
        selector = params.get("selector", "")
        value = params.get("value", "")
        return (
            f"Fill {self._truncate(selector)} with '{self._truncate(str(value), 20)}'",
            f"page.fill({self._literal(selector)}, {self._literal(value)})",
        )

    def _select_step(self, params: Dict[str, Any]) -> Step:
        selector = params.get("selector", "")
        value = params.get("value", "")
        return (
            f"Select '{value}' in {self._truncate(selector)}",
            f"page.select_option({self._literal(selector)}, {self._literal(value)})",
        )

    def _hover_step(self, params: Dict[str, Any]) -> Step:
        selector = params.get("selector", "")
        return f"Hover over {self._truncate(selector)}", f"page.hover({self._literal(selector)})"

    def _upload_file_step(self, params: Dict[str, Any]) -> Step:
        selector = params.get("selector", "")
        file_path = params.get("filePath", "")
        return (
            f"Upload {self._truncate(str(file_path))} to {self._truncate(selector)}",
            f"page.set_input_files({self._literal(selector)}, {self._literal(file_path)})",
        )

    def _evaluate_step(self, params: Dict[str, Any]) -> Step:
        return "Evaluate JavaScript", f"page.evaluate({self._literal(params.get('script', ''))})"

    def _expect_response_step(self, params: Dict[str, Any]) -> Step:
        # Entering the context manager starts the wait; .value blocks until it resolves.
        url = params.get("url", "")
        return (
            f"Expect response {self._truncate(url, 60)}",
            f"{self._response_var(params)} = page.expect_response({self._literal(url)}).__enter__()",
        )

    def _assert_response_step(self, params: Dict[str, Any]) -> Step:
        response = f"{self._response_var(params)}.value"
        if params.get("value") is not None:
            return (
                f"Assert response {params.get('id', '')} contains '{self._truncate(str(params['value']), 20)}'",
                f"assert {self._literal(str(params['value']))} in {response}.text()",
            )
        return f"Assert response {params.get('id', '')}", f"assert {response}.ok"

    def _screenshot_step(self, params: Dict[str, Any]) -> Step:
        name = params.get("name") or "screenshot"
        path = self._literal(f"{name}.png")
        if params.get("selector"):
            locator = f"page.locator({self._literal(params['selector'])})"
            return f"Screenshot {name}", f"{locator}.screenshot(path={path})"
        full_page = bool(params.get("fullPage", False))
        return f"Screenshot {name}", f"page.screenshot(path={path}, full_page={full_page})"

    def _press_key_step(self, params: Dict[str, Any]) -> Step:
        key = params.get("key", "")
        if params.get("selector"):
            return (
                f"Press {key} on {self._truncate(params['selector'])}",
                f"page.press({self._literal(params['selector'])}, {self._literal(key)})",
            )
        return f"Press {key}", f"page.keyboard.press({self._literal(key)})"

    def _drag_step(self, params: Dict[str, Any]) -> Step:
        source = params.get("sourceSelector", "")
        target = params.get("targetSelector", "")
        return (
            f"Drag {self._truncate(source)} to {self._truncate(target)}",
            f"page.drag_and_drop({self._literal(source)}, {self._literal(target)})",
        )

    def _save_as_pdf_step(self, params: Dict[str, Any]) -> Step:
        path = os.path.join(str(params.get("outputPath", "")), params.get("filename") or "page.pdf")
        args = [
            f"path={self._literal(path)}",
            f"format={self._literal(params.get('format') or 'A4')}",
            f"print_background={bool(params.get('printBackground', True))}",
        ]
        if isinstance(params.get("margin"), dict):
            args.append(f"margin={self._literal(params['margin'])}")
        return f"Save page as PDF {self._truncate(path)}", f"page.pdf({', '.join(args)})"

    def _click_and_switch_tab_step(self, params: Dict[str, Any]) -> Step:
        selector = params.get("selector", "")
        return (
            f"Click {self._truncate(selector)} and switch to the new tab",
            f"page = click_and_switch_tab(page, {self._literal(selector)})",
        )

    def _go_back_step(self, params: Dict[str, Any]) -> Step:
        return "Go back", "page.go_back()"

    def _go_forward_step(self, params: Dict[str, Any]) -> Step:
        return "Go forward", "page.go_forward()"

    def _user_agent_step(self, params: Dict[str, Any]) -> Step:
        headers = {"User-Agent": params.get("userAgent", "")}
        return "Set user agent", f"page.set_extra_http_headers({self._literal(headers)})"

    def _visible_text_step(self, params: Dict[str, Any]) -> Step:
        return "Read visible text", 'page.inner_text("body")'

    def _visible_html_step(self, params: Dict[str, Any]) -> Step:
        return "Read page HTML", "page.content()"

    def _http_step(self, verb: str) -> Callable[[Dict[str, Any]], Step]:
        def build(params: Dict[str, Any]) -> Step:
            url = params.get("url", "")
            args = [self._literal(url)]
            if verb in ("post", "put", "patch"):
                args.append(f"data={self._literal(params.get('value'))}")
            if isinstance(params.get("headers"), dict):
                args.append(f"headers={self._literal(params['headers'])}")
            return (
                f"{verb.upper()} {self._truncate(url, 60)}",
                f"page.request.{verb}({', '.join(args)})",
            )
        return build

    def _generic_step(self, tool_name: str, params: Dict[str, Any]) -> Step:
        payload = json.dumps(params, sort_keys=True, default=str)
        return (
            tool_name,
            f"page.evaluate({self._literal(GENERIC_TOOL_SHIM)}, "
            f"[{self._literal(tool_name)}, json.loads({self._literal(payload)})])",
        )

    # ==================== Helpers ====================

    def _literal(self, value: Any) -> str:
        """Render a JSON-like value as a Python literal."""
        if isinstance(value, str):
            return f'"{self._escape_string(value)}"'
        if value is None or isinstance(value, (bool, int, float)):
            return repr(value)
        if isinstance(value, dict):
            items = ", ".join(
                f"{self._literal(str(k))}: {self._literal(v)}"
                for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))
            )
            return "{" + items + "}"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._literal(v) for v in value) + "]"
        return self._literal(str(value))

    def _escape_string(self, s: Optional[str]) -> str:
        """Escape a string for use in Python code."""
        if s is None:
            return ""
        return (
            s.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t")
        )

    @staticmethod
    def _truncate(text: str, limit: int = 50) -> str:
        text = " ".join(str(text).split())
        if len(text) > limit:
            return text[:limit] + "..."
        return text

    def _response_var(self, params: Dict[str, Any]) -> str:
        return f"response_{self._sanitize(str(params.get('id', '')))}"

    @staticmethod
    def _sanitize(prefix: str) -> str:
        return re.sub(r"[^a-z0-9_]", "_", prefix.lower())


def generate_test(session: CodegenSession, options: Any = None) -> GeneratedTest:
    """
    Generate a test module from a session.

    Args:
        session: Codegen session
        options: Generator options (defaults apply where omitted)

    Returns:
        The generated test
    """
    return PlaywrightTestGenerator(options).generate(session)
