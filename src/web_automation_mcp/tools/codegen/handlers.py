"""
Codegen Session Tools - Start, end, inspect and clear recording sessions.

These tools operate on the recorder only; they never touch the browser
and are never recorded themselves.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from web_automation_mcp.exceptions import ResourceNotInitializedError, SessionNotFoundError
from web_automation_mcp.registry import register_tool
from web_automation_mcp.tools.catalog import (
    CLEAR_CODEGEN_SESSION,
    END_CODEGEN_SESSION,
    GET_CODEGEN_SESSION,
    START_CODEGEN_SESSION,
)
from web_automation_mcp.tools.codegen.generator import PlaywrightTestGenerator
from web_automation_mcp.tools.codegen.recorder import ActionRecorder
from web_automation_mcp.tools.codegen.types import CodegenOptions
from web_automation_mcp.tools.types import (
    ToolContext,
    ToolHandler,
    ToolResponse,
    create_error_response,
    create_success_response,
)

logger = logging.getLogger(__name__)


def _json_response(payload: Dict[str, Any]) -> ToolResponse:
    return create_success_response(json.dumps(payload, indent=2, default=str))


class CodegenToolBase(ToolHandler):
    """Base for tools that work on the state's recorder."""

    def recorder(self, context: ToolContext) -> ActionRecorder:
        if context.state is None:
            raise ResourceNotInitializedError("Codegen tools require server state", "state")
        return context.state.recorder

    @staticmethod
    def session_id(args: Dict[str, Any]) -> str:
        session_id = args.get("sessionId")
        if not session_id:
            raise SessionNotFoundError(session_id)
        return str(session_id)


@register_tool(START_CODEGEN_SESSION)
class StartCodegenSessionTool(CodegenToolBase):
    """Start recording tool calls into a new session."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        options = CodegenOptions.parse(args.get("options"), context.settings.codegen)
        output_dir = Path(options.output_directory).expanduser().resolve()
        output_dir.mkdir(parents=True, exist_ok=True)
        options = options.model_copy(update={"output_directory": str(output_dir)})

        session_id = self.recorder(context).start(options)
        return _json_response({
            "sessionId": session_id,
            "options": options.to_dict(),
            "message": (
                f"Started codegen session. Tests will be generated in: {output_dir}"
            ),
        })


@register_tool(END_CODEGEN_SESSION)
class EndCodegenSessionTool(CodegenToolBase):
    """End a session, generate its test and write it to disk."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        session_id = self.session_id(args)
        session = self.recorder(context).end(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        options = session.options or CodegenOptions.parse(None, context.settings.codegen)
        result = PlaywrightTestGenerator(options).generate(session)

        path = Path(result.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result.source_text, encoding="utf-8")
        logger.info(f"Wrote generated test for session {session_id} to {path}")

        return _json_response({
            "filePath": str(path),
            "outputDirectory": str(path.parent),
            "testCode": result.source_text,
            "message": f"Generated test file at: {path}",
        })


@register_tool(GET_CODEGEN_SESSION)
class GetCodegenSessionTool(CodegenToolBase):
    """Return a session as JSON."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        session_id = self.session_id(args)
        session = self.recorder(context).get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return _json_response(session.to_dict())


@register_tool(CLEAR_CODEGEN_SESSION)
class ClearCodegenSessionTool(CodegenToolBase):
    """Discard a session without generating a test."""

    async def execute(self, args: Dict[str, Any], context: ToolContext) -> ToolResponse:
        session_id = self.session_id(args)
        if not self.recorder(context).clear(session_id):
            return create_error_response(f"Session {session_id} not found")
        return _json_response({"success": True})
