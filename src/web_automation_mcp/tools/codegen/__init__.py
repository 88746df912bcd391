"""
Codegen module - Records tool calls and turns them into pytest tests.

Importing this package registers the session-control tools.
"""

from web_automation_mcp.tools.codegen.types import (
    CodegenOptions,
    CodegenAction,
    CodegenSession,
    GeneratedTest,
)
from web_automation_mcp.tools.codegen.recorder import ActionRecorder
from web_automation_mcp.tools.codegen.generator import PlaywrightTestGenerator, generate_test
from web_automation_mcp.tools.codegen.handlers import (
    StartCodegenSessionTool,
    EndCodegenSessionTool,
    GetCodegenSessionTool,
    ClearCodegenSessionTool,
)

__all__ = [
    # Types
    "CodegenOptions",
    "CodegenAction",
    "CodegenSession",
    "GeneratedTest",
    # Recording and generation
    "ActionRecorder",
    "PlaywrightTestGenerator",
    "generate_test",
    # Tools
    "StartCodegenSessionTool",
    "EndCodegenSessionTool",
    "GetCodegenSessionTool",
    "ClearCodegenSessionTool",
]
