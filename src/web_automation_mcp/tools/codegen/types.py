"""
Codegen Types - Recorded actions, sessions and generator options.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from web_automation_mcp.config.settings import CodegenSettings
from web_automation_mcp.exceptions import CodegenConfigurationError


class CodegenOptions(BaseModel):
    """
    Options controlling test generation.

    Accepts both snake_case and the camelCase keys tool callers send.
    Types are checked strictly: a string where a boolean is expected is
    rejected rather than coerced.
    """
    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    output_directory: str = Field(
        default="tests",
        validation_alias=AliasChoices("output_directory", "outputDirectory", "outputPath"),
    )
    test_name_prefix: str = Field(
        default="MCP",
        validation_alias=AliasChoices("test_name_prefix", "testNamePrefix"),
    )
    include_comments: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_comments", "includeComments"),
    )

    @classmethod
    def parse(
        cls,
        raw: Any = None,
        defaults: Optional[CodegenSettings] = None,
    ) -> "CodegenOptions":
        """
        Validate raw options, filling gaps from configured defaults.

        Raises:
            CodegenConfigurationError: If raw is not a mapping or a field
                has the wrong type
        """
        if isinstance(raw, CodegenOptions):
            return raw
        if raw is not None and not isinstance(raw, dict):
            raise CodegenConfigurationError("Codegen options must be an object")

        base: Dict[str, Any] = defaults.model_dump() if defaults else {}
        # Caller keys may use any alias; fold them onto field names so they
        # override the defaults.
        for name, info in cls.model_fields.items():
            for alias in info.validation_alias.choices:
                if alias in (raw or {}):
                    base[name] = raw[alias]
        try:
            return cls.model_validate(base)
        except ValidationError as e:
            fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
            raise CodegenConfigurationError(
                f"Invalid codegen options: {', '.join(fields)}",
                {"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outputPath": self.output_directory,
            "testNamePrefix": self.test_name_prefix,
            "includeComments": self.include_comments,
        }


@dataclass(frozen=True)
class CodegenAction:
    """A single recorded tool invocation."""
    tool_name: str
    parameters: Dict[str, Any]
    timestamp: datetime
    result: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "toolName": self.tool_name,
            "parameters": self.parameters,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.result is not None:
            data["result"] = self.result
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodegenAction":
        return cls(
            tool_name=data["toolName"],
            parameters=dict(data.get("parameters") or {}),
            timestamp=_parse_time(data.get("timestamp")),
            result=data.get("result"),
        )


@dataclass
class CodegenSession:
    """
    An ordered log of tool invocations captured for code synthesis.
    """
    id: str
    actions: List[CodegenAction] = field(default_factory=list)
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: Optional[datetime] = None
    options: Optional[CodegenOptions] = None

    @property
    def is_ended(self) -> bool:
        return self.end_time is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "actions": [a.to_dict() for a in self.actions],
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "options": self.options.to_dict() if self.options else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodegenSession":
        """Create from dictionary."""
        options = data.get("options")
        return cls(
            id=data.get("id"),
            actions=[CodegenAction.from_dict(a) for a in data.get("actions", [])],
            start_time=_parse_time(data.get("startTime")),
            end_time=_parse_time(data["endTime"]) if data.get("endTime") else None,
            options=CodegenOptions.parse(options) if options else None,
        )


@dataclass(frozen=True)
class GeneratedTest:
    """Output of the test generator."""
    source_text: str
    file_path: str
    session_id: str


def _parse_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        # Epoch milliseconds
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return datetime.now(timezone.utc)
