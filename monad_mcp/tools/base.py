"""Tool descriptors and argument validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient


class ToolArguments(BaseModel):
    """Base for per-tool argument models: no coercion, no unknown fields."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)


ToolHandler = Callable[["MonadClient", Any], Awaitable[str]]


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any]
    args_model: Type[ToolArguments]
    handler: ToolHandler
    failure_code: str
    failure_message: str

    def describe(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


def object_schema(properties: Dict[str, Dict[str, Any]], required: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required or [],
        "additionalProperties": False,
    }


def _describe_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "__root__")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def validate_arguments(tool: ToolDefinition, raw: Any) -> Tuple[Optional[ToolArguments], List[str]]:
    """
    Check raw arguments against the tool's contract.

    Returns the validated model and an empty list, or None and the list of
    violations. Absent arguments are treated as an empty object.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        return None, ["arguments: Input should be an object"]
    try:
        return tool.args_model.model_validate(dict(raw)), []
    except ValidationError as exc:
        return None, [_describe_error(error) for error in exc.errors()]
