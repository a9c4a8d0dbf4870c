"""
Tool registry and dispatch for MCP-style tooling.

The registry maps tool names to descriptors collected from every tool family.
Dispatch never raises for expected failures: it returns a tagged outcome that
the transport layer turns into a JSON-RPC payload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from monad_mcp.client import MonadClient
from monad_mcp.errors import DuplicateToolError, MonadError
from monad_mcp.tools import TOOL_FAMILIES, ToolDefinition, validate_arguments

logger = logging.getLogger(__name__)

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
ERROR_PREFIX = "Monad blockchain error: "


@dataclass(frozen=True, slots=True)
class ToolResult:
    tool: str
    text: str

    def to_content(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}]}


@dataclass(frozen=True, slots=True)
class ApplicationFault:
    """A failed operation, reported in-band as a successful JSON-RPC result."""

    tool: str
    message: str
    code: str
    status: Optional[int] = 500

    def to_content(self) -> Dict[str, Any]:
        return {
            "content": [{"type": "text", "text": f"{ERROR_PREFIX}{self.message}", "isError": True}],
            "isError": True,
            "structuredContent": {"error": self.message, "code": self.code, "status": self.status},
        }


@dataclass(frozen=True, slots=True)
class ProtocolFault:
    """A request the gateway refuses to run; becomes a JSON-RPC error."""

    tool: str
    code: int
    message: str
    data: Optional[List[str]] = None


ToolOutcome = Union[ToolResult, ApplicationFault, ProtocolFault]


class ToolRegistry:
    def __init__(self, families: Iterable[Sequence[ToolDefinition]] = TOOL_FAMILIES) -> None:
        self._tools: Dict[str, ToolDefinition] = {}
        for family in families:
            for tool in family:
                if tool.name in self._tools:
                    raise DuplicateToolError(f"Tool registered twice: {tool.name}")
                self._tools[tool.name] = tool

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> List[str]:
        return list(self._tools)

    def resolve(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Return the public descriptor of every registered tool."""
        return [tool.describe() for tool in self._tools.values()]


async def dispatch(registry: ToolRegistry, client: MonadClient, name: str, arguments: Any) -> ToolOutcome:
    tool = registry.resolve(name)
    if tool is None:
        return ProtocolFault(tool=name, code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}")

    args, violations = validate_arguments(tool, arguments)
    if args is None:
        return ProtocolFault(
            tool=name,
            code=INVALID_PARAMS,
            message=f"Invalid parameters: {'; '.join(violations)}",
            data=violations,
        )

    try:
        text = await tool.handler(client, args)
    except MonadError as exc:
        return ApplicationFault(tool=name, message=exc.message, code=exc.code, status=exc.status)
    except Exception:
        logger.exception("tool=%s raised an unclassified error", name, extra={"tool": name})
        return ApplicationFault(tool=name, message=tool.failure_message, code=tool.failure_code, status=500)
    return ToolResult(tool=name, text=text)


class ToolGateway:
    """Pairs the registry with the client facade that handlers call into."""

    def __init__(self, client: MonadClient, registry: Optional[ToolRegistry] = None) -> None:
        self.client = client
        self.registry = registry or ToolRegistry()

    def list_tools(self) -> List[Dict[str, Any]]:
        return self.registry.list_tools()

    async def call_tool(self, name: str, arguments: Any = None) -> ToolOutcome:
        return await dispatch(self.registry, self.client, name, arguments)

    async def aclose(self) -> None:
        await self.client.aclose()
