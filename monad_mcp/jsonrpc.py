"""
Transport-agnostic JSON-RPC handling for the MCP gateway.

Both the HTTP route and the stdio loop hand decoded request bodies to
``handle_message`` and write back whatever payload it returns. This is also
where failures are normalized: protocol faults become JSON-RPC errors,
application faults become in-band error results, and anything unclassified
becomes ``-32603`` without taking the process down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from monad_mcp.mcp import ApplicationFault, ProtocolFault, ToolGateway, ToolOutcome
from monad_mcp.metrics import MetricsRecorder, default_metrics
from monad_mcp.rate_limiter import PerKeyRateLimiter

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RATE_LIMITED = 429

MCP_SERVER_NAME = "monad-mcp"
MCP_SERVER_VERSION = "1.0.0"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"


@dataclass(slots=True)
class RpcResponse:
    """Payload to send back, or None for notifications; ``status_code`` is used by HTTP only."""

    payload: Optional[Dict[str, Any]]
    status_code: int = 200


def success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def error_payload(rpc_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": rpc_id, "error": error}


def parse_error_response() -> RpcResponse:
    return RpcResponse(error_payload(None, PARSE_ERROR, "Parse error"), status_code=400)


def _log_tool_outcome(outcome: ToolOutcome, metrics: MetricsRecorder, request_id: Optional[str]) -> None:
    tool = outcome.tool
    if isinstance(outcome, ProtocolFault):
        logger.warning(
            "tool=%s outcome=rejected error=%s request_id=%s",
            tool,
            outcome.message,
            request_id,
            extra={"tool": tool, "request_id": request_id, "error": outcome.code},
        )
        metrics.record_rejected(tool)
    elif isinstance(outcome, ApplicationFault):
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool,
            outcome.code,
            request_id,
            extra={"tool": tool, "request_id": request_id, "error": outcome.code},
        )
        metrics.record_tool(tool, success=False, code=outcome.code)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool,
            request_id,
            extra={"tool": tool, "request_id": request_id},
        )
        metrics.record_tool(tool, success=True)


async def _rate_limited(
    limiter: Optional[PerKeyRateLimiter], key: str, rpc_id: Any, metrics: MetricsRecorder
) -> Optional[RpcResponse]:
    if limiter is None or await limiter.allow(key):
        return None
    logger.warning("tool=%s outcome=rate_limited", key, extra={"tool": key})
    metrics.incr_rate_limited()
    return RpcResponse(error_payload(rpc_id, RATE_LIMITED, "Rate limit exceeded"), status_code=429)


async def _dispatch_method(
    body: Dict[str, Any],
    gateway: ToolGateway,
    limiter: Optional[PerKeyRateLimiter],
    metrics: MetricsRecorder,
    request_id: Optional[str],
) -> RpcResponse:
    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return RpcResponse(error_payload(rpc_id, INVALID_PARAMS, "Invalid params"))

    if not isinstance(method, str) or not method:
        return RpcResponse(error_payload(rpc_id, INVALID_REQUEST, "Invalid request"), status_code=400)

    if method == "initialize":
        protocol_version = params.get("protocolVersion") or DEFAULT_PROTOCOL_VERSION
        if not isinstance(protocol_version, str):
            return RpcResponse(error_payload(rpc_id, INVALID_PARAMS, "Invalid params"))
        logger.debug("mcp initialize requested protocol=%s", protocol_version, extra={"request_id": request_id})
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return RpcResponse(success_payload(rpc_id, result))

    if method in ("list_tools", "tools/list"):
        limited = await _rate_limited(limiter, "list_tools", rpc_id, metrics)
        if limited:
            return limited
        return RpcResponse(success_payload(rpc_id, {"tools": gateway.list_tools()}))

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("name") or params.get("tool")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = params.get("params")
        if not isinstance(tool_name, str) or not tool_name.strip():
            return RpcResponse(error_payload(rpc_id, INVALID_PARAMS, "Invalid params: tool name is required"))

        limited = await _rate_limited(limiter, tool_name, rpc_id, metrics)
        if limited:
            return limited

        outcome = await gateway.call_tool(tool_name, arguments)
        _log_tool_outcome(outcome, metrics, request_id)
        if isinstance(outcome, ProtocolFault):
            return RpcResponse(error_payload(rpc_id, outcome.code, outcome.message, outcome.data))
        return RpcResponse(success_payload(rpc_id, outcome.to_content()))

    if method in ("notifications/initialized", "initialized"):
        logger.debug("mcp initialized notification received", extra={"request_id": request_id})
        return RpcResponse(None, status_code=204)

    if method == "ping":
        return RpcResponse(success_payload(rpc_id, {}))

    return RpcResponse(error_payload(rpc_id, METHOD_NOT_FOUND, "Method not found"))


async def handle_message(
    body: Any,
    gateway: ToolGateway,
    limiter: Optional[PerKeyRateLimiter] = None,
    *,
    metrics: MetricsRecorder = default_metrics,
    request_id: Optional[str] = None,
) -> RpcResponse:
    """
    Answer one decoded JSON-RPC message.

    Never raises: unexpected exceptions are logged and reported as
    ``-32603``.
    """
    if not isinstance(body, dict):
        return RpcResponse(error_payload(None, INVALID_REQUEST, "Invalid request"), status_code=400)

    try:
        return await _dispatch_method(body, gateway, limiter, metrics, request_id)
    except Exception:
        logger.exception(
            "Unhandled error while serving method=%s", body.get("method"), extra={"request_id": request_id}
        )
        metrics.incr_internal_error()
        return RpcResponse(error_payload(body.get("id"), INTERNAL_ERROR, "An unexpected error occurred"))
