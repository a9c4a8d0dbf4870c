"""Newline-delimited JSON-RPC over stdin/stdout."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import IO, Optional

from monad_mcp.jsonrpc import handle_message, parse_error_response
from monad_mcp.mcp import ToolGateway
from monad_mcp.rate_limiter import PerKeyRateLimiter

logger = logging.getLogger(__name__)


async def serve_stdio(
    gateway: ToolGateway,
    limiter: Optional[PerKeyRateLimiter] = None,
    *,
    stdin: Optional[IO] = None,
    stdout: Optional[IO[str]] = None,
) -> None:
    """
    Answer one JSON-RPC message per input line until end of input.

    Notifications produce no output. The gateway is closed on exit.
    """
    reader = stdin or sys.stdin.buffer
    writer = stdout or sys.stdout
    logger.info("Monad MCP server running on stdio")
    try:
        while True:
            line = await asyncio.to_thread(reader.readline)
            if not line:
                break
            if isinstance(line, bytes):
                line = line.decode("utf-8", errors="replace")
            line = line.strip()
            if not line:
                continue

            try:
                body = json.loads(line)
            except ValueError:
                reply = parse_error_response()
            else:
                reply = await handle_message(body, gateway, limiter)

            if reply.payload is not None:
                writer.write(json.dumps(reply.payload) + "\n")
                writer.flush()
    finally:
        await gateway.aclose()
        logger.info("stdio transport closed")
