"""FastAPI application exposing the Monad tool gateway over HTTP."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from monad_mcp.client import MonadClient
from monad_mcp.config import MonadConfig, load_config
from monad_mcp.jsonrpc import MCP_SERVER_NAME, MCP_SERVER_VERSION, handle_message, parse_error_response
from monad_mcp.log_config import configure_logging
from monad_mcp.mcp import ToolGateway, ToolRegistry
from monad_mcp.metrics import default_metrics
from monad_mcp.rate_limiter import PerKeyRateLimiter

logger = logging.getLogger(__name__)

HEALTH_STATUS = {"status": "ok"}


def build_rate_limiter(config: MonadConfig) -> PerKeyRateLimiter:
    return PerKeyRateLimiter(rate_per_sec=config.rate_limit_qps, per_tool=config.per_tool_rate_limits)


def create_app(client: Optional[MonadClient] = None, config: Optional[MonadConfig] = None) -> FastAPI:
    """
    Build the HTTP application around one client session.

    Without a client, configuration is loaded from the environment and the
    wallet session is derived from it; a bad configuration fails here, before
    the server accepts any request.

    Run with: uvicorn monad_mcp.server:create_app --factory
    """
    if client is None:
        config = config or load_config()
        configure_logging(config.log_level, config.log_format)
        client = MonadClient.from_config(config)
    config = config or client.config

    gateway = ToolGateway(client, ToolRegistry())
    rate_limiter = build_rate_limiter(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        await gateway.aclose()

    app = FastAPI(
        title="Monad MCP Server",
        description="Monad blockchain tool surface for LLM agents.",
        version=MCP_SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    app.state.rate_limiter = rate_limiter

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.time()
        default_metrics.incr_request()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000
        default_metrics.record_duration(request_id, duration_ms)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health")
    async def health() -> JSONResponse:
        """Lightweight health endpoint for monitoring."""
        return JSONResponse(
            content={
                **HEALTH_STATUS,
                "server": MCP_SERVER_NAME,
                "version": MCP_SERVER_VERSION,
                "tools": len(gateway.registry),
            }
        )

    @app.get("/metrics")
    async def metrics() -> JSONResponse:
        """Return in-process metrics snapshot."""
        return JSONResponse(content=default_metrics.snapshot())

    @app.post("/mcp")
    async def mcp_gateway(request: Request) -> Response:
        """
        JSON-RPC gateway for MCP clients.

        Supported methods: initialize, tools/list (list_tools), tools/call
        (call_tool), ping and notifications/initialized.
        """
        request_id = getattr(request.state, "request_id", None)
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            reply = parse_error_response()
        else:
            reply = await handle_message(body, gateway, rate_limiter, request_id=request_id)

        if reply.payload is None:
            return Response(status_code=204)
        return JSONResponse(status_code=reply.status_code, content=reply.payload)

    return app
