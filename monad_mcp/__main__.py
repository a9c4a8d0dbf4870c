"""Command-line entry point: ``monad-mcp`` / ``python -m monad_mcp``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import uvicorn

from monad_mcp.client import MonadClient
from monad_mcp.config import load_config
from monad_mcp.errors import ConfigError
from monad_mcp.log_config import configure_logging
from monad_mcp.mcp import ToolGateway
from monad_mcp.server import build_rate_limiter, create_app
from monad_mcp.stdio import serve_stdio

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="monad-mcp", description="Monad blockchain MCP tool server.")
    parser.add_argument("--transport", choices=("stdio", "http"), default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--env-file", default=None, help="Path to a .env file (default: ./.env if present)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.env_file)
    configure_logging(config.log_level, config.log_format)

    try:
        client = MonadClient.from_config(config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    if args.transport == "http":
        uvicorn.run(create_app(client, config), host=args.host, port=args.port, log_config=None)
        return 0

    gateway = ToolGateway(client)
    try:
        asyncio.run(serve_stdio(gateway, build_rate_limiter(config)))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
