"""Token search tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from pydantic import Field

from monad_mcp.formatter import format_token_search
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient


class SearchTokensArgs(ToolArguments):
    query: str = Field(min_length=1)


async def handle_search_tokens(client: "MonadClient", args: SearchTokensArgs) -> str:
    return format_token_search(await client.search_tokens(args.query))


TOKEN_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="searchTokens",
        description="Search for tokens by name or ticker symbol on Monad",
        input_schema=object_schema(
            {"query": {"type": "string", "description": "Search query (token name or ticker)"}}, ["query"]
        ),
        args_model=SearchTokensArgs,
        handler=handle_search_tokens,
        failure_code="token_search_failed",
        failure_message="Failed to search for tokens",
    ),
]
