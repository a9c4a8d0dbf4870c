"""nad.fun token creation tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from pydantic import Field, field_validator

from monad_mcp.apps.validators import is_http_url
from monad_mcp.formatter import format_curve_creation
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient


class CreateCurveArgs(ToolArguments):
    name: str = Field(min_length=1)
    symbol: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image_url: str = Field(alias="imageUrl", min_length=1)
    amount_in: str = Field(alias="amountIn", min_length=1)
    home_page: Optional[str] = Field(default=None, alias="homePage")
    twitter: Optional[str] = None
    telegram: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def _image_url_is_http(cls, value: str) -> str:
        if not is_http_url(value):
            raise ValueError("must be an http(s) URL")
        return value


async def handle_create_curve(client: "MonadClient", args: CreateCurveArgs) -> str:
    result = await client.create_curve_with_metadata(
        args.name,
        args.symbol,
        args.description,
        args.image_url,
        args.amount_in,
        home_page=args.home_page,
        twitter=args.twitter,
        telegram=args.telegram,
    )
    return format_curve_creation(result)


NADFUN_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="createCurveWithMetadata",
        description="Create a new meme token using nadfun protocol",
        input_schema=object_schema(
            {
                "name": {"type": "string", "description": "Name of the token"},
                "symbol": {"type": "string", "description": "Symbol of the token"},
                "description": {"type": "string", "description": "Description of the token"},
                "imageUrl": {"type": "string", "description": "URL of the image for the token"},
                "amountIn": {
                    "type": "string",
                    "description": 'Amount of ETH to invest (e.g., "0.5"). Minimum required amount is 0.5 ETH.',
                },
                "homePage": {"type": "string", "description": "Optional home page URL"},
                "twitter": {"type": "string", "description": "Optional Twitter URL"},
                "telegram": {"type": "string", "description": "Optional Telegram URL"},
            },
            ["name", "symbol", "description", "imageUrl", "amountIn"],
        ),
        args_model=CreateCurveArgs,
        handler=handle_create_curve,
        failure_code="curve_creation_failed",
        failure_message="Failed to create meme token",
    ),
]
