"""Kuru DEX tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Literal, Optional

from pydantic import Field

from monad_mcp.formatter import format_price, format_swap
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient

TOKEN_PROPERTIES = {
    "tokenInAddress": {"type": "string", "description": "Address of the input token"},
    "tokenOutAddress": {"type": "string", "description": "Address of the output token"},
    "amountToSwap": {"type": "number", "description": "Amount to swap", "exclusiveMinimum": 0},
}


class GetPriceArgs(ToolArguments):
    token_in_address: str = Field(alias="tokenInAddress", min_length=1)
    token_out_address: str = Field(alias="tokenOutAddress", min_length=1)
    amount_to_swap: float = Field(alias="amountToSwap", gt=0)
    amount_type: Literal["amountIn", "amountOut"] = Field(default="amountIn", alias="amountType")


class SwapArgs(ToolArguments):
    token_in_address: str = Field(alias="tokenInAddress", min_length=1)
    token_out_address: str = Field(alias="tokenOutAddress", min_length=1)
    amount_to_swap: float = Field(alias="amountToSwap", gt=0)
    slippage_tolerance: Optional[float] = Field(default=None, alias="slippageTolerance", ge=0, le=100)


async def handle_get_price(client: "MonadClient", args: GetPriceArgs) -> str:
    quote = await client.get_kuru_price(
        args.token_in_address, args.token_out_address, args.amount_to_swap, args.amount_type
    )
    return format_price(quote)


async def handle_swap(client: "MonadClient", args: SwapArgs) -> str:
    result = await client.swap_on_kuru(
        args.token_in_address, args.token_out_address, args.amount_to_swap, args.slippage_tolerance
    )
    return format_swap(result)


KURU_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="getKuruPrice",
        description="Get the price for a token swap on Kuru DEX",
        input_schema=object_schema(
            {
                **TOKEN_PROPERTIES,
                "amountType": {
                    "type": "string",
                    "enum": ["amountIn", "amountOut"],
                    "description": "Type of amount (default: amountIn)",
                },
            },
            ["tokenInAddress", "tokenOutAddress", "amountToSwap"],
        ),
        args_model=GetPriceArgs,
        handler=handle_get_price,
        failure_code="price_fetch_failed",
        failure_message="Failed to get price from Kuru DEX",
    ),
    ToolDefinition(
        name="swapOnKuru",
        description="Swap tokens on Kuru DEX",
        input_schema=object_schema(
            {
                **TOKEN_PROPERTIES,
                "slippageTolerance": {
                    "type": "number",
                    "minimum": 0,
                    "maximum": 100,
                    "description": "Slippage tolerance in percent (default: 0.5%)",
                },
            },
            ["tokenInAddress", "tokenOutAddress", "amountToSwap"],
        ),
        args_model=SwapArgs,
        handler=handle_swap,
        failure_code="swap_failed",
        failure_message="Failed to swap tokens on Kuru DEX",
    ),
]
