"""Native balance and transfer tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from pydantic import Field

from monad_mcp.formatter import format_balance, format_transfer
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient


class GetBalanceArgs(ToolArguments):
    address: Optional[str] = None


class TransferEthArgs(ToolArguments):
    to: str = Field(min_length=1)
    amount: str = Field(min_length=1)


async def handle_get_balance(client: "MonadClient", args: GetBalanceArgs) -> str:
    return format_balance(await client.get_balance(args.address))


async def handle_transfer_eth(client: "MonadClient", args: TransferEthArgs) -> str:
    return format_transfer(await client.transfer_eth(args.to, args.amount))


NATIVE_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="getBalance",
        description="Get the balance of a Monad wallet address",
        input_schema=object_schema(
            {
                "address": {
                    "type": "string",
                    "description": "Ethereum address to check balance for. If omitted, uses your wallet address.",
                }
            }
        ),
        args_model=GetBalanceArgs,
        handler=handle_get_balance,
        failure_code="get_balance_failed",
        failure_message="Failed to get balance",
    ),
    ToolDefinition(
        name="transferETH",
        description="Transfer ETH to another address on Monad",
        input_schema=object_schema(
            {
                "to": {"type": "string", "description": "Recipient Ethereum address"},
                "amount": {"type": "string", "description": "Amount to transfer in ETH"},
            },
            ["to", "amount"],
        ),
        args_model=TransferEthArgs,
        handler=handle_transfer_eth,
        failure_code="transfer_failed",
        failure_message="Failed to transfer tokens",
    ),
]
