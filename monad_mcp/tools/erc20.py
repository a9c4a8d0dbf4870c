"""ERC-20 token tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from pydantic import Field

from monad_mcp.formatter import (
    format_allowance,
    format_approval,
    format_token_balance,
    format_token_info,
    format_token_transfer,
)
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient

TOKEN_ADDRESS_PROPERTY = {"type": "string", "description": "Address of the ERC20 token contract"}


class GetTokenBalanceArgs(ToolArguments):
    token_address: str = Field(alias="tokenAddress", min_length=1)
    owner_address: Optional[str] = Field(default=None, alias="ownerAddress")


class TransferTokenArgs(ToolArguments):
    token_address: str = Field(alias="tokenAddress", min_length=1)
    to: str = Field(min_length=1)
    amount: str = Field(min_length=1)


class ApproveTokenArgs(ToolArguments):
    token_address: str = Field(alias="tokenAddress", min_length=1)
    spender: str = Field(min_length=1)
    amount: str = Field(min_length=1)


class GetTokenAllowanceArgs(ToolArguments):
    token_address: str = Field(alias="tokenAddress", min_length=1)
    owner_address: str = Field(alias="ownerAddress", min_length=1)
    spender_address: str = Field(alias="spenderAddress", min_length=1)


class GetTokenInfoArgs(ToolArguments):
    token_address: str = Field(alias="tokenAddress", min_length=1)


async def handle_get_token_balance(client: "MonadClient", args: GetTokenBalanceArgs) -> str:
    return format_token_balance(await client.get_token_balance(args.token_address, args.owner_address))


async def handle_transfer_token(client: "MonadClient", args: TransferTokenArgs) -> str:
    return format_token_transfer(await client.transfer_token(args.token_address, args.to, args.amount))


async def handle_approve_token(client: "MonadClient", args: ApproveTokenArgs) -> str:
    return format_approval(await client.approve_token(args.token_address, args.spender, args.amount))


async def handle_get_token_allowance(client: "MonadClient", args: GetTokenAllowanceArgs) -> str:
    result = await client.get_token_allowance(args.token_address, args.owner_address, args.spender_address)
    return format_allowance(result)


async def handle_get_token_info(client: "MonadClient", args: GetTokenInfoArgs) -> str:
    return format_token_info(await client.get_token_info(args.token_address))


ERC20_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="getTokenBalance",
        description="Get the balance of an ERC20 token",
        input_schema=object_schema(
            {
                "tokenAddress": TOKEN_ADDRESS_PROPERTY,
                "ownerAddress": {
                    "type": "string",
                    "description": "Address to check balance for. If omitted, uses your wallet address.",
                },
            },
            ["tokenAddress"],
        ),
        args_model=GetTokenBalanceArgs,
        handler=handle_get_token_balance,
        failure_code="token_balance_failed",
        failure_message="Failed to get token balance",
    ),
    ToolDefinition(
        name="transferToken",
        description="Transfer ERC20 tokens to another address",
        input_schema=object_schema(
            {
                "tokenAddress": TOKEN_ADDRESS_PROPERTY,
                "to": {"type": "string", "description": "Recipient address"},
                "amount": {"type": "string", "description": "Amount of tokens to transfer"},
            },
            ["tokenAddress", "to", "amount"],
        ),
        args_model=TransferTokenArgs,
        handler=handle_transfer_token,
        failure_code="token_transfer_failed",
        failure_message="Failed to transfer tokens",
    ),
    ToolDefinition(
        name="approveToken",
        description="Approve a spender to use your ERC20 tokens",
        input_schema=object_schema(
            {
                "tokenAddress": TOKEN_ADDRESS_PROPERTY,
                "spender": {"type": "string", "description": "Address of the spender to approve"},
                "amount": {"type": "string", "description": "Amount of tokens to approve"},
            },
            ["tokenAddress", "spender", "amount"],
        ),
        args_model=ApproveTokenArgs,
        handler=handle_approve_token,
        failure_code="token_approval_failed",
        failure_message="Failed to approve tokens",
    ),
    ToolDefinition(
        name="getTokenAllowance",
        description="Get the approved allowance for a spender",
        input_schema=object_schema(
            {
                "tokenAddress": TOKEN_ADDRESS_PROPERTY,
                "ownerAddress": {"type": "string", "description": "Address of the token owner"},
                "spenderAddress": {"type": "string", "description": "Address of the spender"},
            },
            ["tokenAddress", "ownerAddress", "spenderAddress"],
        ),
        args_model=GetTokenAllowanceArgs,
        handler=handle_get_token_allowance,
        failure_code="token_allowance_failed",
        failure_message="Failed to get token allowance",
    ),
    ToolDefinition(
        name="getTokenInfo",
        description="Get information about an ERC20 token",
        input_schema=object_schema({"tokenAddress": TOKEN_ADDRESS_PROPERTY}, ["tokenAddress"]),
        args_model=GetTokenInfoArgs,
        handler=handle_get_token_info,
        failure_code="token_info_failed",
        failure_message="Failed to get token info",
    ),
]
