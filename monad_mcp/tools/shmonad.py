"""shMONAD staking tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from pydantic import Field

from monad_mcp.formatter import format_stake, format_unstake
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient


class StakeArgs(ToolArguments):
    amount: float = Field(gt=0)


class UnstakeArgs(ToolArguments):
    shares: float = Field(gt=0)


async def handle_stake(client: "MonadClient", args: StakeArgs) -> str:
    return format_stake(await client.stake(args.amount))


async def handle_unstake(client: "MonadClient", args: UnstakeArgs) -> str:
    return format_unstake(await client.unstake(args.shares))


SHMONAD_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="stake",
        description="Stake native tokens (MON) in the Shmonad staking contract",
        input_schema=object_schema(
            {"amount": {"type": "number", "exclusiveMinimum": 0, "description": "Amount of MON to stake"}},
            ["amount"],
        ),
        args_model=StakeArgs,
        handler=handle_stake,
        failure_code="stake_failed",
        failure_message="Failed to stake tokens",
    ),
    ToolDefinition(
        name="unstake",
        description="Unstake tokens from the Shmonad staking contract",
        input_schema=object_schema(
            {"shares": {"type": "number", "exclusiveMinimum": 0, "description": "Number of shares to unstake"}},
            ["shares"],
        ),
        args_model=UnstakeArgs,
        handler=handle_unstake,
        failure_code="unstake_failed",
        failure_message="Failed to unstake tokens",
    ),
]
