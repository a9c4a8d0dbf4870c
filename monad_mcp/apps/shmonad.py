"""Liquid staking through the shMONAD contract."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from monad_mcp.apps.common import AgentContext, check_status, extract_tx_hash, provider_failure, text_or_default
from monad_mcp.apps.validators import require_positive_number
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StakeResult:
    tx_hash: str
    status: str
    message: str


@dataclass(frozen=True, slots=True)
class UnstakeResult:
    tx_hash: str
    status: str
    message: str


async def stake(ctx: AgentContext, amount: float) -> StakeResult:
    require_positive_number(amount, "Amount must be a positive number")
    try:
        result = await ctx.provider.stake(ctx.session, amount)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("stake of %s failed: %s", amount, exc)
        raise provider_failure(exc, code="stake_failed", message="Failed to stake tokens") from exc

    result = check_status(result, code="stake_failed", message="Failed to stake tokens")
    return StakeResult(
        tx_hash=extract_tx_hash(result.get("transactionHash")),
        status=text_or_default(result.get("status"), "pending"),
        message=text_or_default(result.get("message"), "Staking transaction submitted"),
    )


async def unstake(ctx: AgentContext, shares: float) -> UnstakeResult:
    require_positive_number(shares, "Shares must be a positive number", code="invalid_shares")
    try:
        result = await ctx.provider.unstake(ctx.session, shares)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("unstake of %s shares failed: %s", shares, exc)
        raise provider_failure(exc, code="unstake_failed", message="Failed to unstake tokens") from exc

    result = check_status(result, code="unstake_failed", message="Failed to unstake tokens")
    return UnstakeResult(
        tx_hash=extract_tx_hash(result.get("transactionHash")),
        status=text_or_default(result.get("status"), "pending"),
        message=text_or_default(result.get("message"), "Unstaking transaction submitted"),
    )
