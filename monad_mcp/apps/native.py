"""Native currency balance and transfer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from monad_mcp.apps.common import AgentContext, extract_tx_hash, provider_failure, text_or_default
from monad_mcp.apps.validators import is_non_empty_string, require_address
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BalanceResult:
    address: str
    balance: str


@dataclass(frozen=True, slots=True)
class TransferResult:
    tx_hash: str
    from_address: str
    to: str
    amount: str


async def get_balance(ctx: AgentContext, address: Optional[str] = None) -> BalanceResult:
    """
    Native balance of ``address``, or of the session wallet when omitted.

    A missing balance field is reported as ``"0"``.
    """
    target = address if is_non_empty_string(address) else ctx.session.wallet_address
    try:
        result = await ctx.provider.get_balance(ctx.session, target)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getBalance failed for %s: %s", target, exc)
        raise provider_failure(exc, code="get_balance_failed", message="Failed to get balance") from exc

    return BalanceResult(address=target, balance=text_or_default(result.get("balance"), "0"))


async def transfer_eth(ctx: AgentContext, to: str, amount: str) -> TransferResult:
    require_address(to, "Recipient address must be a valid string address")
    if not is_non_empty_string(amount):
        raise MonadError("Amount cannot be empty", "invalid_amount", 400)

    try:
        result = await ctx.provider.transfer_eth(ctx.session, to, amount)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("transferETH to %s failed: %s", to, exc)
        raise provider_failure(exc, code="transfer_failed", message="Failed to transfer tokens") from exc

    if result.get("status") == "error":
        raise MonadError(result.get("message") or "Failed to transfer tokens", "transfer_failed", 500)

    return TransferResult(
        tx_hash=extract_tx_hash(result.get("txHash")),
        from_address=ctx.session.wallet_address,
        to=to,
        amount=amount,
    )
