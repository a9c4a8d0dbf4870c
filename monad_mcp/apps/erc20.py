"""ERC-20 token balance, transfer, approval, allowance and metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from monad_mcp.apps.common import (
    AgentContext,
    check_status,
    extract_tx_hash,
    optional_text,
    provider_failure,
    text_or_default,
)
from monad_mcp.apps.validators import is_non_empty_string, require_address
from monad_mcp.config import DEFAULT_TOKEN_DECIMALS
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TokenBalanceResult:
    address: str
    token_address: str
    balance: str
    token_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TokenTransferResult:
    tx_hash: str
    from_address: str
    to: str
    token_address: str
    amount: str


@dataclass(frozen=True, slots=True)
class ApprovalResult:
    tx_hash: str
    token_address: str
    spender: str
    amount: str


@dataclass(frozen=True, slots=True)
class TokenAllowanceResult:
    token_address: str
    owner_address: str
    spender_address: str
    allowance: str


@dataclass(frozen=True, slots=True)
class TokenInfoResult:
    address: str
    name: str
    symbol: str
    decimals: int
    total_supply: str


def _decimals(value: Any) -> int:
    if value is None or value == "":
        return DEFAULT_TOKEN_DECIMALS
    try:
        return int(value)
    except (TypeError, ValueError):
        return DEFAULT_TOKEN_DECIMALS


async def get_token_balance(
    ctx: AgentContext, token_address: str, owner_address: Optional[str] = None
) -> TokenBalanceResult:
    require_address(token_address, "Token address must be a valid string address", code="invalid_token_address")
    owner = owner_address if is_non_empty_string(owner_address) else None

    try:
        result = await ctx.provider.get_token_balance(ctx.session, token_address, owner)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getTokenBalance failed for token %s: %s", token_address, exc)
        raise provider_failure(exc, code="token_balance_failed", message="Failed to get token balance") from exc

    result = check_status(result, code="token_balance_failed", message="Failed to get token balance")
    return TokenBalanceResult(
        address=text_or_default(result.get("ownerAddress"), owner or ctx.session.wallet_address),
        token_address=text_or_default(result.get("tokenAddress"), token_address),
        token_name=optional_text(result.get("tokenName")),
        balance=text_or_default(result.get("balance"), "0"),
    )


async def transfer_token(ctx: AgentContext, token_address: str, to: str, amount: str) -> TokenTransferResult:
    if not is_non_empty_string(token_address) or not is_non_empty_string(to):
        raise MonadError("Token address and recipient address must be valid strings", "invalid_address", 400)

    try:
        result = await ctx.provider.transfer_token(ctx.session, token_address, to, amount)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("transferToken failed for token %s: %s", token_address, exc)
        raise provider_failure(exc, code="token_transfer_failed", message="Failed to transfer tokens") from exc

    result = check_status(result, code="token_transfer_failed", message="Failed to transfer tokens")
    return TokenTransferResult(
        tx_hash=extract_tx_hash(result.get("txHash")),
        from_address=ctx.session.wallet_address,
        to=text_or_default(result.get("to"), to),
        token_address=text_or_default(result.get("tokenAddress"), token_address),
        amount=text_or_default(result.get("amount"), amount),
    )


async def approve_token(ctx: AgentContext, token_address: str, spender: str, amount: str) -> ApprovalResult:
    if not is_non_empty_string(token_address) or not is_non_empty_string(spender):
        raise MonadError("Token address and spender address must be valid strings", "invalid_address", 400)

    try:
        result = await ctx.provider.approve_token(ctx.session, token_address, spender, amount)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("approveToken failed for token %s: %s", token_address, exc)
        raise provider_failure(exc, code="token_approval_failed", message="Failed to approve tokens") from exc

    result = check_status(result, code="token_approval_failed", message="Failed to approve tokens")
    return ApprovalResult(
        tx_hash=extract_tx_hash(result.get("txHash")),
        token_address=token_address,
        spender=spender,
        amount=amount,
    )


async def get_token_allowance(
    ctx: AgentContext, token_address: str, owner_address: str, spender_address: str
) -> TokenAllowanceResult:
    if not all(is_non_empty_string(value) for value in (token_address, owner_address, spender_address)):
        raise MonadError(
            "Token address, owner address, and spender address must be valid strings", "invalid_address", 400
        )

    try:
        result = await ctx.provider.get_token_allowance(ctx.session, token_address, owner_address, spender_address)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getTokenAllowance failed for token %s: %s", token_address, exc)
        raise provider_failure(exc, code="token_allowance_failed", message="Failed to get token allowance") from exc

    result = check_status(result, code="token_allowance_failed", message="Failed to get token allowance")
    return TokenAllowanceResult(
        token_address=text_or_default(result.get("tokenAddress"), token_address),
        owner_address=text_or_default(result.get("ownerAddress"), owner_address),
        spender_address=text_or_default(result.get("spenderAddress"), spender_address),
        allowance=text_or_default(result.get("allowance"), "0"),
    )


async def get_token_info(ctx: AgentContext, token_address: str) -> TokenInfoResult:
    """
    Token metadata. The provider returns either a nested ``info`` object or
    flat fields; both are accepted. ``decimals`` defaults to 18 when absent.
    """
    require_address(token_address, "Token address must be a valid string address", code="invalid_token_address")

    try:
        result = await ctx.provider.get_token_info(ctx.session, token_address)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getTokenInfo failed for token %s: %s", token_address, exc)
        raise provider_failure(exc, code="token_info_failed", message="Failed to get token info") from exc

    result = check_status(result, code="token_info_failed", message="Failed to get token info")
    source: Mapping[str, Any] = result.get("info") if isinstance(result.get("info"), Mapping) else result
    return TokenInfoResult(
        address=token_address,
        name=text_or_default(source.get("name"), ""),
        symbol=text_or_default(source.get("symbol"), ""),
        decimals=_decimals(source.get("decimals")),
        total_supply=text_or_default(source.get("totalSupply"), "0"),
    )
