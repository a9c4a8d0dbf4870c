"""Kuru DEX price quotes and swaps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import httpx

from monad_mcp.apps.common import AgentContext, check_status, extract_tx_hash, provider_failure, text_or_default
from monad_mcp.apps.validators import is_non_empty_string, require_positive_number
from monad_mcp.config import DEFAULT_TOKEN_DECIMALS, NATIVE_TOKEN_ADDRESS
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)

Route = Union[List[str], str, Any]


@dataclass(frozen=True, slots=True)
class PriceQuote:
    output: str
    price_impact: float
    route: Route


@dataclass(frozen=True, slots=True)
class SwapResult:
    tx_hash: str
    token_in: str
    token_out: str
    amount_in: str
    amount_out: str


def _check_tokens(token_in: Any, token_out: Any) -> None:
    if not is_non_empty_string(token_in) or not is_non_empty_string(token_out):
        raise MonadError("Token addresses must be provided", "invalid_token_address", 400)


def _amount_text(amount: float) -> str:
    # 10.0 renders as "10", matching how the amount was given.
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


async def lookup_decimals(ctx: AgentContext, token_address: str) -> int:
    """
    Decimals of ``token_address`` from the Kuru token search API.

    Unknown tokens and lookup failures fall back to 18.
    """
    try:
        response = await ctx.http.get(ctx.config.kuru_api_url, params={"limit": ctx.config.token_search_limit})
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Token decimals lookup failed for %s: %s", token_address, exc)
        return DEFAULT_TOKEN_DECIMALS

    data = payload.get("data") if isinstance(payload, dict) else None
    tokens = data.get("data") if isinstance(data, dict) else None
    if isinstance(payload, dict) and payload.get("success") and isinstance(tokens, list):
        wanted = token_address.lower()
        for token in tokens:
            if not isinstance(token, dict):
                continue
            if str(token.get("address", "")).lower() == wanted:
                try:
                    return int(token.get("decimal"))
                except (TypeError, ValueError):
                    break

    logger.info("Token not found for address %s, using default decimals (%d)", token_address, DEFAULT_TOKEN_DECIMALS)
    return DEFAULT_TOKEN_DECIMALS


async def get_price(
    ctx: AgentContext,
    token_in: str,
    token_out: str,
    amount: float,
    amount_type: str = "amountIn",
) -> PriceQuote:
    _check_tokens(token_in, token_out)
    require_positive_number(amount, "Amount must be a positive number")

    try:
        result = await ctx.provider.get_price(ctx.session, token_in, token_out, amount, amount_type)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getPrice failed for %s -> %s: %s", token_in, token_out, exc)
        raise provider_failure(exc, code="price_fetch_failed", message="Failed to get price") from exc

    result = check_status(result, code="price_fetch_failed", message="Failed to get price")
    route = result.get("route") or [token_in, token_out]
    try:
        price_impact = float(result.get("priceImpact") or 0)
    except (TypeError, ValueError):
        price_impact = 0.0
    return PriceQuote(
        output=text_or_default(result.get("output"), "0"),
        price_impact=price_impact,
        route=route,
    )


async def swap(
    ctx: AgentContext,
    token_in: str,
    token_out: str,
    amount: float,
    slippage_tolerance: Optional[float] = None,
) -> SwapResult:
    _check_tokens(token_in, token_out)
    require_positive_number(amount, "Amount must be a positive number")
    slippage = slippage_tolerance if slippage_tolerance is not None else ctx.config.default_slippage

    in_decimals = await lookup_decimals(ctx, token_in)
    out_decimals = await lookup_decimals(ctx, token_out)
    approval = token_in != NATIVE_TOKEN_ADDRESS

    try:
        result = await ctx.provider.swap(
            ctx.session, token_in, token_out, amount, in_decimals, out_decimals, slippage, approval
        )
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("swap failed for %s -> %s: %s", token_in, token_out, exc)
        raise provider_failure(exc, code="swap_failed", message="Failed to swap tokens") from exc

    result = check_status(result, code="swap_failed", message="Failed to swap tokens")

    return SwapResult(
        tx_hash=extract_tx_hash(result.get("transactionHash")),
        token_in=token_in,
        token_out=token_out,
        amount_in=_amount_text(amount),
        amount_out=text_or_default(result.get("amountOut"), "0"),
    )
