"""Bonding-curve token creation on nad.fun."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx

from monad_mcp.apps.common import AgentContext, check_status, extract_tx_hash, provider_failure, text_or_default
from monad_mcp.apps.validators import is_non_empty_string, parse_amount
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TYPE = "image/jpeg"


@dataclass(frozen=True, slots=True)
class CurveCreationResult:
    tx_hash: str
    status: str
    message: str


async def download_image(ctx: AgentContext, image_url: str) -> Tuple[bytes, str]:
    """
    Fetch the token image and its content type.

    A response without a content type is treated as JPEG; any other
    non-image type is rejected.
    """
    try:
        response = await ctx.http.get(image_url, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Image download failed for %s: %s", image_url, exc)
        raise MonadError("Failed to download image from URL", "image_download_failed", 400) from exc

    image_type = response.headers.get("content-type") or DEFAULT_IMAGE_TYPE
    if not image_type.startswith("image/"):
        raise MonadError("Invalid image type. Only images are supported.", "invalid_image", 400)
    return response.content, image_type


async def create_curve_with_metadata(
    ctx: AgentContext,
    name: str,
    symbol: str,
    description: str,
    image_url: str,
    amount_in: str,
    home_page: Optional[str] = None,
    twitter: Optional[str] = None,
    telegram: Optional[str] = None,
) -> CurveCreationResult:
    if not all(is_non_empty_string(value) for value in (name, symbol, description, image_url, amount_in)):
        raise MonadError("Required parameters missing", "invalid_parameters", 400)

    # The funding minimum is checked before any network traffic.
    amount = parse_amount(amount_in)
    if amount is None or amount < ctx.config.min_curve_amount:
        raise MonadError(
            f"Minimum investment amount is {ctx.config.min_curve_amount} ETH", "invalid_amount", 400
        )

    image, image_type = await download_image(ctx, image_url)

    try:
        result = await ctx.provider.create_curve_with_metadata(
            ctx.session,
            name=name,
            symbol=symbol,
            description=description,
            image=image,
            image_type=image_type,
            amount_in=amount_in,
            home_page=home_page,
            twitter=twitter,
            telegram=telegram,
        )
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("createCurveWithMetadata failed for %s: %s", symbol, exc)
        raise provider_failure(exc, code="curve_creation_failed", message="Failed to create curve") from exc

    result = check_status(result, code="curve_creation_failed", message="Failed to create curve")
    return CurveCreationResult(
        tx_hash=extract_tx_hash(result.get("txHash")),
        status=text_or_default(result.get("status"), "pending"),
        message=text_or_default(result.get("message"), "Transaction submitted successfully"),
    )
