"""Token search against the Kuru token index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from monad_mcp.apps.common import AgentContext, optional_text
from monad_mcp.apps.validators import is_non_empty_string
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TokenSummary:
    address: str
    decimal: Optional[int]
    name: str
    ticker: str
    image_url: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TokenSearchResult:
    query: str
    total: int
    tokens: List[TokenSummary] = field(default_factory=list)


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _summarize(token: Dict[str, Any]) -> TokenSummary:
    return TokenSummary(
        address=str(token.get("address") or ""),
        decimal=_to_int(token.get("decimal")),
        name=str(token.get("name") or ""),
        ticker=str(token.get("ticker") or ""),
        image_url=optional_text(token.get("imageurl")),
        twitter=optional_text(token.get("twitter")),
        website=optional_text(token.get("website")),
    )


async def search_tokens(ctx: AgentContext, query: str) -> TokenSearchResult:
    """
    Search tokens by name or ticker, one fixed-size page.

    ``total`` is the index's own match count and may exceed the number of
    tokens returned.
    """
    if not is_non_empty_string(query):
        raise MonadError("Search query must be provided", "invalid_query", 400)

    params = {"limit": ctx.config.token_search_limit, "name": query}
    try:
        response = await ctx.http.get(ctx.config.kuru_api_url, params=params)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Token search failed for %r: %s", query, exc)
        raise MonadError("Failed to search for tokens", "token_search_failed", 500) from exc

    data = payload.get("data") if isinstance(payload, dict) else None
    items = data.get("data") if isinstance(data, dict) else None
    if not isinstance(items, list) or not payload.get("success"):
        raise MonadError("Failed to retrieve token data", "token_search_failed", 500)

    tokens = [_summarize(item) for item in items if isinstance(item, dict)]
    pagination = data.get("pagination")
    total = _to_int(pagination.get("total")) if isinstance(pagination, dict) else None
    return TokenSearchResult(query=query, total=total if total is not None else len(tokens), tokens=tokens)
