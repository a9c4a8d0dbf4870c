"""Name service lookups, pricing and registration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from monad_mcp.apps.common import AgentContext, extract_tx_hash, provider_failure, text_or_default
from monad_mcp.apps.validators import require_address, to_hex_address
from monad_mcp.errors import MonadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileResult:
    name: str
    address: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolveResult:
    name: str
    address: str


@dataclass(frozen=True, slots=True)
class PrimaryNameResult:
    address: str
    name: str


@dataclass(frozen=True, slots=True)
class OwnedNamesResult:
    address: str
    names: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DomainPriceResult:
    name: str
    duration: int
    price: str


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    name: str
    tx_hash: str
    duration: int
    tld: str


def _as_mapping(value: object) -> Mapping:
    return value if isinstance(value, Mapping) else {}


async def get_profile(ctx: AgentContext, name: str) -> ProfileResult:
    require_address(name, "ENS name must be a non-empty string", code="invalid_name")
    try:
        result = await ctx.provider.get_profile(ctx.session, name)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getProfile failed for %s: %s", name, exc)
        raise provider_failure(exc, code="ens_profile_failed", message=f"Failed to get profile for {name}") from exc

    profile = _as_mapping(_as_mapping(result).get("profile"))
    address = text_or_default(profile.get("address"), "")
    if not address:
        raise MonadError(f"Profile not found for {name}", "ens_profile_not_found", 404)

    records = profile.get("records")
    attributes = {str(key): str(value) for key, value in records.items()} if isinstance(records, Mapping) else {}
    return ProfileResult(name=name, address=address, attributes=attributes)


async def resolve_address(ctx: AgentContext, name: str) -> ResolveResult:
    require_address(name, "ENS name must be a non-empty string", code="invalid_name")
    try:
        result = await ctx.provider.resolve_address(ctx.session, name)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("resolveAddress failed for %s: %s", name, exc)
        raise provider_failure(
            exc, code="ens_resolve_failed", message=f"Failed to resolve address for {name}"
        ) from exc

    address = text_or_default(_as_mapping(result).get("address"), "")
    if not address:
        raise MonadError(f"Name not found: {name}", "ens_name_not_found", 404)
    return ResolveResult(name=name, address=address)


async def get_primary_name(ctx: AgentContext, address: str) -> PrimaryNameResult:
    require_address(address, "Address must be a valid string address")
    try:
        result = await ctx.provider.get_primary_name(ctx.session, to_hex_address(address))
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getPrimaryName failed for %s: %s", address, exc)
        raise provider_failure(
            exc, code="ens_primary_name_failed", message=f"Failed to get primary name for {address}"
        ) from exc

    return PrimaryNameResult(address=address, name=text_or_default(_as_mapping(result).get("primaryName"), ""))


async def get_names_for_address(ctx: AgentContext, address: str) -> OwnedNamesResult:
    require_address(address, "Address must be a valid string address")
    try:
        result = await ctx.provider.get_names_for_address(ctx.session, to_hex_address(address))
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getNamesForAddress failed for %s: %s", address, exc)
        raise provider_failure(
            exc, code="ens_get_names_failed", message=f"Failed to get names for {address}"
        ) from exc

    names = _as_mapping(result).get("names") or []
    return OwnedNamesResult(address=address, names=[str(item) for item in names])


async def get_domain_price(ctx: AgentContext, name: str, duration: Optional[int] = None) -> DomainPriceResult:
    """
    Registration price for ``name`` (without TLD).

    ``duration`` is in days and defaults to the configured registration length.
    A provider answer with ``success`` false is a fault even when nothing was
    raised.
    """
    require_address(name, "Domain name must be a non-empty string", code="invalid_name")
    days = duration if duration is not None else ctx.config.default_duration_days
    try:
        result = await ctx.provider.get_domain_price(ctx.session, name, days)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("getDomainPrice failed for %s: %s", name, exc)
        raise provider_failure(exc, code="ens_price_failed", message=f"Failed to get price for {name}") from exc

    result = _as_mapping(result)
    if not result.get("success"):
        raise MonadError(result.get("error") or f"Could not get price for {name}", "ens_price_failed", 500)

    return DomainPriceResult(name=name, duration=days, price=text_or_default(result.get("price"), "0"))


async def register_domain(
    ctx: AgentContext, name: str, tld: Optional[str] = None, duration: Optional[int] = None
) -> RegistrationResult:
    require_address(name, "Domain name must be a non-empty string", code="invalid_name")
    suffix = tld or ctx.config.default_tld
    days = duration if duration is not None else ctx.config.default_duration_days
    failure = f"Failed to register domain {name}.{suffix}"
    try:
        result = await ctx.provider.register_domain(ctx.session, name, suffix, days)
    except MonadError:
        raise
    except Exception as exc:
        logger.warning("registerDomain failed for %s.%s: %s", name, suffix, exc)
        raise provider_failure(exc, code="ens_register_failed", message=failure) from exc

    tx_hash = extract_tx_hash(_as_mapping(result).get("transactionHash"))
    if not tx_hash:
        raise MonadError(failure, "ens_register_failed", 500)

    return RegistrationResult(name=f"{name}.{suffix}", tx_hash=tx_hash, duration=days, tld=suffix)
