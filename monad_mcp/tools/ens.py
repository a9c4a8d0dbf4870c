"""Name service tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from pydantic import Field

from monad_mcp.formatter import (
    format_domain_price,
    format_owned_names,
    format_primary_name,
    format_profile,
    format_registration,
    format_resolution,
)
from monad_mcp.tools.base import ToolArguments, ToolDefinition, object_schema

if TYPE_CHECKING:
    from monad_mcp.client import MonadClient

DURATION_PROPERTY = {
    "type": "integer",
    "exclusiveMinimum": 0,
    "description": "Registration duration in days (default: 365)",
}


class NameArgs(ToolArguments):
    name: str = Field(min_length=1)


class AddressArgs(ToolArguments):
    address: str = Field(min_length=1)


class DomainPriceArgs(ToolArguments):
    name: str = Field(min_length=1)
    duration: Optional[int] = Field(default=None, gt=0)


class RegisterDomainArgs(ToolArguments):
    name: str = Field(min_length=1)
    tld: Optional[str] = Field(default=None, min_length=1)
    duration: Optional[int] = Field(default=None, gt=0)


async def handle_get_profile(client: "MonadClient", args: NameArgs) -> str:
    return format_profile(await client.get_ens_profile(args.name))


async def handle_resolve_name(client: "MonadClient", args: NameArgs) -> str:
    return format_resolution(await client.resolve_ens_name(args.name))


async def handle_get_primary_name(client: "MonadClient", args: AddressArgs) -> str:
    return format_primary_name(await client.get_primary_ens_name(args.address))


async def handle_get_names(client: "MonadClient", args: AddressArgs) -> str:
    return format_owned_names(await client.get_ens_names(args.address))


async def handle_get_domain_price(client: "MonadClient", args: DomainPriceArgs) -> str:
    return format_domain_price(await client.get_ens_domain_price(args.name, args.duration))


async def handle_register_domain(client: "MonadClient", args: RegisterDomainArgs) -> str:
    return format_registration(await client.register_ens_domain(args.name, args.tld, args.duration))


ENS_TOOLS: List[ToolDefinition] = [
    ToolDefinition(
        name="getENSProfile",
        description="Get the profile information for an ENS name",
        input_schema=object_schema({"name": {"type": "string", "description": "The ENS name to look up"}}, ["name"]),
        args_model=NameArgs,
        handler=handle_get_profile,
        failure_code="ens_profile_failed",
        failure_message="Failed to get ENS profile",
    ),
    ToolDefinition(
        name="resolveENSName",
        description="Resolve an ENS name to an Ethereum address",
        input_schema=object_schema({"name": {"type": "string", "description": "The ENS name to resolve"}}, ["name"]),
        args_model=NameArgs,
        handler=handle_resolve_name,
        failure_code="ens_resolve_failed",
        failure_message="Failed to resolve ENS name",
    ),
    ToolDefinition(
        name="getPrimaryENSName",
        description="Get the primary ENS name for an Ethereum address",
        input_schema=object_schema(
            {"address": {"type": "string", "description": "The Ethereum address to look up"}}, ["address"]
        ),
        args_model=AddressArgs,
        handler=handle_get_primary_name,
        failure_code="ens_primary_name_failed",
        failure_message="Failed to get primary ENS name",
    ),
    ToolDefinition(
        name="getENSNames",
        description="Get all ENS names owned by an address",
        input_schema=object_schema(
            {"address": {"type": "string", "description": "The Ethereum address to look up"}}, ["address"]
        ),
        args_model=AddressArgs,
        handler=handle_get_names,
        failure_code="ens_get_names_failed",
        failure_message="Failed to get ENS names",
    ),
    ToolDefinition(
        name="getENSDomainPrice",
        description="Get the price for registering an ENS domain",
        input_schema=object_schema(
            {
                "name": {"type": "string", "description": "The domain name (without TLD)"},
                "duration": DURATION_PROPERTY,
            },
            ["name"],
        ),
        args_model=DomainPriceArgs,
        handler=handle_get_domain_price,
        failure_code="ens_price_failed",
        failure_message="Failed to get ENS domain price",
    ),
    ToolDefinition(
        name="registerENSDomain",
        description="Register/buy an ENS domain",
        input_schema=object_schema(
            {
                "name": {"type": "string", "description": "The domain name to register (without TLD)"},
                "tld": {"type": "string", "description": 'The top-level domain (default: "nad")'},
                "duration": DURATION_PROPERTY,
            },
            ["name"],
        ),
        args_model=RegisterDomainArgs,
        handler=handle_register_domain,
        failure_code="ens_register_failed",
        failure_message="Failed to register ENS domain",
    ),
]
