"""
Human-readable rendering of operation results.

Every function here is pure: the same result always renders to the same text.
Absent optional fields print ``N/A``.
"""

from __future__ import annotations

import json
from typing import Any, List

from monad_mcp.apps.ens import (
    DomainPriceResult,
    OwnedNamesResult,
    PrimaryNameResult,
    ProfileResult,
    RegistrationResult,
    ResolveResult,
)
from monad_mcp.apps.erc20 import (
    ApprovalResult,
    TokenAllowanceResult,
    TokenBalanceResult,
    TokenInfoResult,
    TokenTransferResult,
)
from monad_mcp.apps.kuru import PriceQuote, SwapResult
from monad_mcp.apps.nadfun import CurveCreationResult
from monad_mcp.apps.native import BalanceResult, TransferResult
from monad_mcp.apps.shmonad import StakeResult, UnstakeResult
from monad_mcp.apps.token import TokenSearchResult

PLACEHOLDER = "N/A"


def _value(value: Any) -> str:
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def _number(value: float) -> str:
    # 1.0 prints as "1" so percentages read naturally.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_balance(result: BalanceResult) -> str:
    return f"Address: {_value(result.address)}\nBalance: {_value(result.balance)} ETH"


def format_transfer(result: TransferResult) -> str:
    return "\n".join(
        [
            "TRANSACTION DETAILS",
            f"Hash: {_value(result.tx_hash)}",
            f"From: {_value(result.from_address)}",
            f"To: {_value(result.to)}",
            f"Amount: {_value(result.amount)} ETH",
            "Status: Completed",
        ]
    )


def format_token_balance(result: TokenBalanceResult) -> str:
    return "\n".join(
        [
            "TOKEN BALANCE",
            f"Token: {_value(result.token_name)}",
            f"Token Address: {_value(result.token_address)}",
            f"Owner: {_value(result.address)}",
            f"Balance: {_value(result.balance)}",
        ]
    )


def format_token_transfer(result: TokenTransferResult) -> str:
    return "\n".join(
        [
            "TOKEN TRANSFER",
            f"Hash: {_value(result.tx_hash)}",
            f"Token Address: {_value(result.token_address)}",
            f"From: {_value(result.from_address)}",
            f"To: {_value(result.to)}",
            f"Amount: {_value(result.amount)}",
        ]
    )


def format_approval(result: ApprovalResult) -> str:
    return (
        f"Successfully approved {_value(result.amount)} tokens for {_value(result.spender)}.\n"
        f"Transaction hash: {_value(result.tx_hash)}"
    )


def format_allowance(result: TokenAllowanceResult) -> str:
    return "\n".join(
        [
            "TOKEN ALLOWANCE",
            f"Token Address: {_value(result.token_address)}",
            f"Owner: {_value(result.owner_address)}",
            f"Spender: {_value(result.spender_address)}",
            f"Allowance: {_value(result.allowance)}",
        ]
    )


def format_token_info(result: TokenInfoResult) -> str:
    return "\n".join(
        [
            "TOKEN INFO",
            f"Address: {_value(result.address)}",
            f"Name: {_value(result.name)}",
            f"Symbol: {_value(result.symbol)}",
            f"Decimals: {result.decimals}",
            f"Total Supply: {_value(result.total_supply)}",
        ]
    )


def format_profile(result: ProfileResult) -> str:
    lines = ["ENS PROFILE", f"Name: {_value(result.name)}", f"Address: {_value(result.address)}"]
    if result.attributes:
        lines.append("Records:")
        lines.extend(f"  {key}: {_value(value)}" for key, value in sorted(result.attributes.items()))
    else:
        lines.append(f"Records: {PLACEHOLDER}")
    return "\n".join(lines)


def format_resolution(result: ResolveResult) -> str:
    return f"ENS RESOLUTION\nName: {_value(result.name)}\nAddress: {_value(result.address)}"


def format_primary_name(result: PrimaryNameResult) -> str:
    return f"PRIMARY ENS NAME\nAddress: {_value(result.address)}\nName: {_value(result.name)}"


def format_owned_names(result: OwnedNamesResult) -> str:
    if not result.names:
        return f"No ENS names found for {result.address}"
    return f"ENS Names for {result.address}:\n" + "\n".join(result.names)


def format_domain_price(result: DomainPriceResult) -> str:
    return "\n".join(
        [
            "ENS DOMAIN PRICE",
            f"Name: {_value(result.name)}",
            f"Duration: {result.duration} days",
            f"Price: {_value(result.price)}",
        ]
    )


def format_registration(result: RegistrationResult) -> str:
    return "\n".join(
        [
            "ENS DOMAIN REGISTRATION",
            f"Name: {_value(result.name)}",
            f"TLD: {_value(result.tld)}",
            f"Duration: {result.duration} days",
            f"Transaction Hash: {_value(result.tx_hash)}",
        ]
    )


def format_route(route: Any) -> str:
    if not route:
        return "Not available"
    if isinstance(route, list):
        return " -> ".join(str(hop) for hop in route)
    if isinstance(route, str):
        return route
    return json.dumps(route, sort_keys=True, default=str)


def format_price(result: PriceQuote) -> str:
    return (
        "Price Information:\n"
        f"Estimated output: {_value(result.output)}\n"
        f"Price impact: {_number(result.price_impact)}%\n"
        f"Route: {format_route(result.route)}"
    )


def format_swap(result: SwapResult) -> str:
    return (
        "Swap transaction submitted\n"
        f"Transaction Hash: {_value(result.tx_hash)}\n"
        f"Input: {_value(result.amount_in)} {_value(result.token_in)}\n"
        f"Output: {_value(result.amount_out)} {_value(result.token_out)}"
    )


def format_curve_creation(result: CurveCreationResult) -> str:
    return (
        "Meme token creation transaction submitted\n"
        f"Transaction Hash: {_value(result.tx_hash)}\n"
        f"Status: {_value(result.status)}\n"
        f"Message: {_value(result.message)}"
    )


def _staking_text(label: str, result: Any) -> str:
    return (
        f"{label}\n"
        f"Transaction Hash: {_value(result.tx_hash)}\n"
        f"Status: {_value(result.status)}\n"
        f"{_value(result.message)}"
    )


def format_stake(result: StakeResult) -> str:
    return _staking_text("Staking transaction submitted", result)


def format_unstake(result: UnstakeResult) -> str:
    return _staking_text("Unstaking transaction submitted", result)


def format_token_search(result: TokenSearchResult) -> str:
    if not result.tokens:
        return f'No tokens found matching "{result.query}"'

    blocks: List[str] = []
    for index, token in enumerate(result.tokens, start=1):
        lines = [
            f"{index}. {_value(token.name)} ({_value(token.ticker)})",
            f"   Address: {_value(token.address)}",
            f"   Decimals: {_value(token.decimal)}",
        ]
        if token.website:
            lines.append(f"   Website: {token.website}")
        blocks.append("\n".join(lines))
    return f'Found {result.total} tokens matching "{result.query}":\n\n' + "\n\n".join(blocks)
