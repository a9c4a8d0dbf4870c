"""Authenticated wallet session shared by every action call."""

from __future__ import annotations

from dataclasses import dataclass, field

from eth_account import Account

from monad_mcp.errors import ConfigError


def normalize_private_key(private_key: str) -> str:
    """Return the key with its ``0x`` prefix."""
    key = private_key.strip()
    return key if key.startswith("0x") else f"0x{key}"


@dataclass(frozen=True, slots=True)
class Session:
    """Immutable wallet credential plus RPC endpoint; safe to share across tasks."""

    private_key: str = field(repr=False)
    rpc_url: str
    wallet_address: str

    @classmethod
    def from_private_key(cls, private_key: str, rpc_url: str) -> "Session":
        if not private_key or not private_key.strip():
            raise ConfigError("Invalid configuration: Private Key is required")
        key = normalize_private_key(private_key)
        try:
            address = Account.from_key(key).address
        except (ValueError, TypeError) as exc:
            raise ConfigError("Invalid configuration: private key could not be decoded") from exc
        return cls(private_key=key, rpc_url=rpc_url, wallet_address=address)
