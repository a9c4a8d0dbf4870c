"""
Configuration helpers for the Monad MCP server.

This module centralizes endpoint selection, wallet credential loading, default
timeouts and tool defaults. No secrets are stored in the repository; the wallet
key is read from the environment (optionally via a .env file) or a local file.
"""

from __future__ import annotations

import ipaddress
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlsplit

from dotenv import load_dotenv

from monad_mcp.errors import ConfigError

# Default connection settings
DEFAULT_RPC_URL = "https://rpc.monad.xyz/"
DEFAULT_AGENT_KIT_URL = "http://localhost:8787"
DEFAULT_KURU_API_URL = "https://api.kuru.io/api/v2/tokens/search"
DEFAULT_TIMEOUT = 30.0

# Wallet credential handling
PRIVATE_KEY_ENV_VAR = "WALLET_PRIVATE_KEY"
PRIVATE_KEY_FILE_ENV_VAR = "WALLET_PRIVATE_KEY_FILE"

# Tool defaults
DEFAULT_TLD = "nad"
DEFAULT_DURATION_DAYS = 365
DEFAULT_SLIPPAGE_TOLERANCE = 0.5
DEFAULT_TOKEN_DECIMALS = 18
MIN_CURVE_AMOUNT = 0.5
TOKEN_SEARCH_LIMIT = 20
NATIVE_TOKEN_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_RATE_LIMIT_QPS = 5.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"  # json or plain


def _load_float(env_var: str, default: float) -> float:
    raw_value = os.getenv(env_var)
    if raw_value:
        try:
            return float(raw_value)
        except ValueError:
            return default
    return default


def _parse_rate_limits(raw: Optional[str]) -> Dict[str, float]:
    """
    Parse ``tool=qps`` pairs separated by commas; malformed entries are skipped.

    A rate of 0 or below is kept so it can switch limiting off for that tool.
    """
    limits: Dict[str, float] = {}
    if not raw:
        return limits
    for item in raw.split(","):
        tool, sep, value = item.partition("=")
        tool = tool.strip()
        if not sep or not tool:
            continue
        try:
            rate = float(value)
        except ValueError:
            continue
        limits[tool] = rate
    return limits


def load_private_key() -> Optional[str]:
    """
    Load the wallet private key from environment or a local file.

    Returns:
        The key string if available, otherwise None. The key is never logged or
        returned to callers.
    """
    env_key = os.getenv(PRIVATE_KEY_ENV_VAR)
    if env_key:
        return env_key.strip()

    key_path = os.getenv(PRIVATE_KEY_FILE_ENV_VAR)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or None

    return None


@dataclass(frozen=True, slots=True)
class MonadConfig:
    """Runtime configuration for the gateway and its outbound calls."""

    private_key: str = field(default="", repr=False)
    rpc_url: str = DEFAULT_RPC_URL
    agent_kit_url: str = DEFAULT_AGENT_KIT_URL
    kuru_api_url: str = DEFAULT_KURU_API_URL
    timeout: float = DEFAULT_TIMEOUT
    default_tld: str = DEFAULT_TLD
    default_duration_days: int = DEFAULT_DURATION_DAYS
    default_slippage: float = DEFAULT_SLIPPAGE_TOLERANCE
    min_curve_amount: float = MIN_CURVE_AMOUNT
    token_search_limit: int = TOKEN_SEARCH_LIMIT
    rate_limit_qps: float = DEFAULT_RATE_LIMIT_QPS
    per_tool_rate_limits: Dict[str, float] = field(default_factory=dict)
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT


def load_config(env_file: Optional[str] = None) -> MonadConfig:
    """Build a config from the process environment, reading ``.env`` first if present."""
    load_dotenv(env_file, override=False)
    return MonadConfig(
        private_key=load_private_key() or "",
        rpc_url=os.getenv("MONAD_RPC_URL", DEFAULT_RPC_URL).strip(),
        agent_kit_url=os.getenv("MONAD_AGENT_KIT_URL", DEFAULT_AGENT_KIT_URL).strip(),
        kuru_api_url=os.getenv("KURU_API_URL", DEFAULT_KURU_API_URL).strip(),
        timeout=_load_float("MONAD_HTTP_TIMEOUT", DEFAULT_TIMEOUT),
        default_tld=os.getenv("MONAD_DEFAULT_TLD", DEFAULT_TLD).strip() or DEFAULT_TLD,
        rate_limit_qps=_load_float("MONAD_MCP_RATE_LIMIT_QPS", DEFAULT_RATE_LIMIT_QPS),
        per_tool_rate_limits=_parse_rate_limits(os.getenv("MONAD_MCP_TOOL_RATE_LIMITS")),
        log_level=os.getenv("MONAD_MCP_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_format=os.getenv("MONAD_MCP_LOG_FORMAT", DEFAULT_LOG_FORMAT),
    )


def _is_loopback_host(host: Optional[str]) -> bool:
    if not host:
        return False
    if host == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def _is_safe_bridge_url(url: str) -> bool:
    """The wallet key travels in a header, so plain http is only allowed to this machine."""
    parts = urlsplit(url)
    if parts.scheme == "https":
        return bool(parts.hostname)
    return parts.scheme == "http" and _is_loopback_host(parts.hostname)


def validate_config(config: MonadConfig) -> MonadConfig:
    """Reject configurations the server cannot start with."""
    if not config.private_key:
        raise ConfigError("Invalid configuration: Private Key is required")
    if not config.rpc_url:
        raise ConfigError("Invalid configuration: Monad RPC URL is required")
    if not config.agent_kit_url:
        raise ConfigError("Invalid configuration: agent kit URL is required")
    if not _is_safe_bridge_url(config.agent_kit_url):
        raise ConfigError("Invalid configuration: agent kit URL must use https unless it is a loopback address")
    if config.timeout <= 0:
        raise ConfigError("Invalid configuration: HTTP timeout must be positive")
    return config
