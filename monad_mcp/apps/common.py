"""Per-call context and provider result normalization helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from monad_mcp.agent_kit import ActionProvider, AgentKitError, Session
from monad_mcp.config import MonadConfig
from monad_mcp.errors import MonadError


@dataclass(frozen=True, slots=True)
class AgentContext:
    """Everything an adapter needs: session, provider, shared HTTP client and settings."""

    session: Session
    provider: ActionProvider
    http: httpx.AsyncClient
    config: MonadConfig


def provider_failure(exc: Exception, *, code: str, message: str) -> MonadError:
    """
    Convert an exception thrown across the provider boundary into a fault.

    Provider errors carry a caller-safe message; anything else is reported
    with the generic ``message`` only.
    """
    status = 500
    detail = message
    if isinstance(exc, AgentKitError):
        detail = str(exc) or message
        if exc.status_code and exc.status_code >= 400:
            status = exc.status_code
    return MonadError(detail, code, status)


def check_status(result: Any, *, code: str, message: str) -> Mapping[str, Any]:
    """Raise when the provider reports failure through its ``status`` flag."""
    if not isinstance(result, Mapping):
        raise MonadError(message, code, 500)
    if result.get("status") == "error":
        raise MonadError(result.get("message") or message, code, 500)
    return result


def extract_tx_hash(value: Any) -> str:
    """Accept a plain hash or an object holding ``transactionHash``."""
    if not value:
        return ""
    if isinstance(value, Mapping):
        inner = value.get("transactionHash")
        return str(inner) if inner else ""
    return str(value)


def text_or_default(value: Any, default: str) -> str:
    # Missing or empty values fall back; a literal 0 from the provider is kept.
    if value is None or value == "":
        return default
    return str(value)


def optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
