"""Domain pre-checks shared by the action adapters."""

from __future__ import annotations

import math
from typing import Any, Optional
from urllib.parse import urlparse

from monad_mcp.errors import MonadError


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def require_address(value: Any, message: str, *, code: str = "invalid_address") -> str:
    """Return the address unchanged or raise a 400 fault."""
    if not is_non_empty_string(value):
        raise MonadError(message, code, 400)
    return value


def is_positive_number(value: Any) -> bool:
    # bool is an int subclass; True must not count as 1.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def require_positive_number(value: Any, message: str, *, code: str = "invalid_amount") -> float:
    if not is_positive_number(value):
        raise MonadError(message, code, 400)
    return value


def parse_amount(value: Optional[str]) -> Optional[float]:
    """Parse a decimal amount string; None for anything that is not a finite number."""
    if not is_non_empty_string(value):
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    if math.isnan(parsed) or math.isinf(parsed):
        return None
    return parsed


def is_http_url(value: Any) -> bool:
    if not is_non_empty_string(value):
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def to_hex_address(address: str) -> str:
    return address if address.startswith("0x") else f"0x{address}"
