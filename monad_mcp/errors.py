"""Exception types shared by adapters, the gateway and startup code."""

from __future__ import annotations

from typing import Optional


class MonadError(Exception):
    """
    Classified operation failure raised by an action adapter.

    ``code`` is a stable symbolic kind (``token_transfer_failed``,
    ``ens_name_not_found``...) and ``status`` an HTTP-like numeric class.
    """

    def __init__(self, message: str, code: str, status: Optional[int] = 500) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __repr__(self) -> str:
        return f"MonadError(message={self.message!r}, code={self.code!r}, status={self.status!r})"


class ConfigError(Exception):
    """Raised at startup when the process configuration is unusable."""


class DuplicateToolError(ValueError):
    """Raised when two tool families register the same tool name."""
