"""Action provider boundary: wallet session and the agent-kit bridge client."""

from .client import (
    ActionProvider,
    AgentKitClient,
    AgentKitError,
    AgentKitUnauthorizedError,
    AgentKitUnreachableError,
)
from .session import Session, normalize_private_key

__all__ = [
    "ActionProvider",
    "AgentKitClient",
    "AgentKitError",
    "AgentKitUnauthorizedError",
    "AgentKitUnreachableError",
    "Session",
    "normalize_private_key",
]
