"""LLM-facing tool descriptors, grouped by family."""

from .base import ToolArguments, ToolDefinition, validate_arguments
from .ens import ENS_TOOLS
from .erc20 import ERC20_TOOLS
from .kuru import KURU_TOOLS
from .nadfun import NADFUN_TOOLS
from .native import NATIVE_TOOLS
from .shmonad import SHMONAD_TOOLS
from .token import TOKEN_TOOLS

TOOL_FAMILIES = (
    NATIVE_TOOLS,
    ERC20_TOOLS,
    ENS_TOOLS,
    KURU_TOOLS,
    NADFUN_TOOLS,
    SHMONAD_TOOLS,
    TOKEN_TOOLS,
)

__all__ = [
    "ToolArguments",
    "ToolDefinition",
    "validate_arguments",
    "TOOL_FAMILIES",
    "NATIVE_TOOLS",
    "ERC20_TOOLS",
    "ENS_TOOLS",
    "KURU_TOOLS",
    "NADFUN_TOOLS",
    "SHMONAD_TOOLS",
    "TOKEN_TOOLS",
]
