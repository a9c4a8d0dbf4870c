"""Action adapters, one module per tool family."""

from .common import AgentContext, provider_failure

__all__ = ["AgentContext", "provider_failure"]
