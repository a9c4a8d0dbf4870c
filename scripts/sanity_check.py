"""Read-only smoke checks against a live agent-kit bridge and the Kuru API."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from monad_mcp.client import MonadClient  # noqa: E402
from monad_mcp.mcp import ToolGateway  # noqa: E402

# Public token used for the token info lookup; override via env.
SAMPLE_TOKEN = os.getenv("MONAD_SAMPLE_TOKEN")
SAMPLE_QUERY = os.getenv("MONAD_SAMPLE_QUERY", "MON")
# Opt-in to name service lookups (slower on some bridges).
RUN_ENS_CHECKS = os.getenv("RUN_ENS_SANITY", "false").lower() in {"1", "true", "yes"}


async def _show(gateway: ToolGateway, tool: str, **arguments: object) -> None:
    outcome = await gateway.call_tool(tool, arguments)
    print(f"{tool}:", outcome)


async def main() -> None:
    gateway = ToolGateway(MonadClient.from_config())
    try:
        print("Wallet:", gateway.client.get_wallet_address())
        await _show(gateway, "getBalance")
        await _show(gateway, "searchTokens", query=SAMPLE_QUERY)
        if SAMPLE_TOKEN:
            await _show(gateway, "getTokenInfo", tokenAddress=SAMPLE_TOKEN)
        if RUN_ENS_CHECKS:
            await _show(gateway, "getENSNames", address=gateway.client.get_wallet_address())
    finally:
        await gateway.aclose()


if __name__ == "__main__":
    asyncio.run(main())
