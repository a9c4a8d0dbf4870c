"""
Client facade over the action adapters.

``MonadClient`` owns the authenticated session and the shared outbound HTTP
client. Each method delegates to one adapter; no logic lives here.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from monad_mcp.agent_kit import ActionProvider, AgentKitClient, Session
from monad_mcp.apps import ens, erc20, kuru, nadfun, native, shmonad, token
from monad_mcp.apps.common import AgentContext
from monad_mcp.config import MonadConfig, load_config, validate_config

logger = logging.getLogger(__name__)


class MonadClient:
    def __init__(
        self,
        session: Session,
        provider: ActionProvider,
        *,
        config: Optional[MonadConfig] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or MonadConfig()
        self._owns_http = http is None
        self._context = AgentContext(
            session=session,
            provider=provider,
            http=http or httpx.AsyncClient(timeout=self.config.timeout),
            config=self.config,
        )

    @classmethod
    def from_config(cls, config: Optional[MonadConfig] = None) -> "MonadClient":
        """
        Build a client from configuration, deriving the wallet session.

        Raises:
            ConfigError: when the key or endpoints are missing or the key cannot
                be decoded. This is a startup failure, never a per-request one.
        """
        config = validate_config(config or load_config())
        session = Session.from_private_key(config.private_key, config.rpc_url)
        logger.info("Wallet session ready for %s", session.wallet_address)
        return cls(session, AgentKitClient(config), config=config)

    @property
    def session(self) -> Session:
        return self._context.session

    @property
    def context(self) -> AgentContext:
        return self._context

    def get_wallet_address(self) -> str:
        return self._context.session.wallet_address

    async def aclose(self) -> None:
        await self._context.provider.aclose()
        if self._owns_http:
            await self._context.http.aclose()

    # Native
    async def get_balance(self, address: Optional[str] = None) -> native.BalanceResult:
        return await native.get_balance(self._context, address)

    async def transfer_eth(self, to: str, amount: str) -> native.TransferResult:
        return await native.transfer_eth(self._context, to, amount)

    # ERC-20
    async def get_token_balance(
        self, token_address: str, owner_address: Optional[str] = None
    ) -> erc20.TokenBalanceResult:
        return await erc20.get_token_balance(self._context, token_address, owner_address)

    async def transfer_token(self, token_address: str, to: str, amount: str) -> erc20.TokenTransferResult:
        return await erc20.transfer_token(self._context, token_address, to, amount)

    async def approve_token(self, token_address: str, spender: str, amount: str) -> erc20.ApprovalResult:
        return await erc20.approve_token(self._context, token_address, spender, amount)

    async def get_token_allowance(
        self, token_address: str, owner_address: str, spender_address: str
    ) -> erc20.TokenAllowanceResult:
        return await erc20.get_token_allowance(self._context, token_address, owner_address, spender_address)

    async def get_token_info(self, token_address: str) -> erc20.TokenInfoResult:
        return await erc20.get_token_info(self._context, token_address)

    # Name service
    async def get_ens_profile(self, name: str) -> ens.ProfileResult:
        return await ens.get_profile(self._context, name)

    async def resolve_ens_name(self, name: str) -> ens.ResolveResult:
        return await ens.resolve_address(self._context, name)

    async def get_primary_ens_name(self, address: str) -> ens.PrimaryNameResult:
        return await ens.get_primary_name(self._context, address)

    async def get_ens_names(self, address: str) -> ens.OwnedNamesResult:
        return await ens.get_names_for_address(self._context, address)

    async def get_ens_domain_price(self, name: str, duration: Optional[int] = None) -> ens.DomainPriceResult:
        return await ens.get_domain_price(self._context, name, duration)

    async def register_ens_domain(
        self, name: str, tld: Optional[str] = None, duration: Optional[int] = None
    ) -> ens.RegistrationResult:
        return await ens.register_domain(self._context, name, tld, duration)

    # Kuru DEX
    async def get_kuru_price(
        self, token_in: str, token_out: str, amount: float, amount_type: str = "amountIn"
    ) -> kuru.PriceQuote:
        return await kuru.get_price(self._context, token_in, token_out, amount, amount_type)

    async def swap_on_kuru(
        self, token_in: str, token_out: str, amount: float, slippage_tolerance: Optional[float] = None
    ) -> kuru.SwapResult:
        return await kuru.swap(self._context, token_in, token_out, amount, slippage_tolerance)

    # nad.fun
    async def create_curve_with_metadata(
        self,
        name: str,
        symbol: str,
        description: str,
        image_url: str,
        amount_in: str,
        home_page: Optional[str] = None,
        twitter: Optional[str] = None,
        telegram: Optional[str] = None,
    ) -> nadfun.CurveCreationResult:
        return await nadfun.create_curve_with_metadata(
            self._context, name, symbol, description, image_url, amount_in, home_page, twitter, telegram
        )

    # shMONAD staking
    async def stake(self, amount: float) -> shmonad.StakeResult:
        return await shmonad.stake(self._context, amount)

    async def unstake(self, shares: float) -> shmonad.UnstakeResult:
        return await shmonad.unstake(self._context, shares)

    # Token search
    async def search_tokens(self, query: str) -> token.TokenSearchResult:
        return await token.search_tokens(self._context, query)
