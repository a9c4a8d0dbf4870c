"""
Action provider boundary.

``ActionProvider`` is the contract the adapters rely on: one coroutine per
blockchain action, taking the session plus operation parameters and returning
the provider's raw result mapping. ``AgentKitClient`` implements it by posting
each action to an agent-kit bridge service over HTTP and mapping transport and
HTTP failures to internal exceptions.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from monad_mcp.agent_kit.session import Session
from monad_mcp.config import MonadConfig

logger = logging.getLogger(__name__)


class AgentKitError(Exception):
    """Base exception for action provider failures."""

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class AgentKitUnauthorizedError(AgentKitError):
    """Raised when the bridge rejects the wallet credential."""


class AgentKitUnreachableError(AgentKitError):
    """Raised when the bridge cannot be reached."""


class ActionProvider(Protocol):
    async def get_balance(self, session: Session, address: str) -> Dict[str, Any]: ...

    async def transfer_eth(self, session: Session, to: str, amount: str) -> Dict[str, Any]: ...

    async def get_token_balance(
        self, session: Session, token_address: str, owner_address: Optional[str]
    ) -> Dict[str, Any]: ...

    async def transfer_token(self, session: Session, token_address: str, to: str, amount: str) -> Dict[str, Any]: ...

    async def approve_token(
        self, session: Session, token_address: str, spender: str, amount: str
    ) -> Dict[str, Any]: ...

    async def get_token_allowance(
        self, session: Session, token_address: str, owner_address: str, spender_address: str
    ) -> Dict[str, Any]: ...

    async def get_token_info(self, session: Session, token_address: str) -> Dict[str, Any]: ...

    async def get_profile(self, session: Session, name: str) -> Dict[str, Any]: ...

    async def resolve_address(self, session: Session, name: str) -> Dict[str, Any]: ...

    async def get_primary_name(self, session: Session, address: str) -> Dict[str, Any]: ...

    async def get_names_for_address(self, session: Session, address: str) -> Dict[str, Any]: ...

    async def get_domain_price(self, session: Session, name: str, duration: int) -> Dict[str, Any]: ...

    async def register_domain(self, session: Session, name: str, tld: str, duration: int) -> Dict[str, Any]: ...

    async def get_price(
        self, session: Session, token_in: str, token_out: str, amount: float, amount_type: str
    ) -> Dict[str, Any]: ...

    async def swap(
        self,
        session: Session,
        token_in: str,
        token_out: str,
        amount: float,
        in_decimals: int,
        out_decimals: int,
        slippage_tolerance: float,
        approval: bool,
    ) -> Dict[str, Any]: ...

    async def create_curve_with_metadata(
        self,
        session: Session,
        *,
        name: str,
        symbol: str,
        description: str,
        image: bytes,
        image_type: str,
        amount_in: str,
        home_page: Optional[str] = None,
        twitter: Optional[str] = None,
        telegram: Optional[str] = None,
    ) -> Dict[str, Any]: ...

    async def stake(self, session: Session, amount: float) -> Dict[str, Any]: ...

    async def unstake(self, session: Session, shares: float) -> Dict[str, Any]: ...

    async def aclose(self) -> None: ...


class AgentKitClient:
    """Async HTTP client for an agent-kit bridge exposing ``POST /actions/{action}``."""

    def __init__(
        self,
        config: MonadConfig,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.agent_kit_url.rstrip("/"), timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _build_headers(session: Session) -> Dict[str, str]:
        return {"X-Wallet-Key": session.private_key, "X-RPC-URL": session.rpc_url}

    def _process_response(self, action: str, response: httpx.Response) -> Dict[str, Any]:
        if response.status_code in {401, 403}:
            raise AgentKitUnauthorizedError(
                "Action provider rejected the wallet credential.", status_code=response.status_code
            )

        try:
            data: Any = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400:
            message = "Action provider error."
            code: Optional[str] = None
            if isinstance(data, dict):
                raw_message = data.get("message") or data.get("error")
                if isinstance(raw_message, str) and raw_message:
                    message = raw_message
                raw_code = data.get("code")
                if isinstance(raw_code, (str, int)):
                    code = str(raw_code)
            raise AgentKitError(message, code=code, status_code=response.status_code)

        if not isinstance(data, dict):
            raise AgentKitError(
                f"Unexpected response from action provider for {action}.", status_code=response.status_code
            )
        return data

    async def _call(self, action: str, session: Session, params: Dict[str, Any]) -> Dict[str, Any]:
        client = await self._get_client()
        payload = {key: value for key, value in params.items() if value is not None}
        try:
            response = await client.post(
                f"/actions/{action}", json={"params": payload}, headers=self._build_headers(session)
            )
        except httpx.RequestError as exc:
            logger.warning("Action provider unreachable for action %s", action)
            raise AgentKitUnreachableError("Action provider unreachable") from exc
        return self._process_response(action, response)

    async def get_balance(self, session: Session, address: str) -> Dict[str, Any]:
        return await self._call("getBalance", session, {"address": address})

    async def transfer_eth(self, session: Session, to: str, amount: str) -> Dict[str, Any]:
        return await self._call("transferETH", session, {"to": to, "amount": amount})

    async def get_token_balance(
        self, session: Session, token_address: str, owner_address: Optional[str]
    ) -> Dict[str, Any]:
        return await self._call(
            "getTokenBalance", session, {"tokenAddress": token_address, "ownerAddress": owner_address}
        )

    async def transfer_token(self, session: Session, token_address: str, to: str, amount: str) -> Dict[str, Any]:
        return await self._call(
            "transferToken", session, {"tokenAddress": token_address, "to": to, "amount": amount}
        )

    async def approve_token(
        self, session: Session, token_address: str, spender: str, amount: str
    ) -> Dict[str, Any]:
        return await self._call(
            "approveToken", session, {"tokenAddress": token_address, "spender": spender, "amount": amount}
        )

    async def get_token_allowance(
        self, session: Session, token_address: str, owner_address: str, spender_address: str
    ) -> Dict[str, Any]:
        return await self._call(
            "getTokenAllowance",
            session,
            {"tokenAddress": token_address, "ownerAddress": owner_address, "spenderAddress": spender_address},
        )

    async def get_token_info(self, session: Session, token_address: str) -> Dict[str, Any]:
        return await self._call("getTokenInfo", session, {"tokenAddress": token_address})

    async def get_profile(self, session: Session, name: str) -> Dict[str, Any]:
        return await self._call("getProfile", session, {"name": name})

    async def resolve_address(self, session: Session, name: str) -> Dict[str, Any]:
        return await self._call("resolveAddress", session, {"name": name})

    async def get_primary_name(self, session: Session, address: str) -> Dict[str, Any]:
        return await self._call("getPrimaryName", session, {"address": address})

    async def get_names_for_address(self, session: Session, address: str) -> Dict[str, Any]:
        return await self._call("getNamesForAddress", session, {"address": address})

    async def get_domain_price(self, session: Session, name: str, duration: int) -> Dict[str, Any]:
        return await self._call("getDomainPrice", session, {"name": name, "duration": duration})

    async def register_domain(self, session: Session, name: str, tld: str, duration: int) -> Dict[str, Any]:
        return await self._call("registerDomain", session, {"name": name, "tld": tld, "duration": duration})

    async def get_price(
        self, session: Session, token_in: str, token_out: str, amount: float, amount_type: str
    ) -> Dict[str, Any]:
        return await self._call(
            "getPrice",
            session,
            {
                "tokenInAddress": token_in,
                "tokenOutAddress": token_out,
                "amountToSwap": amount,
                "amountType": amount_type,
            },
        )

    async def swap(
        self,
        session: Session,
        token_in: str,
        token_out: str,
        amount: float,
        in_decimals: int,
        out_decimals: int,
        slippage_tolerance: float,
        approval: bool,
    ) -> Dict[str, Any]:
        return await self._call(
            "swap",
            session,
            {
                "tokenInAddress": token_in,
                "tokenOutAddress": token_out,
                "amountToSwap": amount,
                "inTokenDecimals": in_decimals,
                "outTokenDecimals": out_decimals,
                "slippageTolerance": slippage_tolerance,
                "approveTokens": approval,
            },
        )

    async def create_curve_with_metadata(
        self,
        session: Session,
        *,
        name: str,
        symbol: str,
        description: str,
        image: bytes,
        image_type: str,
        amount_in: str,
        home_page: Optional[str] = None,
        twitter: Optional[str] = None,
        telegram: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._call(
            "createCurveWithMetadata",
            session,
            {
                "name": name,
                "symbol": symbol,
                "description": description,
                "image": base64.b64encode(image).decode("ascii"),
                "imageContentType": image_type,
                "amountIn": amount_in,
                "homePage": home_page,
                "twitter": twitter,
                "telegram": telegram,
            },
        )

    async def stake(self, session: Session, amount: float) -> Dict[str, Any]:
        return await self._call("stake", session, {"amount": amount})

    async def unstake(self, session: Session, shares: float) -> Dict[str, Any]:
        return await self._call("unstake", session, {"shares": shares})
