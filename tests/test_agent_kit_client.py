import base64

import httpx
import pytest

from monad_mcp.agent_kit import (
    AgentKitClient,
    AgentKitError,
    AgentKitUnauthorizedError,
    AgentKitUnreachableError,
)
from monad_mcp.apps.common import provider_failure
from monad_mcp.config import MonadConfig


class MockResponse:
    def __init__(self, status_code: int, json_body=None):
        self.status_code = status_code
        self._json = json_body

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json


class MockAsyncClient:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []
        self.closed = False

    async def post(self, path, json=None, headers=None):
        self.calls.append({"path": path, "json": json, "headers": headers})
        if not self.responses:
            raise RuntimeError("No mock responses")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self):
        self.closed = True


def _client(*responses):
    mock = MockAsyncClient(list(responses))
    return AgentKitClient(MonadConfig(private_key="0xkey"), async_client=mock), mock


@pytest.mark.asyncio
async def test_action_posts_params_and_credentials(session):
    client, mock = _client(MockResponse(200, {"balance": "1.0"}))

    result = await client.get_balance(session, "0xABC")

    assert result == {"balance": "1.0"}
    call = mock.calls[0]
    assert call["path"] == "/actions/getBalance"
    assert call["json"] == {"params": {"address": "0xABC"}}
    assert call["headers"]["X-Wallet-Key"] == session.private_key
    assert call["headers"]["X-RPC-URL"] == session.rpc_url


@pytest.mark.asyncio
async def test_absent_optional_params_are_dropped(session):
    client, mock = _client(MockResponse(200, {}))

    await client.get_token_balance(session, "0xT", None)

    assert mock.calls[0]["json"] == {"params": {"tokenAddress": "0xT"}}


@pytest.mark.asyncio
async def test_swap_params(session):
    client, mock = _client(MockResponse(200, {}))

    await client.swap(session, "0xA", "0xB", 1.5, 6, 18, 0.5, True)

    assert mock.calls[0]["json"]["params"] == {
        "tokenInAddress": "0xA",
        "tokenOutAddress": "0xB",
        "amountToSwap": 1.5,
        "inTokenDecimals": 6,
        "outTokenDecimals": 18,
        "slippageTolerance": 0.5,
        "approveTokens": True,
    }


@pytest.mark.asyncio
async def test_image_is_base64_encoded(session):
    client, mock = _client(MockResponse(200, {}))

    await client.create_curve_with_metadata(
        session,
        name="Pepe",
        symbol="PEPE",
        description="frog",
        image=b"\x89PNG",
        image_type="image/png",
        amount_in="1",
    )

    params = mock.calls[0]["json"]["params"]
    assert base64.b64decode(params["image"]) == b"\x89PNG"
    assert params["imageContentType"] == "image/png"
    assert "twitter" not in params


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_unauthorized(session, status):
    client, _ = _client(MockResponse(status, {"error": "bad key"}))
    with pytest.raises(AgentKitUnauthorizedError):
        await client.stake(session, 1)


@pytest.mark.asyncio
async def test_error_message_and_code_from_body(session):
    client, _ = _client(MockResponse(422, {"message": "insufficient balance", "code": "E_FUNDS"}))

    with pytest.raises(AgentKitError) as excinfo:
        await client.transfer_eth(session, "0x1", "5")

    assert str(excinfo.value) == "insufficient balance"
    assert excinfo.value.code == "E_FUNDS"
    assert excinfo.value.status_code == 422


@pytest.mark.asyncio
async def test_error_without_json_body(session):
    client, _ = _client(MockResponse(500))
    with pytest.raises(AgentKitError) as excinfo:
        await client.unstake(session, 1)
    assert str(excinfo.value) == "Action provider error."


@pytest.mark.asyncio
async def test_non_object_success_body(session):
    client, _ = _client(MockResponse(200, ["not", "a", "dict"]))
    with pytest.raises(AgentKitError):
        await client.get_token_info(session, "0xT")


@pytest.mark.asyncio
async def test_unreachable(session):
    client, _ = _client(httpx.ConnectError("refused"))
    with pytest.raises(AgentKitUnreachableError):
        await client.get_profile(session, "alice.nad")


@pytest.mark.asyncio
async def test_injected_client_is_not_closed():
    client, mock = _client()
    await client.aclose()
    assert mock.closed is False


def test_provider_failure_mapping():
    fault = provider_failure(AgentKitError("nonce too low", status_code=409), code="swap_failed", message="x")
    assert (fault.message, fault.code, fault.status) == ("nonce too low", "swap_failed", 409)

    fault = provider_failure(KeyError("internal detail"), code="swap_failed", message="Failed to swap tokens")
    assert (fault.message, fault.status) == ("Failed to swap tokens", 500)
