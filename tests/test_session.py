import pytest

from monad_mcp.agent_kit import AgentKitClient, Session
from monad_mcp.client import MonadClient
from monad_mcp.config import MonadConfig
from monad_mcp.errors import ConfigError

KNOWN_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
KNOWN_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"


def test_session_derives_wallet_address():
    session = Session.from_private_key(KNOWN_KEY, "https://rpc.test/")
    assert session.wallet_address == KNOWN_ADDRESS
    assert session.rpc_url == "https://rpc.test/"


def test_session_accepts_key_without_prefix():
    session = Session.from_private_key(KNOWN_KEY[2:], "https://rpc.test/")
    assert session.private_key == KNOWN_KEY
    assert session.wallet_address == KNOWN_ADDRESS


def test_session_repr_hides_key():
    session = Session.from_private_key(KNOWN_KEY, "https://rpc.test/")
    assert KNOWN_KEY[2:] not in repr(session)


@pytest.mark.parametrize("key", ["", "   ", "0x1234", "not-hex"])
def test_session_rejects_bad_keys(key):
    with pytest.raises(ConfigError):
        Session.from_private_key(key, "https://rpc.test/")


def test_client_from_config():
    client = MonadClient.from_config(MonadConfig(private_key=KNOWN_KEY))

    assert client.get_wallet_address() == KNOWN_ADDRESS
    assert isinstance(client.context.provider, AgentKitClient)


def test_client_from_config_requires_key():
    with pytest.raises(ConfigError):
        MonadClient.from_config(MonadConfig())


@pytest.mark.asyncio
async def test_client_closes_owned_resources(session, stub_provider):
    provider = stub_provider()
    client = MonadClient(session, provider)

    await client.aclose()

    assert provider.closed is True
    assert client.context.http.is_closed
