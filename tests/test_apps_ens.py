import pytest

from monad_mcp.config import MonadConfig
from monad_mcp.errors import MonadError


@pytest.mark.asyncio
async def test_profile_happy_path(make_client, stub_provider):
    client = make_client(
        stub_provider(get_profile={"profile": {"address": "0xALICE", "records": {"twitter": "@alice"}}})
    )

    result = await client.get_ens_profile("alice.nad")

    assert result.address == "0xALICE"
    assert result.attributes == {"twitter": "@alice"}


@pytest.mark.asyncio
async def test_profile_without_address_is_not_found(make_client, stub_provider):
    client = make_client(stub_provider(get_profile={"profile": {}}))

    with pytest.raises(MonadError) as excinfo:
        await client.get_ens_profile("ghost.nad")

    assert excinfo.value.code == "ens_profile_not_found"
    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_profile_provider_failure(make_client, stub_provider):
    client = make_client(stub_provider(get_profile=RuntimeError("boom")))
    with pytest.raises(MonadError) as excinfo:
        await client.get_ens_profile("alice.nad")
    assert excinfo.value.code == "ens_profile_failed"


@pytest.mark.asyncio
async def test_resolve_empty_address_is_not_found(make_client, stub_provider):
    client = make_client(stub_provider(resolve_address={"address": ""}))

    with pytest.raises(MonadError) as excinfo:
        await client.resolve_ens_name("ghost.nad")

    assert excinfo.value.code == "ens_name_not_found"
    assert excinfo.value.status == 404


@pytest.mark.asyncio
async def test_resolve_happy_path(make_client, stub_provider):
    client = make_client(stub_provider(resolve_address={"address": "0xALICE"}))
    result = await client.resolve_ens_name("alice.nad")
    assert result.name == "alice.nad"
    assert result.address == "0xALICE"


@pytest.mark.asyncio
async def test_primary_name_prefixes_address(make_client, stub_provider):
    provider = stub_provider(get_primary_name={"primaryName": "alice.nad"})
    client = make_client(provider)

    result = await client.get_primary_ens_name("abc123")

    assert provider.calls == [("get_primary_name", ("0xabc123",), {})]
    assert result.address == "abc123"
    assert result.name == "alice.nad"


@pytest.mark.asyncio
async def test_primary_name_missing_defaults_empty(make_client, stub_provider):
    client = make_client(stub_provider(get_primary_name={}))
    result = await client.get_primary_ens_name("0xabc")
    assert result.name == ""


@pytest.mark.asyncio
async def test_owned_names(make_client, stub_provider):
    client = make_client(stub_provider(get_names_for_address={"names": ["a.nad", "b.nad"]}))
    result = await client.get_ens_names("0xabc")
    assert result.names == ["a.nad", "b.nad"]

    client = make_client(stub_provider(get_names_for_address={}))
    result = await client.get_ens_names("0xabc")
    assert result.names == []


@pytest.mark.asyncio
async def test_domain_price_defaults_duration(make_client, stub_provider):
    provider = stub_provider(get_domain_price={"success": True, "price": 1.25})
    client = make_client(provider)

    result = await client.get_ens_domain_price("alice")

    assert result.duration == 365
    assert result.price == "1.25"
    assert provider.calls == [("get_domain_price", ("alice", 365), {})]


@pytest.mark.asyncio
async def test_domain_price_unsuccessful(make_client, stub_provider):
    client = make_client(stub_provider(get_domain_price={"success": False, "error": "name taken"}))

    with pytest.raises(MonadError) as excinfo:
        await client.get_ens_domain_price("alice")

    assert excinfo.value.code == "ens_price_failed"
    assert excinfo.value.message == "name taken"


@pytest.mark.asyncio
async def test_register_defaults(make_client, stub_provider):
    provider = stub_provider(register_domain={"transactionHash": "0xreg"})
    client = make_client(provider)

    result = await client.register_ens_domain("alice")

    assert result.name == "alice.nad"
    assert result.tld == "nad"
    assert result.duration == 365
    assert result.tx_hash == "0xreg"
    assert provider.calls == [("register_domain", ("alice", "nad", 365), {})]


@pytest.mark.asyncio
async def test_register_uses_configured_tld(make_client, stub_provider, session):
    provider = stub_provider(register_domain={"transactionHash": "0xreg"})
    client = make_client(provider, config=MonadConfig(private_key=session.private_key, default_tld="mon"))

    result = await client.register_ens_domain("alice", duration=30)

    assert result.name == "alice.mon"
    assert result.duration == 30


@pytest.mark.asyncio
async def test_register_without_hash_fails(make_client, stub_provider):
    client = make_client(stub_provider(register_domain={}))

    with pytest.raises(MonadError) as excinfo:
        await client.register_ens_domain("alice", "nad")

    assert excinfo.value.code == "ens_register_failed"
    assert excinfo.value.message == "Failed to register domain alice.nad"
