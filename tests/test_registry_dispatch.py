import pytest

from monad_mcp.errors import DuplicateToolError
from monad_mcp.mcp import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    ApplicationFault,
    ProtocolFault,
    ToolGateway,
    ToolRegistry,
    ToolResult,
    dispatch,
)
from monad_mcp.tools import TOOL_FAMILIES, ToolArguments, ToolDefinition
from monad_mcp.tools.base import object_schema

EXPECTED_TOOLS = {
    "getBalance",
    "transferETH",
    "getTokenBalance",
    "transferToken",
    "approveToken",
    "getTokenAllowance",
    "getTokenInfo",
    "getENSProfile",
    "resolveENSName",
    "getPrimaryENSName",
    "getENSNames",
    "getENSDomainPrice",
    "registerENSDomain",
    "getKuruPrice",
    "swapOnKuru",
    "createCurveWithMetadata",
    "stake",
    "unstake",
    "searchTokens",
}


REQUIRED_TOOLS = sorted(tool.name for family in TOOL_FAMILIES for tool in family if tool.input_schema["required"])


class EmptyArgs(ToolArguments):
    pass


async def _explode(client, args):
    raise RuntimeError("database on fire")


def _tool(name, handler=_explode):
    return ToolDefinition(
        name=name,
        description="test tool",
        input_schema=object_schema({}),
        args_model=EmptyArgs,
        handler=handler,
        failure_code="explode_failed",
        failure_message="Failed to explode",
    )


def test_registry_lists_every_tool():
    registry = ToolRegistry()

    assert set(registry.names()) == EXPECTED_TOOLS
    assert len(registry) == len(EXPECTED_TOOLS)
    for descriptor in registry.list_tools():
        assert set(descriptor) == {"name", "description", "inputSchema"}
        assert descriptor["inputSchema"]["type"] == "object"
        assert descriptor["inputSchema"]["additionalProperties"] is False


def test_required_fields_advertised():
    registry = ToolRegistry()
    schema = registry.resolve("transferToken").input_schema
    assert schema["required"] == ["tokenAddress", "to", "amount"]
    assert registry.resolve("getBalance").input_schema["required"] == []


def test_duplicate_registration_rejected():
    with pytest.raises(DuplicateToolError):
        ToolRegistry([[_tool("dup")], [_tool("dup")]])


def test_families_have_unique_names():
    names = [tool.name for family in TOOL_FAMILIES for tool in family]
    assert len(names) == len(set(names))


@pytest.mark.asyncio
async def test_unknown_tool(make_client):
    outcome = await dispatch(ToolRegistry(), make_client(), "mintGold", {})

    assert isinstance(outcome, ProtocolFault)
    assert outcome.code == METHOD_NOT_FOUND
    assert outcome.message == "Unknown tool: mintGold"


@pytest.mark.asyncio
async def test_missing_required_field_never_reaches_provider(make_client, stub_provider):
    provider = stub_provider()
    outcome = await dispatch(ToolRegistry(), make_client(provider), "transferETH", {"to": "0x1"})

    assert isinstance(outcome, ProtocolFault)
    assert outcome.code == INVALID_PARAMS
    assert outcome.message.startswith("Invalid parameters: ")
    assert any(item.startswith("amount:") for item in outcome.data)
    assert provider.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool,arguments",
    [
        ("getBalance", {"address": "0x1", "extra": True}),
        ("getBalance", ["0x1"]),
        ("transferETH", {"to": "0x1", "amount": 5}),
        ("stake", {"amount": "1"}),
        ("stake", {"amount": 0}),
        (
            "swapOnKuru",
            {"tokenInAddress": "0x1", "tokenOutAddress": "0x2", "amountToSwap": 1, "slippageTolerance": 101},
        ),
        (
            "getKuruPrice",
            {"tokenInAddress": "0x1", "tokenOutAddress": "0x2", "amountToSwap": 1, "amountType": "both"},
        ),
        (
            "createCurveWithMetadata",
            {"name": "A", "symbol": "A", "description": "A", "imageUrl": "ftp://x/a.png", "amountIn": "1"},
        ),
    ],
)
async def test_invalid_arguments(make_client, stub_provider, tool, arguments):
    provider = stub_provider()
    outcome = await dispatch(ToolRegistry(), make_client(provider), tool, arguments)

    assert isinstance(outcome, ProtocolFault)
    assert outcome.code == INVALID_PARAMS
    assert outcome.data
    assert provider.calls == []


@pytest.mark.asyncio
async def test_absent_arguments_treated_as_empty(make_client, stub_provider):
    provider = stub_provider(get_balance={"balance": "5"})
    outcome = await dispatch(ToolRegistry(), make_client(provider), "getBalance", None)

    assert isinstance(outcome, ToolResult)
    assert outcome.text == "Address: 0xABC\nBalance: 5 ETH"


@pytest.mark.asyncio
async def test_application_fault_carries_code_and_status(make_client, stub_provider):
    provider = stub_provider(get_domain_price={"success": False, "error": "reserved"})
    outcome = await dispatch(ToolRegistry(), make_client(provider), "getENSDomainPrice", {"name": "alice"})

    assert isinstance(outcome, ApplicationFault)
    assert outcome.code == "ens_price_failed"
    content = outcome.to_content()
    assert content["isError"] is True
    assert content["content"][0]["text"] == "Monad blockchain error: reserved"
    assert content["structuredContent"] == {"error": "reserved", "code": "ens_price_failed", "status": 500}


@pytest.mark.asyncio
async def test_not_found_fault_keeps_status(make_client, stub_provider):
    provider = stub_provider(resolve_address={})
    outcome = await dispatch(ToolRegistry(), make_client(provider), "resolveENSName", {"name": "ghost.nad"})

    assert isinstance(outcome, ApplicationFault)
    assert outcome.code == "ens_name_not_found"
    assert outcome.status == 404


@pytest.mark.asyncio
async def test_unclassified_error_uses_tool_failure(make_client):
    registry = ToolRegistry([[_tool("explode")]])

    outcome = await dispatch(registry, make_client(), "explode", {})

    assert isinstance(outcome, ApplicationFault)
    assert outcome.code == "explode_failed"
    assert outcome.message == "Failed to explode"
    assert "database" not in outcome.message


@pytest.mark.asyncio
async def test_camel_case_arguments_reach_client(make_client, stub_provider):
    provider = stub_provider(get_token_allowance={"allowance": "9"})
    arguments = {"tokenAddress": "0xT", "ownerAddress": "0xO", "spenderAddress": "0xS"}

    outcome = await dispatch(ToolRegistry(), make_client(provider), "getTokenAllowance", arguments)

    assert isinstance(outcome, ToolResult)
    assert "Allowance: 9" in outcome.text
    assert provider.calls == [("get_token_allowance", ("0xT", "0xO", "0xS"), {})]


@pytest.mark.asyncio
async def test_gateway_closes_client(make_client, stub_provider):
    provider = stub_provider()
    gateway = ToolGateway(make_client(provider))

    assert len(gateway.list_tools()) == len(EXPECTED_TOOLS)
    await gateway.aclose()

    assert provider.closed is True


@pytest.mark.asyncio
@pytest.mark.parametrize("tool", REQUIRED_TOOLS)
async def test_empty_arguments_rejected_before_any_io(make_client, stub_provider, stub_http, tool):
    provider = stub_provider()
    http = stub_http()

    outcome = await dispatch(ToolRegistry(), make_client(provider, http), tool, {})

    assert isinstance(outcome, ProtocolFault)
    assert outcome.code == INVALID_PARAMS
    assert provider.calls == []
    assert http.calls == []


@pytest.mark.parametrize("tool", ["getENSDomainPrice", "registerENSDomain"])
def test_duration_advertised_as_positive_integer(tool):
    duration = ToolRegistry().resolve(tool).input_schema["properties"]["duration"]
    assert duration["type"] == "integer"
    assert duration["exclusiveMinimum"] == 0


@pytest.mark.asyncio
async def test_fractional_duration_rejected(make_client, stub_provider):
    provider = stub_provider()
    arguments = {"name": "alice", "duration": 1.5}

    outcome = await dispatch(ToolRegistry(), make_client(provider), "getENSDomainPrice", arguments)

    assert isinstance(outcome, ProtocolFault)
    assert outcome.code == INVALID_PARAMS
    assert provider.calls == []


@pytest.mark.asyncio
async def test_integer_duration_reaches_provider(make_client, stub_provider):
    provider = stub_provider(get_domain_price={"success": True, "price": 2})
    arguments = {"name": "alice", "duration": 30}

    outcome = await dispatch(ToolRegistry(), make_client(provider), "getENSDomainPrice", arguments)

    assert isinstance(outcome, ToolResult)
    assert provider.calls == [("get_domain_price", ("alice", 30), {})]
