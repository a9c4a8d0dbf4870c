from monad_mcp.apps.ens import OwnedNamesResult, ProfileResult
from monad_mcp.apps.erc20 import ApprovalResult, TokenBalanceResult
from monad_mcp.apps.kuru import PriceQuote
from monad_mcp.apps.native import BalanceResult, TransferResult
from monad_mcp.apps.shmonad import StakeResult, UnstakeResult
from monad_mcp.apps.token import TokenSearchResult, TokenSummary
from monad_mcp.formatter import (
    format_approval,
    format_balance,
    format_owned_names,
    format_price,
    format_profile,
    format_route,
    format_stake,
    format_token_balance,
    format_token_search,
    format_transfer,
    format_unstake,
)


def test_balance_text():
    assert format_balance(BalanceResult(address="0xABC", balance="5")) == "Address: 0xABC\nBalance: 5 ETH"


def test_formatting_is_deterministic():
    result = ProfileResult(name="alice.nad", address="0x1", attributes={"url": "https://a", "avatar": "ipfs://x"})
    assert format_profile(result) == format_profile(result)
    text = format_profile(result)
    # Records are listed in key order.
    assert text.index("avatar") < text.index("url")


def test_missing_fields_render_placeholder():
    text = format_token_balance(TokenBalanceResult(address="0xABC", token_address="0xT", balance="7"))
    assert "Token: N/A" in text
    assert "Balance: 7" in text

    text = format_profile(ProfileResult(name="ghost.nad", address="0x1", attributes={}))
    assert text.endswith("Records: N/A")


def test_transfer_text():
    text = format_transfer(TransferResult(tx_hash="0xhash", from_address="0xA", to="0xB", amount="1.5"))
    assert text.splitlines() == [
        "TRANSACTION DETAILS",
        "Hash: 0xhash",
        "From: 0xA",
        "To: 0xB",
        "Amount: 1.5 ETH",
        "Status: Completed",
    ]


def test_approval_text():
    text = format_approval(ApprovalResult(tx_hash="0xh", token_address="0xT", spender="0xS", amount="10"))
    assert text == "Successfully approved 10 tokens for 0xS.\nTransaction hash: 0xh"


def test_owned_names_empty_and_populated():
    assert format_owned_names(OwnedNamesResult(address="0x1", names=[])) == "No ENS names found for 0x1"
    assert format_owned_names(OwnedNamesResult(address="0x1", names=["a.nad", "b.nad"])) == (
        "ENS Names for 0x1:\na.nad\nb.nad"
    )


def test_route_shapes():
    assert format_route(None) == "Not available"
    assert format_route([]) == "Not available"
    assert format_route(["0xA", "0xB", "0xC"]) == "0xA -> 0xB -> 0xC"
    assert format_route("direct") == "direct"
    assert format_route({"pool": "p1", "hops": 2}) == '{"hops": 2, "pool": "p1"}'


def test_price_text():
    text = format_price(PriceQuote(output="12", price_impact=1.0, route=["0xA", "0xB"]))
    assert text == "Price Information:\nEstimated output: 12\nPrice impact: 1%\nRoute: 0xA -> 0xB"


def test_stake_and_unstake_are_distinguished():
    stake_text = format_stake(StakeResult(tx_hash="0x1", status="pending", message="Staking transaction submitted"))
    unstake_text = format_unstake(UnstakeResult(tx_hash="0x2", status="pending", message="queued"))
    assert stake_text.startswith("Staking transaction submitted\n")
    assert unstake_text.startswith("Unstaking transaction submitted\n")
    assert unstake_text.endswith("queued")


def test_token_search_text():
    tokens = [
        TokenSummary(address="0x1", decimal=18, name="Wrapped MON", ticker="WMON", website="https://wmon.xyz"),
        TokenSummary(address="0x2", decimal=None, name="Chog", ticker="CHOG"),
    ]
    text = format_token_search(TokenSearchResult(query="mon", total=40, tokens=tokens))

    assert text.startswith('Found 40 tokens matching "mon":\n\n1. Wrapped MON (WMON)')
    assert "   Website: https://wmon.xyz" in text
    second = text.split("\n\n")[-1]
    assert second.splitlines() == ["2. Chog (CHOG)", "   Address: 0x2", "   Decimals: N/A"]


def test_token_search_empty():
    assert format_token_search(TokenSearchResult(query="zzz", total=0)) == 'No tokens found matching "zzz"'
