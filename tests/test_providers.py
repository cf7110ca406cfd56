"""Tests for the GeckoTerminal, Recall and CoinGecko providers."""

import json
from decimal import Decimal

import httpx
import pytest

from swapdesk.config import Settings
from swapdesk.errors import ExecutionError
from swapdesk.providers.coingecko import CoinGeckoPriceSource, get_coin_id
from swapdesk.providers.geckoterminal import (
    GeckoTerminalPoolSearch,
    parse_symbols_from_name,
    transform_pool,
)
from swapdesk.providers.recall import RecallClient
from swapdesk.trading.models import ResolvedTrade

PEPE_POOL = {
    "id": "eth_0xa43fe16908251ee70ef74718545e4fe6c5ccec9f",
    "type": "pool",
    "attributes": {
        "name": "PEPE / WETH 0.3%",
        "address": "0xa43fe16908251ee70ef74718545e4fe6c5ccec9f",
        "base_token_price_usd": "0.0000101",
        "reserve_in_usd": "41000000.5",
        "volume_usd": {"h24": "1500000"},
    },
    "relationships": {
        "base_token": {"data": {"id": "eth_0x6982508145454ce325ddbe47a25d4ec3d2311933", "type": "token"}},
        "quote_token": {"data": {"id": "eth_0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2", "type": "token"}},
    },
}


def make_trade(**overrides) -> ResolvedTrade:
    fields = dict(
        from_chain_key="ethereum",
        to_chain_key="solana",
        from_token_address="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        to_token_address="So11111111111111111111111111111111111111112",
        amount=Decimal("12.5"),
        reason="",
        from_symbol="USDC",
        to_symbol="SOL",
    )
    fields.update(overrides)
    return ResolvedTrade(**fields)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGeckoTerminal:
    """Tests for GeckoTerminal pool parsing and search."""

    def test_parse_symbols_strips_fee_tier(self):
        assert parse_symbols_from_name("WBTC / WETH 0.05%") == ("WBTC", "WETH")
        assert parse_symbols_from_name("SOL / USDC") == ("SOL", "USDC")

    def test_parse_symbols_rejects_addresses(self):
        assert parse_symbols_from_name("0x1234567890abcdef / WETH") is None
        assert parse_symbols_from_name("JUSTONE") is None
        assert parse_symbols_from_name(None) is None

    def test_transform_pool(self):
        pool = transform_pool(PEPE_POOL)

        assert pool.network == "eth"
        assert pool.base_token.symbol == "PEPE"
        assert pool.base_token.address == "0x6982508145454ce325ddbe47a25d4ec3d2311933"
        assert pool.quote_token.symbol == "WETH"
        assert pool.liquidity_usd == Decimal("41000000.5")
        assert pool.volume_24h_usd == Decimal("1500000")
        assert pool.token_matching("pepe") is pool.base_token
        assert pool.token_matching("WETH") is pool.quote_token
        assert pool.token_matching("USDC") is None

    @pytest.mark.asyncio
    async def test_search(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"data": [PEPE_POOL]})

        search = GeckoTerminalPoolSearch(base_url="https://gt.test/api/v2", client=mock_client(handler))
        pools = await search.search("PEPE")
        await search.close()

        assert seen["url"] == "https://gt.test/api/v2/search/pools?query=PEPE"
        assert len(pools) == 1
        assert pools[0].network == "eth"

    @pytest.mark.asyncio
    async def test_short_query_not_sent(self):
        def handler(request):
            raise AssertionError("no request expected")

        search = GeckoTerminalPoolSearch(client=mock_client(handler))

        assert await search.search("P") == []

    @pytest.mark.asyncio
    async def test_http_error_status_returns_empty(self):
        search = GeckoTerminalPoolSearch(client=mock_client(lambda r: httpx.Response(429, text="slow down")))

        assert await search.search("PEPE") == []

    @pytest.mark.asyncio
    async def test_transport_error_returns_empty(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        search = GeckoTerminalPoolSearch(client=mock_client(handler))

        assert await search.search("PEPE") == []


class TestRecallClient:
    """Tests for the Recall trading client."""

    @pytest.fixture
    def settings(self):
        return Settings(
            recall_api_key="agent-key",
            recall_environment="sandbox",
            recall_sandbox_url="https://sandbox.test",
            recall_competition_id="comp-1",
        )

    def test_execute_body(self, settings):
        client = RecallClient(settings=settings)

        body = client.build_execute_body(make_trade())

        assert body == {
            "fromToken": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            "toToken": "So11111111111111111111111111111111111111112",
            "amount": 12.5,
            "reason": "TRADE",
            "fromChain": "evm",
            "toChain": "svm",
            "fromSpecificChain": "eth",
            "toSpecificChain": "svm",
            "competitionId": "comp-1",
        }

    @pytest.mark.asyncio
    async def test_execute_success(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "transaction": {"id": "tx-9"}})

        client = RecallClient(settings=settings, client=mock_client(handler))
        receipt = await client.execute("agent-key", "sandbox", make_trade(reason="rebalance"))
        await client.close()

        assert receipt["transaction"]["id"] == "tx-9"
        assert seen["url"] == "https://sandbox.test/api/trade/execute"
        assert seen["auth"] == "Bearer agent-key"
        assert seen["body"]["reason"] == "rebalance"

    @pytest.mark.asyncio
    async def test_execute_error_status(self, settings):
        def handler(request):
            return httpx.Response(400, text='{"error":"Insufficient liquidity"}')

        client = RecallClient(settings=settings, client=mock_client(handler))

        with pytest.raises(ExecutionError) as exc:
            await client.execute("agent-key", "sandbox", make_trade())

        assert exc.value.status_code == 400
        assert exc.value.message == 'Trade failed (400): {"error":"Insufficient liquidity"}'

    @pytest.mark.asyncio
    async def test_execute_transport_error(self, settings):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = RecallClient(settings=settings, client=mock_client(handler))

        with pytest.raises(ExecutionError, match="ReadTimeout"):
            await client.execute("agent-key", "sandbox", make_trade())

    @pytest.mark.asyncio
    async def test_execute_unknown_environment(self, settings):
        client = RecallClient(settings=settings, client=mock_client(lambda r: httpx.Response(200)))

        with pytest.raises(ExecutionError, match="Unknown environment"):
            await client.execute("agent-key", "mainnet", make_trade())

    @pytest.mark.asyncio
    async def test_get_balances(self, settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, json={
                "success": True,
                "balances": [{"symbol": "USDC", "amount": 100, "specificChain": "eth"}],
            })

        client = RecallClient(settings=settings, client=mock_client(handler))
        snapshot = await client.get_balances("agent-key", "sandbox")

        assert seen["url"] == "https://sandbox.test/api/agent/balances?competitionId=comp-1"
        assert snapshot.get("USDC").amount == Decimal("100")

    @pytest.mark.asyncio
    async def test_get_balances_error(self, settings):
        client = RecallClient(settings=settings, client=mock_client(lambda r: httpx.Response(401)))

        with pytest.raises(httpx.HTTPStatusError):
            await client.get_balances("bad-key", "sandbox")


class TestCoinGecko:
    """Tests for CoinGecko price lookups."""

    def test_coin_ids(self):
        assert get_coin_id("eth") == "ethereum"
        assert get_coin_id("USDC") == "usd-coin"
        assert get_coin_id("PEPE") == "pepe"

    @pytest.mark.asyncio
    async def test_get_price(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["ids"] == "solana"
            return httpx.Response(200, json={
                "solana": {"usd": 145.2, "usd_24h_change": -1.5, "usd_market_cap": 68000000000},
            })

        source = CoinGeckoPriceSource(base_url="https://cg.test/api/v3", client=mock_client(handler))
        quote = await source.get_price("sol")

        assert quote.symbol == "SOL"
        assert quote.price == Decimal("145.2")
        assert quote.change_24h == Decimal("-1.5")

    @pytest.mark.asyncio
    async def test_unknown_coin(self):
        source = CoinGeckoPriceSource(client=mock_client(lambda r: httpx.Response(200, json={})))

        assert await source.get_price("ZZZ") is None

    @pytest.mark.asyncio
    async def test_error_status(self):
        source = CoinGeckoPriceSource(client=mock_client(lambda r: httpx.Response(500)))

        assert await source.get_price("ETH") is None
