"""
Tests for the market application layer (use cases) against an
in-memory exchange.
"""

import pytest

from fakes import FakeExchange, make_klines, make_ticker
from visionchat.application.market.dtos import KlinesQuery, SymbolQuery, TickerPageQuery
from visionchat.application.market.get_coin_detail import GetCoinDetailUseCase
from visionchat.application.market.get_global_market import GetGlobalMarketUseCase
from visionchat.application.market.get_klines import GetKlinesUseCase
from visionchat.application.market.get_market_overview import GetMarketOverviewUseCase
from visionchat.application.market.get_market_stats import GetMarketStatsUseCase
from visionchat.application.market.get_meme_coins import GetMemeCoinsUseCase
from visionchat.application.market.get_news_feed import GetNewsFeedUseCase
from visionchat.application.market.get_order_book_sentiment import (
    GetOrderBookSentimentUseCase,
)
from visionchat.application.market.get_technical_analysis import GetTechnicalAnalysisUseCase
from visionchat.application.market.list_tickers import ListTickersUseCase
from visionchat.domain.market.entities import (
    NewsItem,
    OrderBook,
    SentimentLabel,
    SignalAction,
    Ticker,
)
from visionchat.domain.market.errors import SymbolNotFoundError
from visionchat.domain.market.ports import GlobalMarketPort, NewsPort


class StaticGlobalMarket(GlobalMarketPort):
    async def get_global(self):
        return {"data": {"active_cryptocurrencies": 10000}}


class StaticNews(NewsPort):
    def __init__(self, count: int) -> None:
        self.count = count

    async def get_popular_news(self) -> list[NewsItem]:
        return [
            NewsItem(
                id=str(i),
                title=f"Headline {i}",
                body="",
                source="test",
                url=f"https://news.test/{i}",
                image_url=None,
                published_at=1700000000 + i,
                categories="BTC",
            )
            for i in range(self.count)
        ]


class BrokenExchange(FakeExchange):
    """Exchange whose ticker lookups fail with a programming error."""

    async def get_ticker(self, pair: str) -> Ticker:
        raise RuntimeError("bug")


@pytest.fixture
def exchange() -> FakeExchange:
    return FakeExchange(
        tickers=[
            make_ticker("BTCUSDT", price=100, volume=10, change=2),
            make_ticker("ETHUSDT", price=10, volume=50, change=-1),
            make_ticker("SOLUSDT", price=5, volume=20, change=4),
            make_ticker("ETHBTC", price=0.05, volume=1000),
        ],
        klines={
            "BTCUSDT": make_klines([float(p) for p in range(1, 201)]),
            "ETHUSDT": make_klines([1.0, 2.0, 3.0]),
        },
        books={"BTCUSDT": OrderBook(bids=[["99", "3"]], asks=[["101", "1"]])},
        failing_klines=("SOLUSDT",),
    )


class TestMarketStats:
    @pytest.mark.asyncio
    async def test_stats(self, exchange) -> None:
        stats = await GetMarketStatsUseCase(exchange).execute()
        assert stats.cryptos == 3
        assert stats.market_cap == pytest.approx(1600)
        assert stats.btc_dominance == pytest.approx(62.5)
        assert stats.eth_price == 10


class TestListTickers:
    """Tests for the paginated market table."""

    @pytest.mark.asyncio
    async def test_first_page(self, exchange) -> None:
        page = await ListTickersUseCase(exchange).execute(TickerPageQuery(page=1, limit=2))
        assert page.total_pages == 2
        assert [(r.rank, r.symbol, r.name) for r in page.data] == [
            (1, "BTCUSDT", "BTC"),
            (2, "ETHUSDT", "ETH"),
        ]
        assert page.data[0].sparkline == [194.0, 195.0, 196.0, 197.0, 198.0, 199.0, 200.0]
        assert page.data[1].market_cap == 500
        assert ("BTCUSDT", "1d", 7) in exchange.kline_requests

    @pytest.mark.asyncio
    async def test_failing_sparkline_is_empty(self, exchange) -> None:
        """One bad sparkline does not fail the page."""
        page = await ListTickersUseCase(exchange).execute(TickerPageQuery(page=2, limit=2))
        assert [(r.rank, r.symbol) for r in page.data] == [(3, "SOLUSDT")]
        assert page.data[0].sparkline == []

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, exchange) -> None:
        page = await ListTickersUseCase(exchange).execute(TickerPageQuery(page=9, limit=2))
        assert page.data == []
        assert page.total_pages == 2


class TestKlines:
    @pytest.mark.asyncio
    async def test_symbol_is_normalised(self, exchange) -> None:
        klines = await GetKlinesUseCase(exchange).execute(
            KlinesQuery(symbol="eth", interval="4h", limit=2)
        )
        assert [k.close for k in klines] == [2.0, 3.0]
        assert exchange.kline_requests == [("ETHUSDT", "4h", 2)]


class TestTechnicalAnalysis:
    """Tests for the indicator pipeline over hourly closes."""

    @pytest.mark.asyncio
    async def test_steady_uptrend(self, exchange) -> None:
        result = await GetTechnicalAnalysisUseCase(exchange).execute(SymbolQuery("btc"))
        assert exchange.kline_requests == [("BTCUSDT", "1h", 200)]
        assert result.symbol == "BTCUSDT"
        assert result.price == 100
        assert result.market_cap == 0.0

        indicators = result.indicators
        assert indicators.rsi == 100.0
        assert indicators.sma20 == pytest.approx(190.5)
        assert indicators.sma50 == pytest.approx(175.5)
        assert indicators.sma200 == pytest.approx(100.5)
        assert (indicators.macd, indicators.macd_signal, indicators.macd_histogram) == (0, 0, 0)

        assert result.sentiment.sentiment is SentimentLabel.NEUTRAL
        assert result.trading_signal.signal is SignalAction.HOLD
        assert result.support_levels == [197.0, 198.0, 199.0]
        assert result.resistance_levels == []
        assert result.price_target.short < result.price

    @pytest.mark.asyncio
    async def test_unknown_symbol(self, exchange) -> None:
        with pytest.raises(SymbolNotFoundError):
            await GetTechnicalAnalysisUseCase(exchange).execute(SymbolQuery("NOPE"))


class TestOverviewAndSentiment:
    @pytest.mark.asyncio
    async def test_overview(self, exchange) -> None:
        overview = await GetMarketOverviewUseCase(exchange).execute()
        assert overview.total_markets == 3
        assert overview.gainers == 2
        assert overview.losers == 1
        assert overview.top_gainers[0].symbol == "SOLUSDT"

    @pytest.mark.asyncio
    async def test_order_book_sentiment(self, exchange) -> None:
        result = await GetOrderBookSentimentUseCase(exchange).execute(SymbolQuery("BTCUSDT"))
        assert exchange.book_requests == [("BTCUSDT", 10)]
        # 50 + 4 (change) + 6.25 (pressure)
        assert (result.positive, result.negative) == (60, 40)


class TestMemeCoins:
    """Tests for the meme-coin basket."""

    @pytest.mark.asyncio
    async def test_missing_coins_are_skipped(self) -> None:
        exchange = FakeExchange(
            tickers=[
                make_ticker("PEPEUSDT", price=0.0000123456, change=-3.456, volume=1e9),
                make_ticker("DOGEUSDT", price=0.123456789, change=1.234, volume=10),
            ]
        )
        coins = await GetMemeCoinsUseCase(exchange).execute()
        assert [c.symbol for c in coins] == ["DOGE", "PEPE"]
        assert coins[0].price == "0.123457"
        assert coins[0].price_change_percent == "1.23"
        assert coins[0].volume_24h == "10.00"
        assert coins[1].price == "0.000012"
        assert coins[1].price_change_percent == "-3.46"

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self) -> None:
        with pytest.raises(RuntimeError):
            await GetMemeCoinsUseCase(BrokenExchange()).execute()


class TestCoinDetail:
    """Tests for the coin detail view."""

    @pytest.mark.asyncio
    async def test_known_coin(self, exchange) -> None:
        result = await GetCoinDetailUseCase(exchange).execute(SymbolQuery("btc"))
        assert result.symbol == "BTC"
        assert result.name == "Bitcoin"
        assert result.trading_pair == "BTCUSDT"
        assert result.market_cap == 1000
        assert result.description == "BTC/USDT trading pair on Binance"
        assert (result.sentiment_positive, result.sentiment_negative) == (75, 25)
        assert len(result.candlesticks) == 7
        assert exchange.book_requests == [("BTCUSDT", 5)]
        assert ("BTCUSDT", "1d", 7) in exchange.kline_requests

    @pytest.mark.asyncio
    async def test_falling_coin(self, exchange) -> None:
        result = await GetCoinDetailUseCase(exchange).execute(SymbolQuery("ETH"))
        assert result.name == "Ethereum"
        assert (result.sentiment_positive, result.sentiment_negative) == (25, 75)

    @pytest.mark.asyncio
    async def test_unlisted_name_falls_back_to_symbol(self) -> None:
        exchange = FakeExchange(tickers=[make_ticker("PEPEUSDT", price=0.00001)])
        result = await GetCoinDetailUseCase(exchange).execute(SymbolQuery("pepe"))
        assert result.name == "PEPE"
        assert result.candlesticks == []

    @pytest.mark.asyncio
    async def test_unknown_coin_fetches_nothing_else(self, exchange) -> None:
        with pytest.raises(SymbolNotFoundError):
            await GetCoinDetailUseCase(exchange).execute(SymbolQuery("NOPE"))
        assert exchange.book_requests == []
        assert exchange.kline_requests == []


class TestGlobalAndNews:
    @pytest.mark.asyncio
    async def test_global_passthrough(self) -> None:
        data = await GetGlobalMarketUseCase(StaticGlobalMarket()).execute()
        assert data["data"]["active_cryptocurrencies"] == 10000

    @pytest.mark.asyncio
    async def test_news_is_capped(self) -> None:
        items = await GetNewsFeedUseCase(StaticNews(count=5)).execute()
        assert [i.title for i in items] == ["Headline 0", "Headline 1", "Headline 2"]
