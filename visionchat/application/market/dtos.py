"""
Data Transfer Objects for the market application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field

from visionchat.domain.market.entities import (
    Kline,
    MarketSentiment,
    OrderBook,
    PriceTargets,
    TradingSignal,
)


@dataclass(frozen=True)
class SymbolQuery:
    """Input DTO naming one coin, as "BTC" or "BTCUSDT"."""

    symbol: str


@dataclass(frozen=True)
class KlinesQuery:
    symbol: str
    interval: str = "1d"
    limit: int = 7


@dataclass(frozen=True)
class TickerPageQuery:
    """Input DTO for the paginated market table.

    Attributes:
        page: 1-based page number.
        limit: Rows per page.
    """

    page: int = 1
    limit: int = 20


@dataclass(frozen=True)
class TickerRow:
    """One row of the market table.

    Attributes:
        rank: Position by 24h quote volume, starting at 1.
        name: Base asset as listed by the exchange.
        market_cap: Price times 24h base volume.
        sparkline: Last seven daily closes; empty if they could not be fetched.
    """

    rank: int
    symbol: str
    name: str
    last_price: float
    price_change_percent: float
    volume: float
    quote_volume: float
    market_cap: float
    high_24h: float
    low_24h: float
    sparkline: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class TickerPage:
    data: list[TickerRow]
    total_pages: int


@dataclass(frozen=True)
class TechnicalIndicators:
    rsi: float
    sma20: float
    sma50: float
    sma200: float
    macd: float = 0.0
    macd_signal: float = 0.0
    macd_histogram: float = 0.0


@dataclass(frozen=True)
class TechnicalAnalysisResult:
    """Output DTO for the technical analysis of one pair."""

    symbol: str
    price: float
    price_change_24h: float
    volume: float
    market_cap: float
    indicators: TechnicalIndicators
    sentiment: MarketSentiment
    trading_signal: TradingSignal
    support_levels: list[float]
    resistance_levels: list[float]
    price_target: PriceTargets


@dataclass(frozen=True)
class MemeCoinResult:
    """Display-formatted figures for one meme coin."""

    symbol: str
    price: str
    price_change_percent: str
    volume_24h: str


@dataclass(frozen=True)
class CoinDetailResult:
    """Output DTO for the coin detail view.

    Attributes:
        market_cap: 24h quote volume, the only USD figure the exchange gives.
        sentiment_positive: 75 when the 24h change is non-negative, else 25.
    """

    symbol: str
    name: str
    trading_pair: str
    price: float
    price_change_percent_24h: float
    market_cap: float
    volume_24h: float
    high_24h: float
    low_24h: float
    description: str
    sentiment_positive: int
    sentiment_negative: int
    order_book: OrderBook
    candlesticks: list[Kline]
