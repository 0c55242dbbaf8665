"""
Domain entities for the market bounded context.

Values mirror what the exchange publishes; prices and volumes are floats
because every consumer of these figures is display or indicator math.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

QUOTE_ASSET = "USDT"


def to_trading_pair(symbol: str) -> tuple[str, str]:
    """Normalise "btc", "BTC" or "BTCUSDT" to ("BTC", "BTCUSDT")."""
    base = symbol.strip().upper()
    if base.endswith(QUOTE_ASSET):
        base = base[: -len(QUOTE_ASSET)]
    return base, f"{base}{QUOTE_ASSET}"


@dataclass(frozen=True)
class Ticker:
    """Rolling 24-hour statistics for one trading pair."""

    symbol: str
    last_price: float
    price_change_percent: float
    volume: float
    quote_volume: float
    high_price: float
    low_price: float

    @property
    def approx_market_cap(self) -> float:
        """Price times 24h base volume, the exchange-only market cap proxy."""
        return self.last_price * self.volume


@dataclass(frozen=True)
class Kline:
    """One candlestick."""

    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class OrderBook:
    """Top of the order book as [price, quantity] string pairs."""

    bids: list[list[str]] = field(default_factory=list)
    asks: list[list[str]] = field(default_factory=list)

    def bid_volume(self) -> float:
        return sum(float(qty) for _, qty in self.bids)

    def ask_volume(self) -> float:
        return sum(float(qty) for _, qty in self.asks)


@dataclass(frozen=True)
class SymbolInfo:
    symbol: str
    base_asset: str
    quote_asset: str


@dataclass(frozen=True)
class NewsItem:
    id: str
    title: str
    body: str
    source: str
    url: str
    image_url: Optional[str]
    published_at: int
    categories: str


class SentimentLabel(Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class SignalAction(Enum):
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class MarketSentiment:
    sentiment: SentimentLabel
    confidence: int
    factors: list[str]


@dataclass(frozen=True)
class TradingSignal:
    signal: SignalAction
    strength: int
    reasoning: str


@dataclass(frozen=True)
class PriceTargets:
    short: float
    medium: float
    long: float


GlobalMarketData = dict[str, Any]
