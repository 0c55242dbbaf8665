"""
Pydantic schemas for market API responses.

Market endpoints are read-only; query and path parameters are
validated in the router signatures.
"""

from typing import Optional

from pydantic import BaseModel

SYMBOL_PATTERN = r"^[A-Za-z0-9]{1,20}$"
INTERVAL_PATTERN = r"^(1s|1m|3m|5m|15m|30m|1h|2h|4h|6h|8h|12h|1d|3d|1w|1M)$"


class DominanceSchema(BaseModel):
    btc: float
    eth: float


class MarketStatsResponse(BaseModel):
    cryptos: int
    exchanges: int
    market_cap: float
    volume_24h: float
    dominance: DominanceSchema
    btc_price: float
    eth_price: float
    btc_change_24h: float
    eth_change_24h: float


class TickerRowSchema(BaseModel):
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
    sparkline_in_7d: list[float]


class TickerPageResponse(BaseModel):
    data: list[TickerRowSchema]
    total_pages: int


class KlineSchema(BaseModel):
    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float


class MacdSchema(BaseModel):
    macd: float
    signal: float
    histogram: float


class MovingAveragesSchema(BaseModel):
    sma20: float
    sma50: float
    sma200: float


class TechnicalIndicatorsSchema(BaseModel):
    rsi: float
    macd: MacdSchema
    moving_averages: MovingAveragesSchema


class SentimentSchema(BaseModel):
    sentiment: str
    confidence: int
    factors: list[str]


class TradingSignalSchema(BaseModel):
    signal: str
    strength: int
    reasoning: str


class PriceTargetSchema(BaseModel):
    short: float
    medium: float
    long: float


class TechnicalAnalysisResponse(BaseModel):
    """Response schema for the technical analysis of one pair."""

    symbol: str
    price: float
    price_change_24h: float
    volume: float
    market_cap: float
    technical_indicators: TechnicalIndicatorsSchema
    sentiment: SentimentSchema
    trading_signal: TradingSignalSchema
    support_levels: list[float]
    resistance_levels: list[float]
    price_target: PriceTargetSchema


class MoverSchema(BaseModel):
    symbol: str
    price: float
    change: float


class MarketOverviewResponse(BaseModel):
    total_markets: int
    gainers: int
    losers: int
    top_gainers: list[MoverSchema]
    top_losers: list[MoverSchema]
    avg_change: float
    total_volume: float


class SentimentMetricsSchema(BaseModel):
    price_change_24h: float
    volume_24h: float
    buy_pressure: float
    sell_pressure: float


class OrderBookSentimentResponse(BaseModel):
    positive: int
    negative: int
    metrics: SentimentMetricsSchema


class MemeCoinSchema(BaseModel):
    symbol: str
    price: str
    price_change_percent: str
    volume_24h: str


class MemeCoinsResponse(BaseModel):
    data: list[MemeCoinSchema]


class OrderBookSchema(BaseModel):
    bids: list[list[str]]
    asks: list[list[str]]


class PositiveNegativeSchema(BaseModel):
    positive: int
    negative: int


class CoinDetailResponse(BaseModel):
    """Response schema for the coin detail view."""

    id: str
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
    sentiment: PositiveNegativeSchema
    order_book: OrderBookSchema
    candlesticks: list[KlineSchema]


class NewsItemSchema(BaseModel):
    id: str
    title: str
    body: str
    source: str
    url: str
    image_url: Optional[str] = None
    published_at: int
    categories: str


class NewsFeedResponse(BaseModel):
    data: list[NewsItemSchema]
