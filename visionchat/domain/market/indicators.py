"""
Technical indicators and the signals derived from them.

Computes, from a series of closing prices:
- RSI (simple-average variant over the last `period` changes)
- Simple moving averages
- A rule-based sentiment label with confidence and reasons
- A buy/sell/hold signal
- Nearest support / resistance levels
- Short / medium / long price targets

Pure functions over pandas Series. No IO.
"""

import logging
from typing import Sequence

import pandas as pd

from visionchat.domain.market.entities import (
    MarketSentiment,
    PriceTargets,
    SentimentLabel,
    SignalAction,
    TradingSignal,
)

logger = logging.getLogger(__name__)

RSI_PERIOD = 14
RSI_NEUTRAL = 50.0
RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30
STRONG_MOVE_PERCENT = 5
HIGH_VOLUME = 1_000_000
LEVEL_COUNT = 3
TARGET_HORIZONS = {"short": 0.05, "medium": 0.15, "long": 0.30}


def _series(prices: Sequence[float]) -> pd.Series:
    return pd.Series(list(prices), dtype="float64")


def calculate_rsi(prices: Sequence[float], period: int = RSI_PERIOD) -> float:
    """Relative Strength Index of the last `period` price changes.

    Gains and losses are plain means over the window (no Wilder
    smoothing). Too little data gives the neutral 50; a window without
    losses gives 100.
    """
    series = _series(prices)
    if len(series) < period + 1:
        return RSI_NEUTRAL

    changes = series.diff().dropna().tail(period)
    avg_gain = changes.clip(lower=0).sum() / period
    avg_loss = (-changes.clip(upper=0)).sum() / period

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))


def calculate_sma(prices: Sequence[float], period: int) -> float:
    """Mean of the last `period` prices, or the last price if there are fewer."""
    series = _series(prices)
    if series.empty:
        return 0.0
    if len(series) < period:
        return float(series.iloc[-1])
    return float(series.tail(period).mean())


def analyze_sentiment(price_change: float, volume: float, rsi: float) -> MarketSentiment:
    """Score momentum, RSI zone and volume into a labelled sentiment.

    Args:
        price_change: 24h price change in percent.
        volume: 24h base-asset volume.
        rsi: Current RSI value.
    """
    factors: list[str] = []
    confidence = 0

    if price_change > STRONG_MOVE_PERCENT:
        factors.append("Strong positive price momentum")
        confidence += 30
    elif price_change > 0:
        factors.append("Positive price momentum")
        confidence += 15
    elif price_change < -STRONG_MOVE_PERCENT:
        factors.append("Strong negative price momentum")
        confidence += 30
    elif price_change < 0:
        factors.append("Negative price momentum")
        confidence += 15

    if rsi > RSI_OVERBOUGHT:
        factors.append("RSI indicates overbought conditions")
        confidence += 20
    elif rsi < RSI_OVERSOLD:
        factors.append("RSI indicates oversold conditions")
        confidence += 20
    elif rsi > 50:
        factors.append("RSI shows bullish bias")
        confidence += 10
    else:
        factors.append("RSI shows bearish bias")
        confidence += 10

    if volume > HIGH_VOLUME:
        factors.append("High trading volume confirms trend")
        confidence += 15

    if price_change > 0 and rsi < RSI_OVERBOUGHT:
        label = SentimentLabel.BULLISH
    elif price_change < 0 and rsi > RSI_OVERSOLD:
        label = SentimentLabel.BEARISH
    else:
        label = SentimentLabel.NEUTRAL

    return MarketSentiment(sentiment=label, confidence=min(confidence, 100), factors=factors)


def generate_trading_signal(
    rsi: float,
    sma20: float,
    sma50: float,
    sentiment: MarketSentiment,
    price_change: float,
) -> TradingSignal:
    """Combine RSI, trend (SMA20 vs SMA50) and sentiment into an action."""
    if rsi < RSI_OVERSOLD and sentiment.sentiment is SentimentLabel.BULLISH and sma20 > sma50:
        return TradingSignal(
            SignalAction.BUY, 80, "Oversold RSI with bullish sentiment and upward trend"
        )
    if price_change > 0 and rsi < 50 and sentiment.confidence > 70:
        return TradingSignal(SignalAction.BUY, 60, "Positive momentum with strong sentiment")
    if rsi > RSI_OVERBOUGHT and sentiment.sentiment is SentimentLabel.BEARISH and sma20 < sma50:
        return TradingSignal(
            SignalAction.SELL, 80, "Overbought RSI with bearish sentiment and downward trend"
        )
    if price_change < -STRONG_MOVE_PERCENT and rsi > 50 and sentiment.confidence > 70:
        return TradingSignal(
            SignalAction.SELL, 60, "Strong negative momentum with bearish sentiment"
        )
    return TradingSignal(SignalAction.HOLD, 40, "Mixed signals, sideways movement expected")


def calculate_support_resistance(
    prices: Sequence[float],
) -> tuple[list[float], list[float]]:
    """Nearest price levels around the last price.

    Returns:
        (support, resistance): the three highest prices below the last
        price and the three lowest above it, both ascending.
    """
    series = _series(prices)
    if series.empty:
        return [], []
    current = series.iloc[-1]
    ordered = series.sort_values(ignore_index=True)
    support = ordered[ordered < current].tail(LEVEL_COUNT).tolist()
    resistance = ordered[ordered > current].head(LEVEL_COUNT).tolist()
    return support, resistance


def generate_price_targets(current_price: float, sentiment: MarketSentiment) -> PriceTargets:
    """Project the price up (bullish) or down (anything else), scaled by confidence."""
    multiplier = 1 if sentiment.sentiment is SentimentLabel.BULLISH else -1
    confidence = sentiment.confidence / 100
    targets = {
        horizon: current_price * (1 + multiplier * move * confidence)
        for horizon, move in TARGET_HORIZONS.items()
    }
    return PriceTargets(**targets)
