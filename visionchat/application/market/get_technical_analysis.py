"""
Use case: Technical analysis of one pair.

Input: SymbolQuery
Output: TechnicalAnalysisResult
Side effects: None.
Failure cases: SymbolNotFoundError, MarketDataUnavailableError.

Uses 200 hourly closes for RSI(14), SMA 20/50/200 and support /
resistance, and the 24h ticker for momentum and volume. MACD is not
computed and reported as zeros; market cap is not known here and is 0.
"""

import asyncio
import logging

from visionchat.application.market.dtos import (
    SymbolQuery,
    TechnicalAnalysisResult,
    TechnicalIndicators,
)
from visionchat.domain.market.entities import to_trading_pair
from visionchat.domain.market.indicators import (
    analyze_sentiment,
    calculate_rsi,
    calculate_sma,
    calculate_support_resistance,
    generate_price_targets,
    generate_trading_signal,
)
from visionchat.domain.market.ports import ExchangePort

logger = logging.getLogger(__name__)

ANALYSIS_INTERVAL = "1h"
ANALYSIS_CANDLES = 200


class GetTechnicalAnalysisUseCase:
    """Runs the indicator pipeline over recent hourly closes."""

    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self, query: SymbolQuery) -> TechnicalAnalysisResult:
        """Analyse one pair.

        Args:
            query: The coin, with or without the USDT suffix.

        Returns:
            Indicators, sentiment, signal, levels and targets.
        """
        _, pair = to_trading_pair(query.symbol)
        klines, ticker = await asyncio.gather(
            self._exchange.get_klines(pair, interval=ANALYSIS_INTERVAL, limit=ANALYSIS_CANDLES),
            self._exchange.get_ticker(pair),
        )
        prices = [k.close for k in klines]

        indicators = TechnicalIndicators(
            rsi=calculate_rsi(prices),
            sma20=calculate_sma(prices, 20),
            sma50=calculate_sma(prices, 50),
            sma200=calculate_sma(prices, 200),
        )
        sentiment = analyze_sentiment(ticker.price_change_percent, ticker.volume, indicators.rsi)
        signal = generate_trading_signal(
            indicators.rsi,
            indicators.sma20,
            indicators.sma50,
            sentiment,
            ticker.price_change_percent,
        )
        support, resistance = calculate_support_resistance(prices)

        logger.info(
            "Technical analysis for %s: rsi=%.2f sentiment=%s signal=%s",
            pair,
            indicators.rsi,
            sentiment.sentiment.value,
            signal.signal.value,
        )
        return TechnicalAnalysisResult(
            symbol=pair,
            price=ticker.last_price,
            price_change_24h=ticker.price_change_percent,
            volume=ticker.volume,
            market_cap=0.0,
            indicators=indicators,
            sentiment=sentiment,
            trading_signal=signal,
            support_levels=support,
            resistance_levels=resistance,
            price_target=generate_price_targets(ticker.last_price, sentiment),
        )
