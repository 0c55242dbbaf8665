"""
Use case: Exchange-wide market statistics.

Input: None
Output: MarketStats
Side effects: None.
Failure cases: MarketDataUnavailableError, SymbolNotFoundError.
"""

import asyncio
import logging

from visionchat.domain.market.aggregates import MarketStats, compute_market_stats
from visionchat.domain.market.ports import ExchangePort

logger = logging.getLogger(__name__)


class GetMarketStatsUseCase:
    """Fetches all tickers plus BTC and ETH concurrently and aggregates them."""

    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self) -> MarketStats:
        tickers, btc, eth = await asyncio.gather(
            self._exchange.get_all_tickers(),
            self._exchange.get_ticker("BTCUSDT"),
            self._exchange.get_ticker("ETHUSDT"),
        )
        stats = compute_market_stats(tickers, btc, eth)
        logger.info("Market stats over %d USDT pairs", stats.cryptos)
        return stats
