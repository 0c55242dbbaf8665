"""
Use case: Paginated market table with 7-day sparklines.

Input: TickerPageQuery (page, limit)
Output: TickerPage
Side effects: None.
Failure cases: MarketDataUnavailableError. A failing sparkline fetch
    only empties that row's sparkline.
"""

import asyncio
import logging
import math

from visionchat.application.market.dtos import TickerPage, TickerPageQuery, TickerRow
from visionchat.domain.market.aggregates import rank_by_quote_volume
from visionchat.domain.market.entities import SymbolInfo, Ticker
from visionchat.domain.market.errors import MarketDomainError
from visionchat.domain.market.ports import ExchangePort

logger = logging.getLogger(__name__)

SPARKLINE_INTERVAL = "1d"
SPARKLINE_POINTS = 7


class ListTickersUseCase:
    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self, query: TickerPageQuery) -> TickerPage:
        tickers, symbols = await asyncio.gather(
            self._exchange.get_all_tickers(),
            self._exchange.get_symbols(),
        )
        ranked = rank_by_quote_volume(tickers)

        start = (query.page - 1) * query.limit
        page = ranked[start : start + query.limit]
        sparklines = await asyncio.gather(*(self._sparkline(t.symbol) for t in page))

        rows = [
            self._row(start + offset + 1, ticker, symbols.get(ticker.symbol), sparkline)
            for offset, (ticker, sparkline) in enumerate(zip(page, sparklines))
        ]
        return TickerPage(data=rows, total_pages=math.ceil(len(ranked) / query.limit))

    async def _sparkline(self, pair: str) -> list[float]:
        try:
            klines = await self._exchange.get_klines(
                pair, interval=SPARKLINE_INTERVAL, limit=SPARKLINE_POINTS
            )
        except MarketDomainError as exc:
            logger.warning("Sparkline unavailable for %s: %s", pair, exc.message)
            return []
        return [k.close for k in klines]

    @staticmethod
    def _row(
        rank: int, ticker: Ticker, info: SymbolInfo | None, sparkline: list[float]
    ) -> TickerRow:
        return TickerRow(
            rank=rank,
            symbol=ticker.symbol,
            name=info.base_asset if info else "",
            last_price=ticker.last_price,
            price_change_percent=ticker.price_change_percent,
            volume=ticker.volume,
            quote_volume=ticker.quote_volume,
            market_cap=ticker.approx_market_cap,
            high_24h=ticker.high_price,
            low_24h=ticker.low_price,
            sparkline=sparkline,
        )
