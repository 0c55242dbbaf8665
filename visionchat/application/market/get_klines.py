"""
Use case: Candlesticks for one pair.

Input: KlinesQuery (symbol, interval, limit)
Output: list[Kline]
Side effects: None.
Failure cases: MarketDataUnavailableError.
"""

from visionchat.application.market.dtos import KlinesQuery
from visionchat.domain.market.entities import Kline, to_trading_pair
from visionchat.domain.market.ports import ExchangePort


class GetKlinesUseCase:
    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self, query: KlinesQuery) -> list[Kline]:
        _, pair = to_trading_pair(query.symbol)
        return await self._exchange.get_klines(pair, interval=query.interval, limit=query.limit)
