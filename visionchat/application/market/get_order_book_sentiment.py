"""
Use case: Positive / negative sentiment from momentum and order book.

Input: SymbolQuery
Output: OrderBookSentiment
Side effects: None.
Failure cases: SymbolNotFoundError, MarketDataUnavailableError.
"""

import asyncio

from visionchat.application.market.dtos import SymbolQuery
from visionchat.domain.market.entities import to_trading_pair
from visionchat.domain.market.ports import ExchangePort
from visionchat.domain.market.sentiment import OrderBookSentiment, score_order_book

ORDER_BOOK_DEPTH = 10


class GetOrderBookSentimentUseCase:
    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self, query: SymbolQuery) -> OrderBookSentiment:
        _, pair = to_trading_pair(query.symbol)
        ticker, book = await asyncio.gather(
            self._exchange.get_ticker(pair),
            self._exchange.get_order_book(pair, limit=ORDER_BOOK_DEPTH),
        )
        return score_order_book(ticker.price_change_percent, ticker.volume, book)
