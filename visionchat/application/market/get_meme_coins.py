"""
Use case: Quotes for a fixed basket of meme coins.

Input: None
Output: list[MemeCoinResult], in basket order
Side effects: None.
Failure cases: None. Coins that cannot be fetched are left out.
"""

import asyncio
import logging

from visionchat.application.market.dtos import MemeCoinResult
from visionchat.domain.market.entities import QUOTE_ASSET, Ticker, to_trading_pair
from visionchat.domain.market.errors import MarketDomainError
from visionchat.domain.market.ports import ExchangePort

logger = logging.getLogger(__name__)

MEME_COIN_SYMBOLS = ("DOGE", "SHIB", "PEPE", "FLOKI", "BONK")


class GetMemeCoinsUseCase:
    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self) -> list[MemeCoinResult]:
        pairs = [to_trading_pair(symbol)[1] for symbol in MEME_COIN_SYMBOLS]
        results = await asyncio.gather(
            *(self._exchange.get_ticker(pair) for pair in pairs),
            return_exceptions=True,
        )

        coins = []
        for pair, result in zip(pairs, results):
            if isinstance(result, MarketDomainError):
                logger.warning("Skipping %s: %s", pair, result.message)
                continue
            if isinstance(result, BaseException):
                raise result
            coins.append(self._format(result))
        return coins

    @staticmethod
    def _format(ticker: Ticker) -> MemeCoinResult:
        return MemeCoinResult(
            symbol=ticker.symbol.replace(QUOTE_ASSET, ""),
            price=f"{ticker.last_price:.6f}",
            price_change_percent=f"{ticker.price_change_percent:.2f}",
            volume_24h=f"{ticker.volume:.2f}",
        )
