"""
Use case: Detail view of one coin.

Input: SymbolQuery
Output: CoinDetailResult
Side effects: None.
Failure cases: SymbolNotFoundError, MarketDataUnavailableError.
"""

import asyncio

from visionchat.application.market.dtos import CoinDetailResult, SymbolQuery
from visionchat.domain.market.entities import to_trading_pair
from visionchat.domain.market.ports import ExchangePort

DETAIL_BOOK_DEPTH = 5
DETAIL_CANDLES = 7

COIN_NAMES = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "BNB": "Binance Coin",
    "SOL": "Solana",
    "XRP": "Ripple",
    "ADA": "Cardano",
    "DOGE": "Dogecoin",
    "DOT": "Polkadot",
    "MATIC": "Polygon",
    "LINK": "Chainlink",
}


class GetCoinDetailUseCase:
    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self, query: SymbolQuery) -> CoinDetailResult:
        base, pair = to_trading_pair(query.symbol)
        # the ticker goes first so an unknown pair fails as not-found
        ticker = await self._exchange.get_ticker(pair)
        book, klines = await asyncio.gather(
            self._exchange.get_order_book(pair, limit=DETAIL_BOOK_DEPTH),
            self._exchange.get_klines(pair, interval="1d", limit=DETAIL_CANDLES),
        )

        rising = ticker.price_change_percent >= 0
        return CoinDetailResult(
            symbol=base,
            name=COIN_NAMES.get(base, base),
            trading_pair=pair,
            price=ticker.last_price,
            price_change_percent_24h=ticker.price_change_percent,
            market_cap=ticker.quote_volume,
            volume_24h=ticker.volume,
            high_24h=ticker.high_price,
            low_24h=ticker.low_price,
            description=f"{base}/USDT trading pair on Binance",
            sentiment_positive=75 if rising else 25,
            sentiment_negative=25 if rising else 75,
            order_book=book,
            candlesticks=klines,
        )
