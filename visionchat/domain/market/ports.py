"""
Port interfaces (ABCs) for the market bounded context.

All market ports are asynchronous: use cases fan out several upstream
calls at once with asyncio.gather.
"""

from abc import ABC, abstractmethod

from visionchat.domain.market.entities import (
    GlobalMarketData,
    Kline,
    NewsItem,
    OrderBook,
    SymbolInfo,
    Ticker,
)


class ExchangePort(ABC):
    """Port for public spot-exchange market data."""

    @abstractmethod
    async def get_all_tickers(self) -> list[Ticker]:
        raise NotImplementedError

    @abstractmethod
    async def get_ticker(self, pair: str) -> Ticker:
        """Raises SymbolNotFoundError for unknown pairs."""
        raise NotImplementedError

    @abstractmethod
    async def get_symbols(self) -> dict[str, SymbolInfo]:
        """Return exchange symbol metadata keyed by pair."""
        raise NotImplementedError

    @abstractmethod
    async def get_klines(self, pair: str, interval: str = "1d", limit: int = 7) -> list[Kline]:
        raise NotImplementedError

    @abstractmethod
    async def get_order_book(self, pair: str, limit: int = 10) -> OrderBook:
        raise NotImplementedError


class GlobalMarketPort(ABC):
    """Port for market-wide figures (total cap, dominance, ...)."""

    @abstractmethod
    async def get_global(self) -> GlobalMarketData:
        raise NotImplementedError


class NewsPort(ABC):
    """Port for crypto news headlines."""

    @abstractmethod
    async def get_popular_news(self) -> list[NewsItem]:
        raise NotImplementedError
