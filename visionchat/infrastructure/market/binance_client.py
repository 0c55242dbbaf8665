"""
Adapter: Binance public spot market data.

Implements ExchangePort over the unauthenticated `/api/v3` REST
endpoints with httpx: 24h tickers, exchange info, klines and depth.

Binance sends numbers as strings; they are converted to floats here,
except order-book levels which are passed through as sent.
"""

import logging
from typing import Any, Optional

import httpx

from visionchat.domain.market.entities import Kline, OrderBook, SymbolInfo, Ticker
from visionchat.domain.market.errors import MarketDataUnavailableError, SymbolNotFoundError
from visionchat.domain.market.ports import ExchangePort

logger = logging.getLogger(__name__)

SOURCE = "Binance"


def _to_ticker(raw: dict[str, Any]) -> Ticker:
    return Ticker(
        symbol=raw["symbol"],
        last_price=float(raw["lastPrice"]),
        price_change_percent=float(raw["priceChangePercent"]),
        volume=float(raw["volume"]),
        quote_volume=float(raw["quoteVolume"]),
        high_price=float(raw["highPrice"]),
        low_price=float(raw["lowPrice"]),
    )


def _to_kline(raw: list[Any]) -> Kline:
    return Kline(
        time=int(raw[0]),
        open=float(raw[1]),
        high=float(raw[2]),
        low=float(raw[3]),
        close=float(raw[4]),
        volume=float(raw[5]) if len(raw) > 5 else 0.0,
    )


class BinanceClient(ExchangePort):
    """Async client for Binance public market endpoints.

    Args:
        base_url: API root including `/api/v3`.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass a MockTransport).
    """

    def __init__(
        self,
        base_url: str = "https://api.binance.com/api/v3",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                return await client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.error("Binance request %s failed: %s", path, type(exc).__name__)
            raise MarketDataUnavailableError(SOURCE, str(exc) or type(exc).__name__) from exc

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        response = await self._get(path, params)
        if response.is_error:
            raise MarketDataUnavailableError(SOURCE, f"{path} returned {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise MarketDataUnavailableError(SOURCE, f"{path} returned malformed JSON") from exc

    async def get_all_tickers(self) -> list[Ticker]:
        data = await self._get_json("/ticker/24hr")
        return [_to_ticker(raw) for raw in data]

    async def get_ticker(self, pair: str) -> Ticker:
        response = await self._get("/ticker/24hr", {"symbol": pair})
        if response.is_error:
            logger.info("Binance has no ticker for %s (status %d)", pair, response.status_code)
            raise SymbolNotFoundError(pair)
        try:
            return _to_ticker(response.json())
        except (ValueError, KeyError) as exc:
            raise MarketDataUnavailableError(SOURCE, f"malformed ticker for {pair}") from exc

    async def get_symbols(self) -> dict[str, SymbolInfo]:
        data = await self._get_json("/exchangeInfo")
        return {
            raw["symbol"]: SymbolInfo(
                symbol=raw["symbol"],
                base_asset=raw.get("baseAsset", ""),
                quote_asset=raw.get("quoteAsset", ""),
            )
            for raw in data.get("symbols", [])
        }

    async def get_klines(self, pair: str, interval: str = "1d", limit: int = 7) -> list[Kline]:
        data = await self._get_json(
            "/klines", {"symbol": pair, "interval": interval, "limit": limit}
        )
        return [_to_kline(raw) for raw in data]

    async def get_order_book(self, pair: str, limit: int = 10) -> OrderBook:
        data = await self._get_json("/depth", {"symbol": pair, "limit": limit})
        bids = data.get("bids") if isinstance(data.get("bids"), list) else []
        asks = data.get("asks") if isinstance(data.get("asks"), list) else []
        return OrderBook(bids=bids[:limit], asks=asks[:limit])
