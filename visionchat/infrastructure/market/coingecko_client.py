"""
Adapter: CoinGecko global market figures.

Implements GlobalMarketPort over `GET /global`, with an in-process
cache shared by every caller of the same client instance:

- a fresh entry (younger than `cache_seconds`) is served without a request;
- on HTTP 429 the cached entry is served however old it is, otherwise
  UpstreamRateLimitedError;
- on any other failure the cached entry is served, otherwise
  MarketDataUnavailableError.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

import httpx

from visionchat.domain.market.entities import GlobalMarketData
from visionchat.domain.market.errors import (
    MarketDataUnavailableError,
    UpstreamRateLimitedError,
)
from visionchat.domain.market.ports import GlobalMarketPort

logger = logging.getLogger(__name__)

SOURCE = "CoinGecko"


class CoinGeckoGlobalClient(GlobalMarketPort):
    """Cached client for CoinGecko's `/global` endpoint."""

    def __init__(
        self,
        base_url: str = "https://api.coingecko.com/api/v3",
        timeout: float = 5.0,
        cache_seconds: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/global"
        self._timeout = timeout
        self._cache_seconds = cache_seconds
        self._transport = transport
        self._clock = clock
        self._cached: Optional[GlobalMarketData] = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return (
            self._cached is not None
            and self._clock() - self._fetched_at < self._cache_seconds
        )

    async def get_global(self) -> GlobalMarketData:
        if self._is_fresh():
            return self._cached

        async with self._lock:
            if self._is_fresh():
                return self._cached
            return await self._refresh()

    async def _refresh(self) -> GlobalMarketData:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._url)
        except httpx.HTTPError as exc:
            logger.error("CoinGecko request failed: %s", type(exc).__name__)
            return self._stale_or_raise(MarketDataUnavailableError(SOURCE, type(exc).__name__))

        if response.status_code == 429:
            logger.warning("CoinGecko rate limit hit")
            return self._stale_or_raise(UpstreamRateLimitedError(SOURCE))
        if response.is_error:
            logger.error("CoinGecko returned status %d", response.status_code)
            return self._stale_or_raise(
                MarketDataUnavailableError(SOURCE, f"HTTP {response.status_code}")
            )

        try:
            data = response.json()
        except ValueError:
            return self._stale_or_raise(MarketDataUnavailableError(SOURCE, "malformed JSON"))

        self._cached = data
        self._fetched_at = self._clock()
        return data

    def _stale_or_raise(self, error: Exception) -> GlobalMarketData:
        if self._cached is not None:
            logger.info("Serving cached global market data")
            return self._cached
        raise error
