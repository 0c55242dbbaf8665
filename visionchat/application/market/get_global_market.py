"""
Use case: Market-wide figures (total cap, dominance, volumes).

Input: None
Output: GlobalMarketData, as published upstream
Side effects: None (caching is the adapter's concern).
Failure cases: UpstreamRateLimitedError, MarketDataUnavailableError.
"""

from visionchat.domain.market.entities import GlobalMarketData
from visionchat.domain.market.ports import GlobalMarketPort


class GetGlobalMarketUseCase:
    def __init__(self, global_port: GlobalMarketPort) -> None:
        self._global = global_port

    async def execute(self) -> GlobalMarketData:
        return await self._global.get_global()
