"""
Use case: Gainers and losers among the 20 most traded USDT pairs.

Input: None
Output: MarketOverview
Side effects: None.
Failure cases: MarketDataUnavailableError.
"""

from visionchat.domain.market.aggregates import MarketOverview, compute_market_overview
from visionchat.domain.market.ports import ExchangePort


class GetMarketOverviewUseCase:
    def __init__(self, exchange: ExchangePort) -> None:
        self._exchange = exchange

    async def execute(self) -> MarketOverview:
        return compute_market_overview(await self._exchange.get_all_tickers())
