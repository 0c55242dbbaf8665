"""
Use case: Latest popular crypto headlines.

Input: None
Output: list[NewsItem] (at most NEWS_ITEMS)
Side effects: None.
Failure cases: MarketDataUnavailableError.
"""

from visionchat.domain.market.entities import NewsItem
from visionchat.domain.market.ports import NewsPort

NEWS_ITEMS = 3


class GetNewsFeedUseCase:
    def __init__(self, news_port: NewsPort) -> None:
        self._news = news_port

    async def execute(self) -> list[NewsItem]:
        items = await self._news.get_popular_news()
        return items[:NEWS_ITEMS]
