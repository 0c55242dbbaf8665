"""
Adapter: CryptoCompare news.

Implements NewsPort with the popular-English feed of
`/data/v2/news/`.
"""

import logging
from typing import Any, Optional

import httpx

from visionchat.domain.market.entities import NewsItem
from visionchat.domain.market.errors import MarketDataUnavailableError
from visionchat.domain.market.ports import NewsPort

logger = logging.getLogger(__name__)

SOURCE = "CryptoCompare"


def _to_news_item(raw: dict[str, Any]) -> NewsItem:
    return NewsItem(
        id=str(raw.get("id", "")),
        title=raw.get("title", ""),
        body=raw.get("body", ""),
        source=raw.get("source", ""),
        url=raw.get("url", ""),
        image_url=raw.get("imageurl"),
        published_at=int(raw.get("published_on") or 0),
        categories=raw.get("categories", ""),
    )


class CryptoCompareNewsClient(NewsPort):
    def __init__(
        self,
        url: str = "https://min-api.cryptocompare.com/data/v2/news/",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def get_popular_news(self) -> list[NewsItem]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    self._url, params={"lang": "EN", "sortOrder": "popular"}
                )
                response.raise_for_status()
                items = response.json().get("Data")
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.error("Error fetching crypto news: %s", exc)
            raise MarketDataUnavailableError(SOURCE, "news feed unavailable") from exc

        if not isinstance(items, list):
            raise MarketDataUnavailableError(SOURCE, "news feed carried no items")
        return [_to_news_item(raw) for raw in items]
