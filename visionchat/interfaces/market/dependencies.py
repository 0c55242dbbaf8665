"""
Dependency injection for the market bounded context.

Upstream clients are process-wide singletons so that the global
market cache is shared by every request.
"""

from functools import lru_cache

from fastapi import Depends

from visionchat.application.market.get_coin_detail import GetCoinDetailUseCase
from visionchat.application.market.get_global_market import GetGlobalMarketUseCase
from visionchat.application.market.get_klines import GetKlinesUseCase
from visionchat.application.market.get_market_overview import GetMarketOverviewUseCase
from visionchat.application.market.get_market_stats import GetMarketStatsUseCase
from visionchat.application.market.get_meme_coins import GetMemeCoinsUseCase
from visionchat.application.market.get_news_feed import GetNewsFeedUseCase
from visionchat.application.market.get_order_book_sentiment import (
    GetOrderBookSentimentUseCase,
)
from visionchat.application.market.get_technical_analysis import (
    GetTechnicalAnalysisUseCase,
)
from visionchat.application.market.list_tickers import ListTickersUseCase
from visionchat.core.config import settings
from visionchat.domain.market.ports import ExchangePort, GlobalMarketPort, NewsPort
from visionchat.infrastructure.market.binance_client import BinanceClient
from visionchat.infrastructure.market.coingecko_client import CoinGeckoGlobalClient
from visionchat.infrastructure.market.cryptocompare_news_client import (
    CryptoCompareNewsClient,
)


@lru_cache(maxsize=1)
def get_exchange() -> ExchangePort:
    return BinanceClient(
        base_url=settings.binance_api_base,
        timeout=settings.market_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_global_market_port() -> GlobalMarketPort:
    return CoinGeckoGlobalClient(
        base_url=settings.coingecko_api_base,
        timeout=settings.market_timeout_seconds,
        cache_seconds=settings.global_cache_seconds,
    )


@lru_cache(maxsize=1)
def get_news_port() -> NewsPort:
    return CryptoCompareNewsClient(
        url=settings.cryptocompare_news_url,
        timeout=settings.market_timeout_seconds,
    )


def get_market_stats_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> GetMarketStatsUseCase:
    return GetMarketStatsUseCase(exchange=exchange)


def get_list_tickers_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> ListTickersUseCase:
    return ListTickersUseCase(exchange=exchange)


def get_klines_use_case(exchange: ExchangePort = Depends(get_exchange)) -> GetKlinesUseCase:
    return GetKlinesUseCase(exchange=exchange)


def get_technical_analysis_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> GetTechnicalAnalysisUseCase:
    return GetTechnicalAnalysisUseCase(exchange=exchange)


def get_market_overview_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> GetMarketOverviewUseCase:
    return GetMarketOverviewUseCase(exchange=exchange)


def get_order_book_sentiment_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> GetOrderBookSentimentUseCase:
    return GetOrderBookSentimentUseCase(exchange=exchange)


def get_meme_coins_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> GetMemeCoinsUseCase:
    return GetMemeCoinsUseCase(exchange=exchange)


def get_coin_detail_use_case(
    exchange: ExchangePort = Depends(get_exchange),
) -> GetCoinDetailUseCase:
    return GetCoinDetailUseCase(exchange=exchange)


def get_global_market_use_case(
    global_port: GlobalMarketPort = Depends(get_global_market_port),
) -> GetGlobalMarketUseCase:
    return GetGlobalMarketUseCase(global_port=global_port)


def get_news_feed_use_case(
    news_port: NewsPort = Depends(get_news_port),
) -> GetNewsFeedUseCase:
    return GetNewsFeedUseCase(news_port=news_port)
