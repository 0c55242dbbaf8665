"""
FastAPI router for the market bounded context.

Read-only endpoints backed by public Binance, CoinGecko and
CryptoCompare data. All routes delegate to async use cases.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query

from visionchat.application.market.dtos import (
    KlinesQuery,
    SymbolQuery,
    TickerPageQuery,
)
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
from visionchat.domain.market.aggregates import Mover
from visionchat.domain.market.entities import Kline
from visionchat.interfaces.market.dependencies import (
    get_coin_detail_use_case,
    get_global_market_use_case,
    get_klines_use_case,
    get_list_tickers_use_case,
    get_market_overview_use_case,
    get_market_stats_use_case,
    get_meme_coins_use_case,
    get_news_feed_use_case,
    get_order_book_sentiment_use_case,
    get_technical_analysis_use_case,
)
from visionchat.interfaces.market.schemas import (
    INTERVAL_PATTERN,
    SYMBOL_PATTERN,
    CoinDetailResponse,
    DominanceSchema,
    KlineSchema,
    MacdSchema,
    MarketOverviewResponse,
    MarketStatsResponse,
    MemeCoinSchema,
    MemeCoinsResponse,
    MovingAveragesSchema,
    MoverSchema,
    NewsFeedResponse,
    NewsItemSchema,
    OrderBookSchema,
    OrderBookSentimentResponse,
    PositiveNegativeSchema,
    PriceTargetSchema,
    SentimentMetricsSchema,
    SentimentSchema,
    TechnicalAnalysisResponse,
    TechnicalIndicatorsSchema,
    TickerPageResponse,
    TickerRowSchema,
    TradingSignalSchema,
)
from visionchat.interfaces.schemas import ErrorResponse

router = APIRouter(prefix="/market", tags=["market"])

Symbol = Annotated[str, Path(pattern=SYMBOL_PATTERN, description="Coin, e.g. BTC or BTCUSDT")]
UPSTREAM_ERRORS: dict[int | str, dict[str, Any]] = {
    502: {"model": ErrorResponse},
}


def _kline(k: Kline) -> KlineSchema:
    return KlineSchema(
        time=k.time, open=k.open, high=k.high, low=k.low, close=k.close, volume=k.volume
    )


def _mover(m: Mover) -> MoverSchema:
    return MoverSchema(symbol=m.symbol, price=m.price, change=m.change)


@router.get(
    "/stats",
    response_model=MarketStatsResponse,
    responses=UPSTREAM_ERRORS,
    summary="Exchange-wide market statistics",
)
async def market_stats(
    use_case: GetMarketStatsUseCase = Depends(get_market_stats_use_case),
) -> MarketStatsResponse:
    stats = await use_case.execute()
    return MarketStatsResponse(
        cryptos=stats.cryptos,
        exchanges=stats.exchanges,
        market_cap=stats.market_cap,
        volume_24h=stats.volume_24h,
        dominance=DominanceSchema(btc=stats.btc_dominance, eth=stats.eth_dominance),
        btc_price=stats.btc_price,
        eth_price=stats.eth_price,
        btc_change_24h=stats.btc_change_24h,
        eth_change_24h=stats.eth_change_24h,
    )


@router.get(
    "/tickers",
    response_model=TickerPageResponse,
    responses=UPSTREAM_ERRORS,
    summary="Paginated USDT market table",
)
async def list_tickers(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    use_case: ListTickersUseCase = Depends(get_list_tickers_use_case),
) -> TickerPageResponse:
    result = await use_case.execute(TickerPageQuery(page=page, limit=limit))
    return TickerPageResponse(
        data=[
            TickerRowSchema(
                rank=row.rank,
                symbol=row.symbol,
                name=row.name,
                last_price=row.last_price,
                price_change_percent=row.price_change_percent,
                volume=row.volume,
                quote_volume=row.quote_volume,
                market_cap=row.market_cap,
                high_24h=row.high_24h,
                low_24h=row.low_24h,
                sparkline_in_7d=row.sparkline,
            )
            for row in result.data
        ],
        total_pages=result.total_pages,
    )


@router.get(
    "/klines/{symbol}",
    response_model=list[KlineSchema],
    responses=UPSTREAM_ERRORS,
    summary="Candlesticks for one pair",
)
async def klines(
    symbol: Symbol,
    interval: str = Query("1d", pattern=INTERVAL_PATTERN),
    limit: int = Query(7, ge=1, le=1000),
    use_case: GetKlinesUseCase = Depends(get_klines_use_case),
) -> list[KlineSchema]:
    result = await use_case.execute(KlinesQuery(symbol=symbol, interval=interval, limit=limit))
    return [_kline(k) for k in result]


@router.get(
    "/analysis/{symbol}",
    response_model=TechnicalAnalysisResponse,
    responses={404: {"model": ErrorResponse}, **UPSTREAM_ERRORS},
    summary="Technical analysis of one pair",
    description="RSI, moving averages, sentiment, signal, levels and price targets.",
)
async def technical_analysis(
    symbol: Symbol,
    use_case: GetTechnicalAnalysisUseCase = Depends(get_technical_analysis_use_case),
) -> TechnicalAnalysisResponse:
    result = await use_case.execute(SymbolQuery(symbol=symbol))
    indicators = result.indicators
    return TechnicalAnalysisResponse(
        symbol=result.symbol,
        price=result.price,
        price_change_24h=result.price_change_24h,
        volume=result.volume,
        market_cap=result.market_cap,
        technical_indicators=TechnicalIndicatorsSchema(
            rsi=indicators.rsi,
            macd=MacdSchema(
                macd=indicators.macd,
                signal=indicators.macd_signal,
                histogram=indicators.macd_histogram,
            ),
            moving_averages=MovingAveragesSchema(
                sma20=indicators.sma20, sma50=indicators.sma50, sma200=indicators.sma200
            ),
        ),
        sentiment=SentimentSchema(
            sentiment=result.sentiment.sentiment.value,
            confidence=result.sentiment.confidence,
            factors=result.sentiment.factors,
        ),
        trading_signal=TradingSignalSchema(
            signal=result.trading_signal.signal.value,
            strength=result.trading_signal.strength,
            reasoning=result.trading_signal.reasoning,
        ),
        support_levels=result.support_levels,
        resistance_levels=result.resistance_levels,
        price_target=PriceTargetSchema(
            short=result.price_target.short,
            medium=result.price_target.medium,
            long=result.price_target.long,
        ),
    )


@router.get(
    "/overview",
    response_model=MarketOverviewResponse,
    responses=UPSTREAM_ERRORS,
    summary="Gainers and losers among the most traded pairs",
)
async def market_overview(
    use_case: GetMarketOverviewUseCase = Depends(get_market_overview_use_case),
) -> MarketOverviewResponse:
    overview = await use_case.execute()
    return MarketOverviewResponse(
        total_markets=overview.total_markets,
        gainers=overview.gainers,
        losers=overview.losers,
        top_gainers=[_mover(m) for m in overview.top_gainers],
        top_losers=[_mover(m) for m in overview.top_losers],
        avg_change=overview.avg_change,
        total_volume=overview.total_volume,
    )


@router.get(
    "/sentiment/{symbol}",
    response_model=OrderBookSentimentResponse,
    responses={404: {"model": ErrorResponse}, **UPSTREAM_ERRORS},
    summary="Order-book sentiment of one coin",
)
async def order_book_sentiment(
    symbol: Symbol,
    use_case: GetOrderBookSentimentUseCase = Depends(get_order_book_sentiment_use_case),
) -> OrderBookSentimentResponse:
    result = await use_case.execute(SymbolQuery(symbol=symbol))
    return OrderBookSentimentResponse(
        positive=result.positive,
        negative=result.negative,
        metrics=SentimentMetricsSchema(
            price_change_24h=result.price_change_24h,
            volume_24h=result.volume_24h,
            buy_pressure=result.buy_pressure,
            sell_pressure=result.sell_pressure,
        ),
    )


@router.get(
    "/meme-coins",
    response_model=MemeCoinsResponse,
    summary="Quotes for popular meme coins",
)
async def meme_coins(
    use_case: GetMemeCoinsUseCase = Depends(get_meme_coins_use_case),
) -> MemeCoinsResponse:
    coins = await use_case.execute()
    return MemeCoinsResponse(
        data=[
            MemeCoinSchema(
                symbol=c.symbol,
                price=c.price,
                price_change_percent=c.price_change_percent,
                volume_24h=c.volume_24h,
            )
            for c in coins
        ]
    )


@router.get(
    "/coins/{symbol}",
    response_model=CoinDetailResponse,
    responses={404: {"model": ErrorResponse}, **UPSTREAM_ERRORS},
    summary="Detail view of one coin",
)
async def coin_detail(
    symbol: Symbol,
    use_case: GetCoinDetailUseCase = Depends(get_coin_detail_use_case),
) -> CoinDetailResponse:
    detail = await use_case.execute(SymbolQuery(symbol=symbol))
    return CoinDetailResponse(
        id=detail.symbol,
        symbol=detail.symbol,
        name=detail.name,
        trading_pair=detail.trading_pair,
        price=detail.price,
        price_change_percent_24h=detail.price_change_percent_24h,
        market_cap=detail.market_cap,
        volume_24h=detail.volume_24h,
        high_24h=detail.high_24h,
        low_24h=detail.low_24h,
        description=detail.description,
        sentiment=PositiveNegativeSchema(
            positive=detail.sentiment_positive, negative=detail.sentiment_negative
        ),
        order_book=OrderBookSchema(bids=detail.order_book.bids, asks=detail.order_book.asks),
        candlesticks=[_kline(k) for k in detail.candlesticks],
    )


@router.get(
    "/global",
    response_model=dict[str, Any],
    responses={429: {"model": ErrorResponse}, **UPSTREAM_ERRORS},
    summary="Global market figures",
    description="CoinGecko global data, cached for a minute.",
)
async def global_market(
    use_case: GetGlobalMarketUseCase = Depends(get_global_market_use_case),
) -> dict[str, Any]:
    return await use_case.execute()


@router.get(
    "/news",
    response_model=NewsFeedResponse,
    responses=UPSTREAM_ERRORS,
    summary="Popular crypto headlines",
)
async def news_feed(
    use_case: GetNewsFeedUseCase = Depends(get_news_feed_use_case),
) -> NewsFeedResponse:
    items = await use_case.execute()
    return NewsFeedResponse(
        data=[
            NewsItemSchema(
                id=n.id,
                title=n.title,
                body=n.body,
                source=n.source,
                url=n.url,
                image_url=n.image_url,
                published_at=n.published_at,
                categories=n.categories,
            )
            for n in items
        ]
    )
