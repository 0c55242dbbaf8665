"""
Market-wide aggregates over the exchange's USDT pairs.

Builds a pandas DataFrame from 24h tickers and derives the dashboard
figures: totals, dominance, rankings, gainers and losers.
"""

from dataclasses import asdict, dataclass

import pandas as pd

from visionchat.domain.market.entities import QUOTE_ASSET, Ticker

OVERVIEW_MARKETS = 20
OVERVIEW_MOVERS = 5


@dataclass(frozen=True)
class MarketStats:
    cryptos: int
    exchanges: int
    market_cap: float
    volume_24h: float
    btc_dominance: float
    eth_dominance: float
    btc_price: float
    eth_price: float
    btc_change_24h: float
    eth_change_24h: float


@dataclass(frozen=True)
class Mover:
    symbol: str
    price: float
    change: float


@dataclass(frozen=True)
class MarketOverview:
    total_markets: int
    gainers: int
    losers: int
    top_gainers: list[Mover]
    top_losers: list[Mover]
    avg_change: float
    total_volume: float


def usdt_frame(tickers: list[Ticker]) -> pd.DataFrame:
    """DataFrame of USDT-quoted tickers with a `market_cap` column."""
    columns = [f.name for f in Ticker.__dataclass_fields__.values()]
    frame = pd.DataFrame([asdict(t) for t in tickers], columns=columns)
    frame = frame[frame["symbol"].str.endswith(QUOTE_ASSET)].reset_index(drop=True)
    frame["market_cap"] = frame["last_price"] * frame["volume"]
    return frame


def rank_by_quote_volume(tickers: list[Ticker]) -> list[Ticker]:
    """USDT tickers ordered by 24h quote volume, largest first."""
    usdt = [t for t in tickers if t.symbol.endswith(QUOTE_ASSET)]
    return sorted(usdt, key=lambda t: t.quote_volume, reverse=True)


def _share(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole else 0.0


def compute_market_stats(tickers: list[Ticker], btc: Ticker, eth: Ticker) -> MarketStats:
    """Exchange-wide totals with BTC and ETH dominance by price*volume."""
    frame = usdt_frame(tickers)
    total_cap = float(frame["market_cap"].sum())
    return MarketStats(
        cryptos=len(frame),
        exchanges=1,
        market_cap=total_cap,
        volume_24h=float(frame["quote_volume"].sum()),
        btc_dominance=_share(btc.approx_market_cap, total_cap),
        eth_dominance=_share(eth.approx_market_cap, total_cap),
        btc_price=btc.last_price,
        eth_price=eth.last_price,
        btc_change_24h=btc.price_change_percent,
        eth_change_24h=eth.price_change_percent,
    )


def _movers(frame: pd.DataFrame) -> list[Mover]:
    return [
        Mover(
            symbol=row.symbol,
            price=float(row.last_price),
            change=float(row.price_change_percent),
        )
        for row in frame.itertuples(index=False)
    ]


def compute_market_overview(tickers: list[Ticker]) -> MarketOverview:
    """Gainers, losers and averages over the most traded USDT markets."""
    frame = usdt_frame(tickers)
    top = frame.sort_values("quote_volume", ascending=False).head(OVERVIEW_MARKETS)

    gainers = top[top["price_change_percent"] > 0]
    losers = top[top["price_change_percent"] < 0]

    return MarketOverview(
        total_markets=len(top),
        gainers=len(gainers),
        losers=len(losers),
        top_gainers=_movers(
            gainers.sort_values("price_change_percent", ascending=False).head(OVERVIEW_MOVERS)
        ),
        top_losers=_movers(
            losers.sort_values("price_change_percent", ascending=True).head(OVERVIEW_MOVERS)
        ),
        avg_change=float(top["price_change_percent"].mean()) if len(top) else 0.0,
        total_volume=float(top["quote_volume"].sum()),
    )
