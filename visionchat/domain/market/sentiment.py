"""
Order-book sentiment score.

positive = 50
         ± min(|24h change| * 2, 25)           (sign of the change)
         + (buy_pressure - 0.5) * 25
clamped to [0, 100]; negative = 100 - positive.

buy_pressure is the share of bid quantity in the visible book.
"""

import math
from dataclasses import dataclass

from visionchat.domain.market.entities import OrderBook

BASELINE = 50.0
MAX_CHANGE_ADJUSTMENT = 25.0
PRESSURE_WEIGHT = 25.0


@dataclass(frozen=True)
class OrderBookSentiment:
    positive: int
    negative: int
    price_change_24h: float
    volume_24h: float
    buy_pressure: float
    sell_pressure: float


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def buy_pressure(book: OrderBook) -> float:
    """Share of bid quantity in the book; 0.5 for an empty book."""
    bids = book.bid_volume()
    total = bids + book.ask_volume()
    if total == 0:
        return 0.5
    return bids / total


def score_order_book(price_change: float, volume: float, book: OrderBook) -> OrderBookSentiment:
    positive = BASELINE
    if price_change > 0:
        positive += min(price_change * 2, MAX_CHANGE_ADJUSTMENT)
    else:
        positive -= min(abs(price_change) * 2, MAX_CHANGE_ADJUSTMENT)

    pressure = buy_pressure(book)
    positive += (pressure - 0.5) * PRESSURE_WEIGHT
    positive = max(0.0, min(100.0, positive))

    return OrderBookSentiment(
        positive=round_half_up(positive),
        negative=round_half_up(100 - positive),
        price_change_24h=price_change,
        volume_24h=volume,
        buy_pressure=pressure,
        sell_pressure=1 - pressure,
    )
