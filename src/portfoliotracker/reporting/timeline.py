from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from portfoliotracker.model import Trade

from .holdings import latest_prices
from .positions import RunningBook


@dataclass(frozen=True)
class TimelinePoint:
    date: str
    value: Decimal
    cost_basis: Decimal


def build_timeline(trades: Sequence[Trade]) -> list[TimelinePoint]:
    """Replay trades by date and record portfolio value after each trade date.

    Every point values the running positions at the latest price seen
    anywhere in trades, not the price known on that date, so the series
    shows how position sizes evolved rather than true historical value.
    Several trades on one date collapse into the state after the last of
    them.
    """
    prices = latest_prices(trades)
    book = RunningBook()
    points: dict[str, TimelinePoint] = {}

    for trade in sorted(trades, key=lambda t: t.date):
        book.apply(trade.symbol, trade.shares, trade.price)
        points[trade.date] = TimelinePoint(
            date=trade.date,
            value=book.market_value(prices),
            cost_basis=book.cost_value(),
        )

    return sorted(points.values(), key=lambda p: p.date)
