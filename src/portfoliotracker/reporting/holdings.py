from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from portfoliotracker.model import Trade

from .money import percent_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Holding:
    symbol: str
    shares: Decimal  # net, always > 0
    avg_cost_basis: Decimal
    current_price: Decimal  # price of the latest trade in the symbol
    current_value: Decimal
    unrealized_gain_loss: Decimal
    cost_value: Decimal  # total invested: sum(shares * price) over all trades
    trade_count: int

    @property
    def gain_percent(self) -> Decimal:
        """Unrealized gain as a percentage of cost; NaN when cost is zero."""
        return percent_of(self.unrealized_gain_loss, self.cost_value)


@dataclass
class _SymbolTotals:
    shares: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    trade_count: int = 0


def latest_prices(trades: Iterable[Trade]) -> dict[str, Decimal]:
    """Map each symbol to the price of its most recent trade.

    Dates compare as text. When several trades share the latest date for a
    symbol, the first one encountered wins.
    """
    latest: dict[str, Trade] = {}
    for trade in trades:
        best = latest.get(trade.symbol)
        if best is None or trade.date > best.date:
            latest[trade.symbol] = trade
    return {symbol: trade.price for symbol, trade in latest.items()}


def aggregate_holdings(trades: Sequence[Trade]) -> list[Holding]:
    """Fold trades into one Holding per symbol still held long.

    Holdings come out in the order each symbol first appears in trades.
    Symbols whose net shares are zero or negative are dropped: short
    positions are not modelled.
    """
    totals: dict[str, _SymbolTotals] = {}
    for trade in trades:
        acc = totals.setdefault(trade.symbol, _SymbolTotals())
        acc.shares += trade.shares
        acc.total_cost += trade.shares * trade.price
        acc.trade_count += 1

    prices = latest_prices(trades)
    holdings: list[Holding] = []
    for symbol, acc in totals.items():
        if acc.shares <= 0:
            logger.debug(
                "Dropping %s: net shares %s after %d trade(s)",
                symbol,
                acc.shares,
                acc.trade_count,
            )
            continue

        current_price = prices[symbol]
        current_value = acc.shares * current_price
        holdings.append(
            Holding(
                symbol=symbol,
                shares=acc.shares,
                avg_cost_basis=acc.total_cost / acc.shares,
                current_price=current_price,
                current_value=current_value,
                unrealized_gain_loss=current_value - acc.total_cost,
                cost_value=acc.total_cost,
                trade_count=acc.trade_count,
            )
        )
    return holdings
