from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping


@dataclass
class RunningPosition:
    shares: Decimal
    avg_cost: Decimal  # blended cost per share


class RunningBook:
    """Maintain a blended-average position per symbol while replaying trades.

    Symbols are kept in the order they were first opened. A symbol whose
    running shares fall to zero or below is dropped along with its cost; a
    later buy reopens it from scratch.
    """

    def __init__(self) -> None:
        self._positions: dict[str, RunningPosition] = {}

    def apply(
        self, symbol: str, shares: Decimal, price: Decimal
    ) -> RunningPosition | None:
        existing = self._positions.get(symbol)
        if existing is None:
            existing = RunningPosition(Decimal("0"), Decimal("0"))

        new_shares = existing.shares + shares
        if new_shares <= 0:
            self._positions.pop(symbol, None)
            return None

        new_avg = (existing.shares * existing.avg_cost + shares * price) / new_shares
        position = RunningPosition(new_shares, new_avg)
        self._positions[symbol] = position
        return position

    def market_value(self, prices: Mapping[str, Decimal]) -> Decimal:
        """Sum of running shares valued at the given per-symbol prices.

        A symbol missing from prices is valued at zero.
        """
        return sum(
            (
                pos.shares * prices.get(symbol, Decimal("0"))
                for symbol, pos in self._positions.items()
            ),
            Decimal("0"),
        )

    def cost_value(self) -> Decimal:
        return sum(
            (pos.shares * pos.avg_cost for pos in self._positions.values()),
            Decimal("0"),
        )
