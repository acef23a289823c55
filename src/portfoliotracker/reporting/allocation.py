from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .holdings import Holding


@dataclass(frozen=True)
class Allocation:
    symbol: str
    value: Decimal
    weight: Decimal  # fraction of total value, 0..1


def compute_allocation(holdings: Sequence[Holding]) -> list[Allocation]:
    total = sum((h.current_value for h in holdings), Decimal("0"))
    return [
        Allocation(
            symbol=h.symbol,
            value=h.current_value,
            weight=(h.current_value / total) if total != 0 else Decimal("0"),
        )
        for h in holdings
    ]
