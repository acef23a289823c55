from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .holdings import Holding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Performer:
    symbol: str
    gain_percent: Decimal


@dataclass(frozen=True)
class PortfolioMetrics:
    total_value: Decimal
    top_performer: Performer | None
    worst_performer: Performer | None
    unique_symbols: int


def summarize(holdings: Sequence[Holding]) -> PortfolioMetrics:
    """Portfolio totals plus the best and worst holding by percentage gain.

    Ties keep the earliest holding. Holdings with a non-finite gain percent
    (zero cost) are left out of performer selection but still count toward
    the total value and symbol count.
    """
    total_value = sum((h.current_value for h in holdings), Decimal("0"))

    top: Performer | None = None
    worst: Performer | None = None
    for h in holdings:
        pct = h.gain_percent
        if not pct.is_finite():
            logger.debug("Skipping %s for performer ranking: zero cost", h.symbol)
            continue
        if top is None or pct > top.gain_percent:
            top = Performer(h.symbol, pct)
        if worst is None or pct < worst.gain_percent:
            worst = Performer(h.symbol, pct)

    return PortfolioMetrics(
        total_value=total_value,
        top_performer=top,
        worst_performer=worst,
        unique_symbols=len(holdings),
    )
