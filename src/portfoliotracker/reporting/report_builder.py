from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Sequence

from portfoliotracker.conv import date_key
from portfoliotracker.model import ParseReport, Trade, TradeCsvParser

from .allocation import Allocation, compute_allocation
from .holdings import Holding, aggregate_holdings
from .metrics import PortfolioMetrics, summarize
from .timeline import TimelinePoint, build_timeline

logger = logging.getLogger(__name__)


@dataclass
class PortfolioReport:
    """Everything the presentation layer renders for one ledger upload."""

    trades: list[Trade]
    holdings: list[Holding]
    metrics: PortfolioMetrics
    timeline: list[TimelinePoint]
    allocation: list[Allocation]
    parse_report: ParseReport = field(default_factory=ParseReport)
    start: str | None = None
    end: str | None = None


def filter_trades_by_date(
    trades: Sequence[Trade],
    start: str | dt.date | None = None,
    end: str | dt.date | None = None,
) -> list[Trade]:
    """Keep trades dated within [start, end]; an omitted bound is open.

    Comparison is on the YYYY-MM-DD part of each date, so a bound covers the
    whole day.
    """
    lo = date_key(start) if start else None
    hi = date_key(end) if end else None
    out = [
        t
        for t in trades
        if (lo is None or date_key(t.date) >= lo)
        and (hi is None or date_key(t.date) <= hi)
    ]
    if len(out) != len(trades):
        logger.info(
            "Date filter [%s, %s] kept %d of %d trade(s)",
            lo or "-",
            hi or "-",
            len(out),
            len(trades),
        )
    return out


def build_report(
    trades: Sequence[Trade], parse_report: ParseReport | None = None
) -> PortfolioReport:
    holdings = aggregate_holdings(trades)
    report = PortfolioReport(
        trades=list(trades),
        holdings=holdings,
        metrics=summarize(holdings),
        timeline=build_timeline(trades),
        allocation=compute_allocation(holdings),
        parse_report=parse_report or ParseReport(),
    )
    logger.info(
        "Report built: %d trade(s), %d holding(s), %d timeline point(s)",
        len(report.trades),
        len(report.holdings),
        len(report.timeline),
    )
    return report


def analyze_trades(
    trades: Sequence[Trade],
    parse_report: ParseReport | None = None,
    start: str | dt.date | None = None,
    end: str | dt.date | None = None,
) -> PortfolioReport:
    """Apply the optional date window to parsed trades and derive the report."""
    report = build_report(filter_trades_by_date(trades, start, end), parse_report)
    report.start = date_key(start) if start else None
    report.end = date_key(end) if end else None
    return report


def analyze_text(
    text: str,
    start: str | dt.date | None = None,
    end: str | dt.date | None = None,
) -> PortfolioReport:
    """Parse ledger text, apply the optional date window and derive the report."""
    trades, parse_report = TradeCsvParser().parse_text(text)
    return analyze_trades(trades, parse_report, start, end)
