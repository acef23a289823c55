"""
Analyze a trade ledger CSV and report current holdings, portfolio summary
metrics and a value-over-time series.

This module acts as the CLI orchestrator, delegating responsibilities to SRP modules:
- Parsing/Model: portfoliotracker.model
- Holdings, metrics, timeline: portfoliotracker.reporting
- Output writing: portfoliotracker.reporting.report_sink

Usage
-----
    portfolio-tracker ./trades.csv

    # Restrict to a date window and write a workbook
    portfolio-tracker ./trades.csv \
        --start 2024-01-01 --end 2024-06-30 \
        --output ./portfolio.xlsx --currency INR

Ledger CSV schema (columns in any order, any case, extras ignored):
    symbol,shares,price,date
    AAPL,10,172.35,2024-06-12
    TSLA,5,225.40,2024-06-13
"""

from __future__ import annotations

import argparse
import logging
from decimal import ROUND_HALF_UP, Decimal, getcontext
from pathlib import Path
from typing import Sequence

from portfoliotracker.conv import parse_date
from portfoliotracker.logging import configure_logging
from portfoliotracker.model import FormatError, TradeCsvParser
from portfoliotracker.reporting import PortfolioReport, analyze_trades
from portfoliotracker.reporting.money import quantize_money
from portfoliotracker.reporting.report_sink import ExcelReportSink

# Monetary precision and rounding
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_UP


def load_report(args: argparse.Namespace) -> PortfolioReport:
    logger = logging.getLogger(__name__)

    path = Path(args.input)
    if path.suffix.lower() != ".csv":
        logger.error("Please provide a CSV file: %s", path)
        raise SystemExit(2)

    logger.info("Reading %s", path)
    try:
        trades, parse_report = TradeCsvParser().parse_file(path)
    except FormatError as e:
        logger.error("Cannot parse %s: %s", path, e)
        raise SystemExit(2) from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read %s: %s", path, e)
        raise SystemExit(2) from e
    logger.debug("Parsed %d trade(s) from %s", len(trades), path)
    parse_report.log_with(logger)

    return analyze_trades(trades, parse_report, args.start, args.end)


def _fmt_pct(value: Decimal) -> str:
    return f"{value:+.2f}%"


def format_summary(report: PortfolioReport, currency: str = "USD") -> str:
    m = report.metrics
    lines = [
        f"Total Portfolio Value: {quantize_money(m.total_value):,} {currency}",
    ]
    if m.top_performer is not None:
        lines.append(
            f"Top Performer: {m.top_performer.symbol} "
            f"({_fmt_pct(m.top_performer.gain_percent)})"
        )
    else:
        lines.append("Top Performer: -")
    if m.worst_performer is not None:
        lines.append(
            f"Worst Performer: {m.worst_performer.symbol} "
            f"({_fmt_pct(m.worst_performer.gain_percent)})"
        )
    else:
        lines.append("Worst Performer: -")
    lines.append(f"Unique Symbols: {m.unique_symbols}")
    return "\n".join(lines)


def process_file(args: argparse.Namespace) -> PortfolioReport:
    logger = logging.getLogger(__name__)

    report = load_report(args)
    print(format_summary(report, args.currency))

    if args.output:
        sink = ExcelReportSink(out_path=Path(args.output), currency=args.currency)
        out_path = sink.write(report)
        logger.info("Wrote workbook to %s", out_path)
    return report


def _iso_date(value: str) -> str:
    try:
        return parse_date(value).isoformat()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}") from e


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="portfolio-tracker",
        description="Holdings, summary metrics and value timeline from a trade ledger CSV",
    )
    p.add_argument("input", type=str, help="Trade ledger CSV path")
    p.add_argument(
        "--start",
        type=_iso_date,
        default=None,
        help="Ignore trades dated before this day (YYYY-MM-DD, inclusive)",
    )
    p.add_argument(
        "--end",
        type=_iso_date,
        default=None,
        help="Ignore trades dated after this day (YYYY-MM-DD, inclusive)",
    )
    p.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write an .xlsx workbook with holdings, allocation and timeline",
    )
    p.add_argument(
        "--currency",
        type=str,
        default="USD",
        help="Currency code used to label and format money values",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v (INFO), -vv (DEBUG)",
    )
    return p


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_argparser()
    args = parser.parse_args(argv)

    # Configure logging based on verbosity
    verbosity_map = {
        0: logging.WARNING,  # Default: quiet
        1: logging.INFO,  # -v: informational
        2: logging.DEBUG,  # -vv and above: debug
    }
    level = verbosity_map.get(min(args.verbose, 2), logging.WARNING)
    configure_logging(level=level)

    process_file(args)


if __name__ == "__main__":
    main()
