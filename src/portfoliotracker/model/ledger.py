from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Literal, Sequence

from portfoliotracker.conv import to_dec_strict

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("symbol", "shares", "price", "date")


class FormatError(ValueError):
    """The ledger text cannot be turned into trades; nothing is returned."""

    def __init__(self, message: str, row_no: int | None = None) -> None:
        super().__init__(message)
        self.row_no = row_no


@dataclass(frozen=True)
class Trade:
    symbol: str
    shares: Decimal  # positive buy, negative sell
    price: Decimal
    date: str  # sortable text, YYYY-MM-DD
    row_no: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ParseIssue:
    line_no: int
    severity: Literal["warning"]
    message: str
    row_preview: Sequence[str] | None = None


@dataclass
class ParseReport:
    """Non-fatal diagnostics collected during parsing."""

    issues: list[ParseIssue] = field(default_factory=list)

    def warn(self, line_no: int, msg: str, row: Sequence[str] | None = None) -> None:
        self.issues.append(ParseIssue(line_no, "warning", msg, row))

    @property
    def skipped_rows(self) -> list[int]:
        return [i.line_no for i in self.issues if i.severity == "warning"]

    def log_with(self, log: logging.Logger) -> None:
        for i in self.issues:
            if i.row_preview is not None:
                log.warning(
                    "line %d: %s | row=%s", i.line_no, i.message, list(i.row_preview)
                )
            else:
                log.warning("line %d: %s", i.line_no, i.message)


class TradeCsvParser:
    """
    Maps trade ledger CSV text -> list[Trade] (+ ParseReport).

    CSV shape:
        line 1  = header naming at least symbol, shares, price, date (any order,
                  any case, extra columns ignored)
        line 2+ = comma-separated values aligned with the header

    Values are split on bare commas; quoting is not supported. Rows whose field
    count differs from the header are skipped and reported as warnings. Any
    other invalid row aborts the whole parse with FormatError.
    """

    def parse_file(
        self, path: str | Path, *, encoding: str = "utf-8-sig"
    ) -> tuple[list[Trade], ParseReport]:
        with open(path, "r", encoding=encoding) as fp:
            return self.parse_text(fp.read())

    def parse_text(self, text: str) -> tuple[list[Trade], ParseReport]:
        return self.parse_lines(text.strip().split("\n"))

    def parse_lines(self, lines: Sequence[str]) -> tuple[list[Trade], ParseReport]:
        if len(lines) < 2:
            raise FormatError("CSV must have at least a header and one data row")

        report = ParseReport()
        # Strip BOM on the header if present
        header = [h.strip() for h in lines[0].lstrip("\ufeff").lower().split(",")]
        col = _locate_columns(header)

        trades: list[Trade] = []
        for line_no, values in _split_rows(lines[1:], start=2):
            if len(values) != len(header):
                report.warn(
                    line_no,
                    f"Expected {len(header)} fields, found {len(values)}; row skipped.",
                    values,
                )
                continue
            trades.append(_parse_row(values, col, line_no))

        logger.debug(
            "Parsed %d trade(s), skipped %d row(s)",
            len(trades),
            len(report.skipped_rows),
        )
        return trades, report


def parse_trades(text: str) -> list[Trade]:
    """Parse ledger CSV text into trades; misaligned rows are dropped silently."""
    trades, _ = TradeCsvParser().parse_text(text)
    return trades


def _locate_columns(header: Sequence[str]) -> dict[str, int]:
    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if missing:
        raise FormatError(
            f"CSV must include columns: {', '.join(REQUIRED_COLUMNS)} "
            f"(missing: {', '.join(missing)})",
            row_no=1,
        )
    return {name: header.index(name) for name in REQUIRED_COLUMNS}


def _split_rows(
    lines: Iterable[str], start: int
) -> Iterable[tuple[int, list[str]]]:
    for line_no, line in enumerate(lines, start=start):
        yield line_no, [v.strip() for v in line.split(",")]


def _parse_row(values: Sequence[str], col: dict[str, int], line_no: int) -> Trade:
    symbol = values[col["symbol"]].upper()
    if not symbol:
        raise FormatError(f"Missing symbol in row {line_no}", row_no=line_no)

    try:
        shares = to_dec_strict(values[col["shares"]])
        price = to_dec_strict(values[col["price"]])
    except ValueError as e:
        raise FormatError(
            f"Invalid numeric value in row {line_no}: {e}", row_no=line_no
        ) from e

    if price < 0:
        raise FormatError(
            f"Negative price in row {line_no}: {price}", row_no=line_no
        )

    return Trade(
        symbol=symbol,
        shares=shares,
        price=price,
        date=values[col["date"]],
        row_no=line_no,
    )
