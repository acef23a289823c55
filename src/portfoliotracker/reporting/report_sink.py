from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Protocol

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .metrics import Performer
from .report_builder import PortfolioReport

LABELS = {
    "sheet": {
        "summary": "Summary",
        "holdings": "Holdings",
        "allocation": "Allocation",
        "timeline": "Timeline",
        "skipped": "Skipped Rows",
    },
    "summary": {
        "metric": "Metric",
        "value": "Value",
        "total_value": "Total Portfolio Value",
        "top_symbol": "Top Performer",
        "top_pct": "Top Performer Gain (%)",
        "worst_symbol": "Worst Performer",
        "worst_pct": "Worst Performer Gain (%)",
        "unique": "Unique Symbols",
        "trades": "Trades Analyzed",
        "range": "Date Range",
    },
    "holdings": {
        "symbol": "Symbol",
        "shares": "Shares",
        "avg_cost": "Avg Cost",
        "current_price": "Current Price",
        "current_value": "Current Value",
        "cost_value": "Cost Value",
        "gain": "Unrealized Gain/Loss",
        "gain_pct": "Unrealized Gain (%)",
        "trades": "Trades",
    },
    "allocation": {
        "symbol": "Symbol",
        "value": "Current Value",
        "weight": "Weight",
    },
    "timeline": {
        "date": "Date",
        "value": "Portfolio Value",
        "cost": "Cost Basis",
    },
    "skipped": {
        "line": "Line",
        "message": "Message",
        "row": "Row",
    },
}

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥", "INR": "₹"}

QTY_FMT = "0.########"
PCT_FMT = "0.00"
WEIGHT_FMT = "0.00%"


class ReportSink(Protocol):
    def write(self, report: PortfolioReport) -> Path:  # returns written file path
        ...


def money_fmt_for_currency(ccy: str) -> str:
    cur = (ccy or "").upper()
    sym = CURRENCY_SYMBOLS.get(cur)
    if sym:
        return f"{sym}#,##0.00"
    return f'"{cur}" #,##0.00'


def _num(value: Decimal | None) -> float | None:
    """Cell value for a Decimal; non-finite numbers become empty cells."""
    if value is None or not value.is_finite():
        return None
    return float(value)


@dataclass
class ExcelReportSink:
    out_path: Path
    currency: str = "USD"  # display only, no conversion

    def write(self, report: PortfolioReport) -> Path:
        out_path = Path(self.out_path)
        wb = Workbook()

        # Remove the default sheet
        wb.remove(wb.active)

        money_fmt = money_fmt_for_currency(self.currency)

        self._write_summary(wb, report, money_fmt)
        self._write_holdings(wb, report, money_fmt)
        self._write_allocation(wb, report, money_fmt)
        self._write_timeline(wb, report, money_fmt)
        if report.parse_report.issues:
            self._write_skipped(wb, report)

        for ws in wb.worksheets:
            autosize(ws)

        out_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(out_path)
        return out_path

    def _write_summary(self, wb: Workbook, report: PortfolioReport, money_fmt: str):
        labels = LABELS["summary"]
        ws = wb.create_sheet(title=LABELS["sheet"]["summary"])
        ws.append([labels["metric"], labels["value"]])

        m = report.metrics
        ws.append([labels["total_value"], _num(m.total_value)])
        ws.cell(row=ws.max_row, column=2).number_format = money_fmt

        def performer_rows(p: Performer | None, sym_key: str, pct_key: str) -> None:
            ws.append([labels[sym_key], p.symbol if p else None])
            ws.append([labels[pct_key], _num(p.gain_percent) if p else None])
            ws.cell(row=ws.max_row, column=2).number_format = PCT_FMT

        performer_rows(m.top_performer, "top_symbol", "top_pct")
        performer_rows(m.worst_performer, "worst_symbol", "worst_pct")
        ws.append([labels["unique"], m.unique_symbols])
        ws.append([labels["trades"], len(report.trades)])
        if report.start or report.end:
            ws.append(
                [labels["range"], f"{report.start or '...'} to {report.end or '...'}"]
            )

    def _write_holdings(self, wb: Workbook, report: PortfolioReport, money_fmt: str):
        labels = LABELS["holdings"]
        ws = wb.create_sheet(title=LABELS["sheet"]["holdings"])
        ws.append(
            [
                labels["symbol"],
                labels["shares"],
                labels["avg_cost"],
                labels["current_price"],
                labels["current_value"],
                labels["cost_value"],
                labels["gain"],
                labels["gain_pct"],
                labels["trades"],
            ]
        )
        for h in report.holdings:
            ws.append(
                [
                    h.symbol,
                    _num(h.shares),
                    _num(h.avg_cost_basis),
                    _num(h.current_price),
                    _num(h.current_value),
                    _num(h.cost_value),
                    _num(h.unrealized_gain_loss),
                    _num(h.gain_percent),
                    h.trade_count,
                ]
            )
            r = ws.max_row
            ws.cell(row=r, column=2).number_format = QTY_FMT
            for c in range(3, 8):
                ws.cell(row=r, column=c).number_format = money_fmt
            ws.cell(row=r, column=8).number_format = PCT_FMT

    def _write_allocation(
        self, wb: Workbook, report: PortfolioReport, money_fmt: str
    ):
        labels = LABELS["allocation"]
        ws = wb.create_sheet(title=LABELS["sheet"]["allocation"])
        ws.append([labels["symbol"], labels["value"], labels["weight"]])
        for a in report.allocation:
            ws.append([a.symbol, _num(a.value), _num(a.weight)])
            r = ws.max_row
            ws.cell(row=r, column=2).number_format = money_fmt
            ws.cell(row=r, column=3).number_format = WEIGHT_FMT

    def _write_timeline(self, wb: Workbook, report: PortfolioReport, money_fmt: str):
        labels = LABELS["timeline"]
        ws = wb.create_sheet(title=LABELS["sheet"]["timeline"])
        ws.append([labels["date"], labels["value"], labels["cost"]])
        for p in report.timeline:
            # Dates stay text: the ledger value is written back untouched
            ws.append([p.date, _num(p.value), _num(p.cost_basis)])
            r = ws.max_row
            ws.cell(row=r, column=2).number_format = money_fmt
            ws.cell(row=r, column=3).number_format = money_fmt

    def _write_skipped(self, wb: Workbook, report: PortfolioReport):
        labels = LABELS["skipped"]
        ws = wb.create_sheet(title=LABELS["sheet"]["skipped"])
        ws.append([labels["line"], labels["message"], labels["row"]])
        for issue in report.parse_report.issues:
            ws.append(
                [
                    issue.line_no,
                    issue.message,
                    ",".join(issue.row_preview) if issue.row_preview else None,
                ]
            )


def autosize(sheet, max_width: int = 60, min_width: int = 10) -> None:
    for col in range(1, sheet.max_column + 1):
        max_len = 0
        for row in range(1, sheet.max_row + 1):
            v = sheet.cell(row=row, column=col).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        width = min(max_width, max(min_width, max_len + 2))
        sheet.column_dimensions[get_column_letter(col)].width = width
