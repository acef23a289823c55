from openpyxl import load_workbook

from fixtures import SAMPLE_CSV, trade
from portfoliotracker.reporting.report_builder import analyze_text, build_report
from portfoliotracker.reporting.report_sink import ExcelReportSink, money_fmt_for_currency


def _write(tmp_path, report, **kwargs):
    out = tmp_path / "nested" / "portfolio.xlsx"
    written = ExcelReportSink(out_path=out, **kwargs).write(report)
    assert written == out
    return load_workbook(out)


def test_workbook_sheets(tmp_path):
    wb = _write(tmp_path, analyze_text(SAMPLE_CSV))
    assert wb.sheetnames == ["Summary", "Holdings", "Allocation", "Timeline"]


def test_skipped_rows_sheet_only_when_rows_were_skipped(tmp_path):
    wb = _write(tmp_path, analyze_text(SAMPLE_CSV + "NVDA,1,2\n"))

    assert "Skipped Rows" in wb.sheetnames
    rows = list(wb["Skipped Rows"].iter_rows(values_only=True))
    assert rows[0] == ("Line", "Message", "Row")
    assert rows[1][0] == 8
    assert rows[1][2] == "NVDA,1,2"


def test_summary_sheet_contents(tmp_path):
    wb = _write(tmp_path, analyze_text(SAMPLE_CSV, start="2024-01-01"))
    rows = {r[0]: r[1] for r in wb["Summary"].iter_rows(min_row=2, values_only=True)}

    assert rows["Total Portfolio Value"] == 3780.0
    assert rows["Top Performer"] == "AAPL"
    assert rows["Top Performer Gain (%)"] == 12.5
    assert rows["Worst Performer"] == "MSFT"
    assert rows["Unique Symbols"] == 2
    assert rows["Trades Analyzed"] == 6
    assert rows["Date Range"] == "2024-01-01 to ..."


def test_holdings_rows_and_formats(tmp_path):
    wb = _write(tmp_path, analyze_text(SAMPLE_CSV), currency="INR")
    ws = wb["Holdings"]
    header = [c.value for c in ws[1]]
    assert header[0] == "Symbol"
    assert header[6] == "Unrealized Gain/Loss"

    row = ws[2]
    assert row[0].value == "AAPL"
    assert row[1].value == 15
    assert row[3].value == 120
    assert row[4].value == 1800
    assert row[6].value == 200
    assert row[7].value == 12.5
    assert row[8].value == 2
    assert row[4].number_format.startswith("₹")


def test_non_finite_gain_percent_written_as_empty_cell(tmp_path):
    report = build_report([trade("FREE", 5, 0, "2024-01-01")])
    wb = _write(tmp_path, report)

    row = wb["Holdings"][2]
    assert row[0].value == "FREE"
    assert row[7].value is None

    summary = {r[0]: r[1] for r in wb["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Top Performer"] is None


def test_timeline_and_allocation_sheets(tmp_path):
    wb = _write(tmp_path, analyze_text(SAMPLE_CSV))

    timeline = list(wb["Timeline"].iter_rows(min_row=2, values_only=True))
    assert [r[0] for r in timeline] == [
        "2024-01-02",
        "2024-01-03",
        "2024-02-01",
        "2024-02-15",
        "2024-03-01",
    ]
    assert timeline[-1][1] == 3780

    allocation = list(wb["Allocation"].iter_rows(min_row=2, values_only=True))
    assert [r[0] for r in allocation] == ["AAPL", "MSFT"]
    assert abs(sum(r[2] for r in allocation) - 1.0) < 1e-9
    assert wb["Allocation"]["C2"].number_format == "0.00%"


def test_money_formats():
    assert money_fmt_for_currency("USD") == "$#,##0.00"
    assert money_fmt_for_currency("inr") == "₹#,##0.00"
    assert money_fmt_for_currency("CHF") == '"CHF" #,##0.00'
