from .allocation import Allocation, compute_allocation
from .holdings import Holding, aggregate_holdings, latest_prices
from .metrics import Performer, PortfolioMetrics, summarize
from .positions import RunningBook, RunningPosition
from .report_builder import (
    PortfolioReport,
    analyze_text,
    analyze_trades,
    build_report,
    filter_trades_by_date,
)
from .report_sink import ExcelReportSink, ReportSink
from .timeline import TimelinePoint, build_timeline

__all__ = [
    "Allocation",
    "compute_allocation",
    "Holding",
    "aggregate_holdings",
    "latest_prices",
    "Performer",
    "PortfolioMetrics",
    "summarize",
    "RunningBook",
    "RunningPosition",
    "PortfolioReport",
    "analyze_text",
    "analyze_trades",
    "build_report",
    "filter_trades_by_date",
    "ExcelReportSink",
    "ReportSink",
    "TimelinePoint",
    "build_timeline",
]
