from .ledger import (
    REQUIRED_COLUMNS,
    FormatError,
    ParseIssue,
    ParseReport,
    Trade,
    TradeCsvParser,
    parse_trades,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "FormatError",
    "ParseIssue",
    "ParseReport",
    "Trade",
    "TradeCsvParser",
    "parse_trades",
]
