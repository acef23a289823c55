"""Shared ledger samples and a compact Trade constructor for tests.

Production code only builds Trade objects from CSV text; tests mostly want
to state a trade list directly.
"""

from __future__ import annotations

from decimal import Decimal

from portfoliotracker.model import Trade

SAMPLE_CSV = """symbol,shares,price,date
AAPL,10,100,2024-01-02
MSFT,4,300,2024-01-03
AAPL,5,120,2024-02-01
TSLA,3,200,2024-02-15
TSLA,-3,250,2024-03-01
MSFT,2,330,2024-03-01
"""


def trade(symbol: str, shares, price, date: str) -> Trade:
    return Trade(
        symbol=symbol,
        shares=Decimal(str(shares)),
        price=Decimal(str(price)),
        date=date,
    )
