from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation

PLACEHOLDERS = {"-", "--", "...", "N/A", "n/a"}

# Ledger numbers must lie within 10**-15 .. 10**16 in magnitude (zero aside)
MAX_ADJUSTED_EXPONENT = 15


def to_dec_strict(s: str | int | Decimal | None) -> Decimal:
    """Convert a ledger numeric string to a finite Decimal.

    Raises ValueError on missing, placeholder, malformed or non-finite values
    ("NaN", "Infinity"), and on magnitudes too large or too small for money
    arithmetic; shares and price are never safely defaultable.
    """
    if s is None:
        raise ValueError("Value is None")
    if isinstance(s, Decimal):
        value = s
    elif isinstance(s, int):
        value = Decimal(s)
    else:
        s_stripped = s.strip()
        if not s_stripped:
            raise ValueError("Value is empty string")

        if s_stripped in PLACEHOLDERS:
            raise ValueError(f"Value is a placeholder: {s_stripped!r}")

        # Decimal() would accept "1_000"
        if "_" in s_stripped:
            raise ValueError(f"Invalid decimal format: {s!r}")

        try:
            value = Decimal(s_stripped)
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal format: {s!r}") from e

    if not value.is_finite():
        raise ValueError(f"Value is not finite: {s!r}")
    if value and abs(value.adjusted()) > MAX_ADJUSTED_EXPONENT:
        raise ValueError(f"Value is out of range: {s!r}")
    return value


def parse_date(d: str) -> dt.date:
    """Parse 'YYYY-MM-DD' or 'YYYY-MM-DD HH:MM[:SS]' / 'YYYY-MM-DDTHH:MM' strings."""
    return dt.date.fromisoformat(date_key(d))


def date_key(d: str | dt.date) -> str:
    """Return the YYYY-MM-DD part of a date or date-like string.

    Ledger dates are compared as text, so any time-of-day suffix is dropped
    before comparison.
    """
    if isinstance(d, dt.datetime):
        return d.date().isoformat()
    if isinstance(d, dt.date):
        return d.isoformat()
    d = d.strip()
    for sep in ("T", " "):
        if sep in d:
            d = d.split(sep)[0]
    return d
