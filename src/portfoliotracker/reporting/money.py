from __future__ import annotations

from decimal import Decimal

MoneyLike = str | Decimal

_MONEY_Q = Decimal("0.01")
_HUNDRED = Decimal("100")
NAN = Decimal("NaN")


def quantize_money(value: Decimal, places: MoneyLike = _MONEY_Q) -> Decimal:
    """Quantize monetary values consistently across the codebase."""
    if not value.is_finite():
        return value
    return value.quantize(Decimal(places))


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator, or NaN when the denominator is zero."""
    if denominator == 0:
        return NAN
    return numerator / denominator


def percent_of(gain: Decimal, basis: Decimal) -> Decimal:
    """Percentage gain over basis; NaN for a zero basis."""
    ratio = safe_ratio(gain, basis)
    if ratio.is_nan():
        return ratio
    return ratio * _HUNDRED
