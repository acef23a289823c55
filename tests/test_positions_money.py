from decimal import Decimal

import pytest

from portfoliotracker.reporting.money import percent_of, quantize_money, safe_ratio
from portfoliotracker.reporting.positions import RunningBook, RunningPosition


def test_running_book_blends_average_cost():
    book = RunningBook()
    book.apply("AAPL", Decimal("10"), Decimal("100"))
    pos = book.apply("AAPL", Decimal("10"), Decimal("120"))

    assert pos == RunningPosition(Decimal("20"), Decimal("110"))
    assert book.cost_value() == Decimal("2200")


def test_running_book_drops_symbol_at_or_below_zero():
    book = RunningBook()
    book.apply("AAPL", Decimal("10"), Decimal("100"))

    assert book.apply("AAPL", Decimal("-10"), Decimal("90")) is None
    assert book.cost_value() == Decimal("0")

    assert book.apply("MSFT", Decimal("-1"), Decimal("300")) is None
    assert book.market_value({"AAPL": Decimal("90"), "MSFT": Decimal("300")}) == 0


def test_running_book_market_value_treats_missing_price_as_zero():
    book = RunningBook()
    book.apply("MSFT", Decimal("2"), Decimal("300"))
    book.apply("AAPL", Decimal("3"), Decimal("100"))

    prices = {"MSFT": Decimal("310")}
    # AAPL has no price and counts as zero
    assert book.market_value(prices) == Decimal("620")


def test_quantize_money():
    assert quantize_money(Decimal("123.4567")) == Decimal("123.46")
    assert quantize_money(Decimal("123.4567"), "0.0001") == Decimal("123.4567")
    assert quantize_money(Decimal("NaN")).is_nan()


@pytest.mark.parametrize("num", [Decimal("0"), Decimal("5"), Decimal("-5")])
def test_safe_ratio_zero_denominator_is_nan(num):
    assert safe_ratio(num, Decimal("0")).is_nan()


def test_percent_of():
    assert percent_of(Decimal("200"), Decimal("1600")) == Decimal("12.5")
    assert percent_of(Decimal("-50"), Decimal("200")) == Decimal("-25")
    assert percent_of(Decimal("1"), Decimal("0")).is_nan()
