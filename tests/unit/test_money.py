"""Unit tests for the installment amount splitter"""

import pytest
from decimal import Decimal
from caderninho.domain.exceptions import InvalidArgumentError
from caderninho.domain.money import percentage, split_amount, to_money


def test_split_amount_rounding():
    """Test last share absorbs remainder"""
    shares = split_amount(Decimal("100.00"), 3)

    assert shares == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert sum(shares) == Decimal("100.00")


def test_split_amount_equal_split():
    """Test evenly divisible amount"""
    shares = split_amount(Decimal("400.00"), 4)

    assert shares == [Decimal("100.00")] * 4


def test_split_amount_single_share():
    assert split_amount(Decimal("59.90"), 1) == [Decimal("59.90")]


def test_split_amount_smaller_than_count():
    """Amount below one cent per share leaves everything on the last one"""
    shares = split_amount(Decimal("0.05"), 10)

    assert shares[:9] == [Decimal("0.00")] * 9
    assert shares[9] == Decimal("0.05")


@pytest.mark.parametrize("total", ["0.01", "1.00", "99.99", "100.00", "1234.57", "10000.01"])
def test_split_amount_sum_invariant(total):
    """Shares always add back to the exact total"""
    amount = Decimal(total)
    for count in range(1, 121):
        shares = split_amount(amount, count)
        assert len(shares) == count
        assert sum(shares) == amount


def test_split_amount_last_share_absorption_bound():
    """All shares but the last are equal; the last differs by at most count-1 cents"""
    count = 7
    shares = split_amount(Decimal("100.00"), count)

    assert len(set(shares[:-1])) == 1
    assert Decimal("0") <= shares[-1] - shares[0] <= Decimal("0.01") * (count - 1)


def test_split_amount_rejects_zero_count():
    with pytest.raises(InvalidArgumentError):
        split_amount(Decimal("100.00"), 0)


def test_split_amount_rejects_sub_cent_total():
    with pytest.raises(InvalidArgumentError):
        split_amount(Decimal("10.005"), 2)


def test_percentage_handles_zero_whole():
    assert percentage(Decimal("50.00"), Decimal("0")) == Decimal("0.00")
    assert percentage(Decimal("50.00"), Decimal("200.00")) == Decimal("25.00")
    assert percentage(Decimal("1.00"), Decimal("3.00")) == Decimal("33.33")


def test_to_money_quantizes():
    assert to_money("10.005") == Decimal("10.01")
    assert to_money(2.5) == Decimal("2.50")
