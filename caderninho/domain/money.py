"""Decimal money helpers and the installment amount splitter"""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import List

from caderninho.domain.exceptions import InvalidArgumentError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_money(value) -> Decimal:
    """Coerce a value to a 2-place Decimal (half-up). Floats go through str()."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100 rounded to 2 places; 0 when whole is 0"""
    if whole == 0:
        return ZERO
    return (part / whole * HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)


def split_amount(total: Decimal, count: int) -> List[Decimal]:
    """
    Split a total into `count` shares for installment billing.

    Every share but the last is total / count truncated to cents; the last
    share absorbs the remainder so the shares always sum to exactly `total`.

    Example:
        100.00 / 3 → [33.33, 33.33, 33.34]

    Raises:
        InvalidArgumentError: count < 1, or total has sub-cent precision
    """
    if count < 1:
        raise InvalidArgumentError(f"Installment count must be at least 1, got {count}")

    total = Decimal(total)
    if total != total.quantize(CENT):
        raise InvalidArgumentError(f"Amount {total} has more than 2 decimal places")

    base_share = (total / count).quantize(CENT, rounding=ROUND_DOWN)
    shares = [base_share] * (count - 1)

    # Last share absorbs rounding remainder to ensure exact total
    shares.append(total - base_share * (count - 1))
    return [share.quantize(CENT) for share in shares]
