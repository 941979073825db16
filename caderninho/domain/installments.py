"""Credit-card installment scheduling"""

from datetime import date
from typing import List, Optional

from caderninho.domain.exceptions import (
    CardNotFoundError,
    CardRequiredError,
    InvalidArgumentError,
    MissingClosingDayError,
)
from caderninho.domain.models import Card, CreditCardInstallment, Expense
from caderninho.domain.money import split_amount
from caderninho.utils.date_utils import add_months

DEFAULT_DUE_DAY = 15
MAX_INSTALLMENTS = 120


def _check_due_day(due_day: int) -> None:
    # Days above 28 would not exist in February
    if not 1 <= due_day <= 28:
        raise InvalidArgumentError(f"Due day must be between 1 and 28, got {due_day}")


def first_due_date(purchase_date: date, closing_day: int, due_day: int = DEFAULT_DUE_DAY) -> date:
    """
    Due date of the first installment of a purchase.

    Purchases on or before the closing day fall into the current billing
    cycle and are due this month; later purchases are due next month.
    The day of month is always pinned to `due_day`.
    """
    if not 1 <= closing_day <= 31:
        raise InvalidArgumentError(f"Closing day must be between 1 and 31, got {closing_day}")
    _check_due_day(due_day)

    offset = 0 if purchase_date.day <= closing_day else 1
    year, month = add_months(purchase_date.year, purchase_date.month, offset)
    return date(year, month, due_day)


def shift_due_date(first_due: date, months: int, due_day: int = DEFAULT_DUE_DAY) -> date:
    """Move a due date forward whole calendar months, re-pinning the day"""
    if months < 0:
        raise InvalidArgumentError(f"Installment index must not be negative, got {months}")
    _check_due_day(due_day)

    year, month = add_months(first_due.year, first_due.month, months)
    return date(year, month, due_day)


def calculate_due_date(
    purchase_date: date,
    closing_day: int,
    installment_index: int,
    due_day: int = DEFAULT_DUE_DAY,
) -> date:
    """Due date of installment `installment_index` (0 = first installment)"""
    if installment_index < 0:
        raise InvalidArgumentError(
            f"Installment index must not be negative, got {installment_index}"
        )
    first = first_due_date(purchase_date, closing_day, due_day)
    return shift_due_date(first, installment_index, due_day)


def generate_installments(
    expense: Expense,
    card: Optional[Card],
    due_day: int = DEFAULT_DUE_DAY,
    max_installments: int = MAX_INSTALLMENTS,
) -> List[CreditCardInstallment]:
    """
    Build the full installment schedule for a credit-card expense.

    Requirements:
    - One installment per month, numbered 1..N
    - Amounts split with split_amount (last installment absorbs remainder)
    - First due date follows the card's closing day

    Nothing is persisted here; the caller stores the expense and its
    installments in one transaction.

    Raises:
        InvalidArgumentError: installment count outside 1..max or amount <= 0
        CardRequiredError: expense has no card_id
        CardNotFoundError: card is missing or is not the expense's card
        MissingClosingDayError: card has no closing day configured
    """
    count = expense.installment_count
    if not 1 <= count <= max_installments:
        raise InvalidArgumentError(
            f"Installment count must be between 1 and {max_installments}, got {count}"
        )
    if expense.amount <= 0:
        raise InvalidArgumentError(f"Expense amount must be positive, got {expense.amount}")

    if expense.card_id is None:
        raise CardRequiredError("A credit card expense must reference a card")

    if card is None or (card.id is not None and card.id != expense.card_id):
        raise CardNotFoundError(f"Card {expense.card_id} not found")

    if card.closing_day is None:
        raise MissingClosingDayError(f"Card '{card.name}' has no closing day configured")

    shares = split_amount(expense.amount, count)
    first_due = first_due_date(expense.purchase_date, card.closing_day, due_day)

    installments = []
    for i in range(count):
        installments.append(
            CreditCardInstallment(
                installment_number=i + 1,
                total_installments=count,
                due_date=shift_due_date(first_due, i, due_day),
                amount=shares[i],
                card_id=expense.card_id,
                expense_id=expense.id,
                is_paid=False,
            )
        )

    return installments
