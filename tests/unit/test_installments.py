"""Unit tests for installment schedule generation"""

import pytest
from dataclasses import replace
from datetime import date
from decimal import Decimal
from caderninho.domain.exceptions import (
    CardNotFoundError,
    CardRequiredError,
    InvalidArgumentError,
    MissingClosingDayError,
)
from caderninho.domain.installments import generate_installments


def test_generate_installments_amounts(card_expense, credit_card):
    """Test last installment absorbs remainder"""
    installments = generate_installments(card_expense, credit_card)

    assert [i.amount for i in installments] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert sum(i.amount for i in installments) == card_expense.amount


def test_generate_installments_dates(card_expense, credit_card):
    """Purchase after the closing day starts next month, then monthly"""
    installments = generate_installments(card_expense, credit_card, due_day=15)

    assert [i.due_date for i in installments] == [
        date(2025, 4, 15),
        date(2025, 5, 15),
        date(2025, 6, 15),
    ]


def test_generate_installments_numbering(card_expense, credit_card):
    installments = generate_installments(card_expense, credit_card)

    assert [i.installment_number for i in installments] == [1, 2, 3]
    assert all(i.total_installments == 3 for i in installments)
    assert [i.label for i in installments] == ["1/3", "2/3", "3/3"]
    assert all(not i.is_paid and i.paid_date is None for i in installments)
    assert all(i.card_id == credit_card.id and i.expense_id == card_expense.id for i in installments)


def test_generate_single_installment(card_expense, credit_card):
    expense = replace(card_expense, installment_count=1, purchase_date=date(2025, 3, 1))
    installments = generate_installments(expense, credit_card)

    assert len(installments) == 1
    assert installments[0].amount == Decimal("100.00")
    assert installments[0].due_date == date(2025, 3, 15)


def test_uses_configured_due_day(card_expense, credit_card):
    installments = generate_installments(card_expense, credit_card, due_day=5)

    assert installments[0].due_date == date(2025, 4, 5)


@pytest.mark.parametrize("count", [0, -2, 121])
def test_rejects_installment_count_out_of_range(card_expense, credit_card, count):
    with pytest.raises(InvalidArgumentError):
        generate_installments(replace(card_expense, installment_count=count), credit_card)


def test_rejects_non_positive_amount(card_expense, credit_card):
    with pytest.raises(InvalidArgumentError):
        generate_installments(replace(card_expense, amount=Decimal("0.00")), credit_card)


def test_requires_card_id(card_expense, credit_card):
    with pytest.raises(CardRequiredError):
        generate_installments(replace(card_expense, card_id=None), credit_card)


def test_requires_existing_card(card_expense):
    with pytest.raises(CardNotFoundError):
        generate_installments(card_expense, None)


def test_rejects_card_of_another_expense(card_expense, credit_card):
    with pytest.raises(CardNotFoundError):
        generate_installments(card_expense, replace(credit_card, id=99))


def test_requires_closing_day(card_expense, credit_card):
    with pytest.raises(MissingClosingDayError):
        generate_installments(card_expense, replace(credit_card, closing_day=None))


def test_precondition_order(card_expense):
    """Argument errors are reported before card problems"""
    broken = replace(card_expense, installment_count=0, card_id=None)
    with pytest.raises(InvalidArgumentError):
        generate_installments(broken, None)
