"""Unit tests for expense validation"""

from dataclasses import replace
from decimal import Decimal
from caderninho.domain.models import PaymentMethod
from caderninho.domain.validation import validate_expense


def _codes(issues):
    return {(issue.field, issue.code) for issue in issues}


def test_valid_credit_card_expense(card_expense):
    assert validate_expense(card_expense) == []


def test_cash_expense_needs_no_card(card_expense):
    expense = replace(card_expense, payment_method=PaymentMethod.CASH, card_id=None, installment_count=1)

    assert validate_expense(expense) == []


def test_debit_card_requires_card(card_expense):
    expense = replace(card_expense, payment_method=PaymentMethod.DEBIT_CARD, card_id=None, installment_count=1)

    assert _codes(validate_expense(expense)) == {("card_id", "required")}


def test_installments_only_for_credit_card(card_expense):
    expense = replace(card_expense, payment_method=PaymentMethod.PIX, card_id=None)

    assert _codes(validate_expense(expense)) == {("installment_count", "credit_card_only")}


def test_reports_every_issue_at_once(card_expense):
    expense = replace(card_expense, amount=Decimal("-1"), description="  ", installment_count=0, card_id=None)

    assert _codes(validate_expense(expense)) == {
        ("amount", "not_positive"),
        ("description", "required"),
        ("installment_count", "out_of_range"),
        ("card_id", "required"),
    }


def test_field_order_does_not_matter(card_expense):
    """Card is checked against the final payment method, not while fields are assigned"""
    expense = replace(card_expense, card_id=None, installment_count=1)
    expense.payment_method = PaymentMethod.CASH

    assert validate_expense(expense) == []
