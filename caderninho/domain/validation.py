"""Expense validation, run once after every field is set"""

from typing import List

from caderninho.domain.installments import MAX_INSTALLMENTS
from caderninho.domain.models import Expense, PaymentMethod, ValidationIssue


def validate_expense(expense: Expense, max_installments: int = MAX_INSTALLMENTS) -> List[ValidationIssue]:
    """
    Check an expense against the domain rules.

    Returns every issue found (empty list when valid) instead of raising,
    so the caller can report all problems at once.
    """
    issues = []

    if expense.amount is None or expense.amount <= 0:
        issues.append(ValidationIssue("amount", "not_positive", "Amount must be greater than zero"))

    if not expense.description or not expense.description.strip():
        issues.append(ValidationIssue("description", "required", "Description is required"))

    if not 1 <= expense.installment_count <= max_installments:
        issues.append(
            ValidationIssue(
                "installment_count",
                "out_of_range",
                f"Installment count must be between 1 and {max_installments}",
            )
        )
    elif expense.installment_count > 1 and expense.payment_method != PaymentMethod.CREDIT_CARD:
        issues.append(
            ValidationIssue(
                "installment_count",
                "credit_card_only",
                "Only credit card expenses can be split into installments",
            )
        )

    if expense.payment_method.requires_card and expense.card_id is None:
        issues.append(
            ValidationIssue(
                "card_id",
                "required",
                f"A card is required when paying with {expense.payment_method.label.lower()}",
            )
        )

    return issues
