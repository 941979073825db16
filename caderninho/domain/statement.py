"""Monthly statement engine - reconciles expenses and card installments per category"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Protocol

from caderninho.domain.exceptions import InvalidArgumentError
from caderninho.domain.models import (
    Category,
    CategorySummary,
    CreditCardInstallment,
    Expense,
    MonthlySpendingLimit,
    MonthlyStatement,
    PaymentMethod,
    StatementTransaction,
)
from caderninho.domain.money import ZERO, percentage
from caderninho.utils.date_utils import month_bounds

MIN_YEAR = 2000
MAX_YEAR = 2100
UNKNOWN_ESTABLISHMENT = "Not informed"


class StatementSource(Protocol):
    """Read access the statement engine needs from storage"""

    def fetch_expenses(
        self, start: date, end: date, exclude_method: PaymentMethod
    ) -> List[Expense]:
        """Expenses purchased in [start, end] not paid with exclude_method, establishment/card loaded"""
        ...

    def fetch_installments_due(self, start: date, end: date) -> List[CreditCardInstallment]:
        """Installments due in [start, end] with expense, its establishment, and card loaded"""
        ...

    def fetch_active_limits(self, year: int, month: int) -> List[MonthlySpendingLimit]:
        ...


def validate_period(year: int, month: int, min_year: int = MIN_YEAR, max_year: int = MAX_YEAR) -> None:
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Month must be between 1 and 12, got {month}")
    if not min_year <= year <= max_year:
        raise InvalidArgumentError(f"Year must be between {min_year} and {max_year}, got {year}")


def expense_to_transaction(expense: Expense) -> StatementTransaction:
    """Plain (non credit card) expense, dated by purchase date"""
    establishment = expense.establishment
    return StatementTransaction(
        expense_id=expense.id,
        description=expense.description,
        establishment_name=establishment.name if establishment else UNKNOWN_ESTABLISHMENT,
        category=establishment.category if establishment else Category.OTHER,
        date=expense.purchase_date,
        amount=expense.amount,
        payment_method=expense.payment_method,
        payment_method_label=expense.payment_method.label,
        purchase_date=expense.purchase_date,
        card_name=expense.card.name if expense.card else None,
    )


def installment_to_transaction(installment: CreditCardInstallment) -> StatementTransaction:
    """Credit card installment, dated by its due date"""
    expense = installment.expense
    establishment = expense.establishment if expense else None
    return StatementTransaction(
        expense_id=installment.expense_id,
        description=expense.description if expense else UNKNOWN_ESTABLISHMENT,
        establishment_name=establishment.name if establishment else UNKNOWN_ESTABLISHMENT,
        category=establishment.category if establishment else Category.OTHER,
        date=installment.due_date,
        amount=installment.amount,
        payment_method=PaymentMethod.CREDIT_CARD,
        payment_method_label=PaymentMethod.CREDIT_CARD.label,
        purchase_date=expense.purchase_date if expense else installment.due_date,
        card_name=installment.card.name if installment.card else None,
        installment_label=installment.label,
        is_installment=True,
        due_date=installment.due_date,
    )


def summarize_category(
    category: Category,
    transactions: List[StatementTransaction],
    limit: Optional[MonthlySpendingLimit],
) -> CategorySummary:
    """Total one category and compare it with its limit, if any"""
    total_spent = sum((t.amount for t in transactions), ZERO)
    summary = CategorySummary(
        category=category,
        category_label=category.label,
        total_spent=total_spent,
        transactions=sorted(transactions, key=lambda t: t.date, reverse=True),
    )

    if limit is not None:
        summary.monthly_limit = limit.limit_amount
        summary.available_balance = limit.limit_amount - total_spent
        summary.percentage_used = percentage(total_spent, limit.limit_amount)
        summary.is_over_limit = total_spent > limit.limit_amount

    return summary


def aggregate_statement(
    year: int,
    month: int,
    expenses: Iterable[Expense],
    installments: Iterable[CreditCardInstallment],
    limits: Iterable[MonthlySpendingLimit],
) -> MonthlyStatement:
    """
    Merge expenses and installments into a per-category statement.

    Inputs must already be filtered to the month. Categories come from each
    establishment as loaded now, so recategorizing an establishment changes
    past statements too.
    """
    transactions = [expense_to_transaction(e) for e in expenses if e.payment_method != PaymentMethod.CREDIT_CARD]
    transactions.extend(installment_to_transaction(i) for i in installments)

    # Group by category
    groups: Dict[Category, List[StatementTransaction]] = {}
    for txn in transactions:
        groups.setdefault(txn.category, []).append(txn)

    active_limits = [limit for limit in limits if limit.is_active]
    limit_by_category: Dict[Category, MonthlySpendingLimit] = {}
    for limit in active_limits:
        # At most one per category is expected; keep the first if not
        limit_by_category.setdefault(limit.category, limit)

    summaries = [
        summarize_category(category, txns, limit_by_category.get(category))
        for category, txns in groups.items()
    ]
    summaries.sort(key=lambda s: (-s.total_spent, s.category.value))

    # Totals include limits of categories with no spending
    total_expenses = sum((s.total_spent for s in summaries), ZERO)
    total_limits = sum((limit.limit_amount for limit in active_limits), ZERO)

    return MonthlyStatement(
        year=year,
        month=month,
        categories=summaries,
        total_expenses=total_expenses,
        total_limits=total_limits,
        available_balance=total_limits - total_expenses,
        percentage_used=percentage(total_expenses, total_limits),
    )


def build_statement(
    year: int,
    month: int,
    source: StatementSource,
    min_year: int = MIN_YEAR,
    max_year: int = MAX_YEAR,
) -> MonthlyStatement:
    """
    Build the reconciled statement of what is due in a month.

    Flow:
    1. Validate year/month (before touching storage)
    2. Fetch non credit card expenses purchased in the month
    3. Fetch credit card installments due in the month
    4. Fetch active limits for the month
    5. Group by category and compare with limits

    Raises:
        InvalidArgumentError: month outside 1-12 or year outside bounds
    """
    validate_period(year, month, min_year, max_year)
    start, end = month_bounds(year, month)

    expenses = source.fetch_expenses(start, end, exclude_method=PaymentMethod.CREDIT_CARD)
    installments = source.fetch_installments_due(start, end)
    limits = source.fetch_active_limits(year, month)

    return aggregate_statement(year, month, expenses, installments, limits)
