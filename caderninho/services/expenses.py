"""Expense creation flow: validation, installment generation and persistence"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from caderninho.config import settings
from caderninho.domain.exceptions import (
    CardNotFoundError,
    EstablishmentNotFoundError,
    ExpenseNotFoundError,
    ExpenseValidationError,
)
from caderninho.domain.installments import generate_installments
from caderninho.domain.models import Category, CreditCardInstallment, Establishment, Expense, PaymentMethod
from caderninho.domain.validation import validate_expense
from caderninho.infrastructure.database.repositories import (
    CardRepository,
    EstablishmentRepository,
    ExpenseRepository,
    InstallmentRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class InvoiceLine:
    """One purchase line of a credit card invoice"""

    purchase_date: date
    establishment_name: str
    amount: Decimal


class ExpenseService:
    """Creates and reads expenses. Callers own the transaction (commit/rollback)."""

    def __init__(self, db: Session):
        self.db = db
        self.expenses = ExpenseRepository(db)
        self.cards = CardRepository(db)
        self.establishments = EstablishmentRepository(db)
        self.installments = InstallmentRepository(db)

    def create_expense(self, expense: Expense) -> Tuple[Expense, List[CreditCardInstallment]]:
        """
        Validate and persist an expense, generating installments for credit cards.

        Nothing is flushed until every check and the installment schedule succeed,
        so a failure leaves no partial expense behind.

        Raises:
            EstablishmentNotFoundError: establishment_id is unknown
            ExpenseValidationError: expense breaks a domain rule
            CardNotFoundError: card_id is unknown
            CardRequiredError / MissingClosingDayError / InvalidArgumentError:
                installment generation preconditions
        """
        if self.establishments.get(expense.establishment_id) is None:
            raise EstablishmentNotFoundError(f"Establishment {expense.establishment_id} not found")

        issues = validate_expense(expense, max_installments=settings.max_installments)
        if issues:
            raise ExpenseValidationError(issues)

        card = None
        if expense.payment_method.requires_card:
            card = self.cards.get(expense.card_id)
            if card is None:
                raise CardNotFoundError(f"Card {expense.card_id} not found")

        installments: List[CreditCardInstallment] = []
        if expense.payment_method == PaymentMethod.CREDIT_CARD:
            installments = generate_installments(
                expense,
                card,
                due_day=settings.installment_due_day,
                max_installments=settings.max_installments,
            )

        created = self.expenses.create_with_installments(expense, installments)
        stored = self.installments.list_by_expense(created.id) if installments else []

        logger.info(
            "Expense created",
            extra={
                "expense_id": created.id,
                "payment_method": created.payment_method.value,
                "installment_count": len(stored),
            },
        )
        return created, stored

    def get_expense(self, expense_id: int) -> Expense:
        expense = self.expenses.get(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(f"Expense {expense_id} not found")
        return expense

    def list_expenses(self, start: date, end: date) -> List[Expense]:
        return self.expenses.list_between(start, end)

    def delete_expense(self, expense_id: int) -> None:
        if not self.expenses.delete(expense_id):
            raise ExpenseNotFoundError(f"Expense {expense_id} not found")
        logger.info("Expense deleted", extra={"expense_id": expense_id})

    def import_card_invoice(self, card_id: int, lines: List[InvoiceLine]) -> List[Expense]:
        """
        Create single-installment credit card expenses from invoice lines.

        - Lines with non-positive amounts are ignored
        - Establishments are matched by invoice name, created as "other" if unknown
        - A line identical to an existing purchase (date, place, amount, card) is skipped
        """
        if self.cards.get(card_id) is None:
            raise CardNotFoundError(f"Card {card_id} not found")

        created: List[Expense] = []
        for line in lines:
            if line.amount <= 0:
                continue

            establishment = self._resolve_invoice_establishment(line.establishment_name)

            if self.expenses.exists_duplicate(line.purchase_date, establishment.id, line.amount, card_id):
                logger.warning(
                    "Duplicate invoice line skipped",
                    extra={
                        "card_id": card_id,
                        "purchase_date": line.purchase_date.isoformat(),
                        "establishment": line.establishment_name,
                        "amount": str(line.amount),
                    },
                )
                continue

            expense, _ = self.create_expense(
                Expense(
                    amount=line.amount,
                    purchase_date=line.purchase_date,
                    description=f"Purchase at {line.establishment_name}",
                    payment_method=PaymentMethod.CREDIT_CARD,
                    establishment_id=establishment.id,
                    card_id=card_id,
                    installment_count=1,
                )
            )
            created.append(expense)

        logger.info("Card invoice imported", extra={"card_id": card_id, "created_count": len(created)})
        return created

    def _resolve_invoice_establishment(self, invoice_name: str) -> Establishment:
        establishment: Optional[Establishment] = self.establishments.get_by_invoice_name(invoice_name)
        if establishment is not None:
            return establishment

        logger.info("Creating establishment from invoice", extra={"establishment": invoice_name})
        return self.establishments.create(
            Establishment(name=invoice_name, category=Category.OTHER, card_invoice_name=invoice_name)
        )
