"""Installment queries and payment"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from caderninho.domain.exceptions import CardNotFoundError, InvalidArgumentError, InstallmentNotFoundError
from caderninho.domain.models import CreditCardInstallment
from caderninho.infrastructure.database.repositories import CardRepository, InstallmentRepository

logger = logging.getLogger(__name__)


class InstallmentService:
    def __init__(self, db: Session):
        self.installments = InstallmentRepository(db)
        self.cards = CardRepository(db)

    def list_by_expense(self, expense_id: int) -> List[CreditCardInstallment]:
        return self.installments.list_by_expense(expense_id)

    def list_by_card_and_period(self, card_id: int, start: date, end: date) -> List[CreditCardInstallment]:
        if start > end:
            raise InvalidArgumentError("start must be on or before end")
        if self.cards.get(card_id) is None:
            raise CardNotFoundError(f"Card {card_id} not found")
        return self.installments.list_by_card_and_period(card_id, start, end)

    def mark_as_paid(self, installment_id: int, paid_date: Optional[date] = None) -> CreditCardInstallment:
        """Flag an installment as paid. Paying twice just refreshes the paid date."""
        existing = self.installments.get(installment_id)
        if existing is None:
            raise InstallmentNotFoundError(f"Installment {installment_id} not found")
        if existing.is_paid:
            logger.warning("Installment already paid", extra={"installment_id": installment_id})

        installment = self.installments.mark_paid(installment_id, paid_date or date.today())
        logger.info(
            "Installment paid",
            extra={"installment_id": installment_id, "paid_date": installment.paid_date.isoformat()},
        )
        return installment
