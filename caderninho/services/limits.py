"""Monthly spending limit management"""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from caderninho.domain.exceptions import DuplicateLimitError, SpendingLimitNotFoundError
from caderninho.domain.models import MonthlySpendingLimit
from caderninho.domain.statement import validate_period
from caderninho.infrastructure.database.repositories import SpendingLimitRepository
from caderninho.utils.date_utils import next_month

logger = logging.getLogger(__name__)


class SpendingLimitService:
    """Keeps at most one limit per (category, month, year)"""

    def __init__(self, db: Session):
        self.limits = SpendingLimitRepository(db)

    def _ensure_unique(self, limit: MonthlySpendingLimit, exclude_id=None) -> None:
        if self.limits.find(limit.category, limit.month, limit.year, exclude_id=exclude_id) is not None:
            logger.warning(
                "Duplicate spending limit rejected",
                extra={"category": limit.category.value, "month": limit.month, "year": limit.year},
            )
            raise DuplicateLimitError(
                f"A limit for {limit.category.value} already exists in {limit.month}/{limit.year}"
            )

    def _get(self, limit_id: int) -> MonthlySpendingLimit:
        limit = self.limits.get(limit_id)
        if limit is None:
            raise SpendingLimitNotFoundError(f"Spending limit {limit_id} not found")
        return limit

    def create(self, limit: MonthlySpendingLimit) -> MonthlySpendingLimit:
        validate_period(limit.year, limit.month)
        self._ensure_unique(limit)
        created = self.limits.create(limit)
        logger.info("Spending limit created", extra={"limit_id": created.id, "category": created.category.value})
        return created

    def update(self, limit_id: int, changes: MonthlySpendingLimit) -> MonthlySpendingLimit:
        validate_period(changes.year, changes.month)
        current = self._get(limit_id)
        if (current.category, current.month, current.year) != (changes.category, changes.month, changes.year):
            self._ensure_unique(changes, exclude_id=limit_id)
        changes.id = limit_id
        return self.limits.update(changes)

    def delete(self, limit_id: int) -> None:
        if not self.limits.delete(limit_id):
            raise SpendingLimitNotFoundError(f"Spending limit {limit_id} not found")

    def set_active(self, limit_id: int, is_active: bool) -> MonthlySpendingLimit:
        limit = self.limits.set_active(limit_id, is_active)
        if limit is None:
            raise SpendingLimitNotFoundError(f"Spending limit {limit_id} not found")
        return limit

    def list_for_month(self, year: int, month: int) -> List[MonthlySpendingLimit]:
        validate_period(year, month)
        return self.limits.list_for_month(year, month)

    def duplicate_to_next_month(self, limit_id: int, amount: Decimal) -> MonthlySpendingLimit:
        """Copy a limit into the following month with a new amount"""
        original = self._get(limit_id)
        year, month = next_month(original.year, original.month)
        validate_period(year, month)
        duplicate = MonthlySpendingLimit(
            category=original.category,
            month=month,
            year=year,
            limit_amount=amount,
            is_active=True,
        )
        self._ensure_unique(duplicate)
        created = self.limits.create(duplicate)
        logger.info(
            "Spending limit duplicated",
            extra={"limit_id": limit_id, "new_limit_id": created.id, "month": month, "year": year},
        )
        return created
