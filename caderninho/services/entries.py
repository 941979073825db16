"""Monthly entry management (recurring income and outflows)"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from caderninho.domain.entries import summarize_entries
from caderninho.domain.exceptions import MonthlyEntryNotFoundError
from caderninho.domain.models import EntrySummary, MonthlyEntry
from caderninho.domain.statement import validate_period
from caderninho.infrastructure.database.repositories import MonthlyEntryRepository
from caderninho.utils.date_utils import next_month

logger = logging.getLogger(__name__)


class MonthlyEntryService:
    def __init__(self, db: Session):
        self.entries = MonthlyEntryRepository(db)

    def create(self, entry: MonthlyEntry) -> MonthlyEntry:
        entry.description = entry.description.strip()
        created = self.entries.create(entry)
        logger.info("Monthly entry created", extra={"entry_id": created.id})
        return created

    def update(self, entry_id: int, changes: MonthlyEntry) -> MonthlyEntry:
        changes.id = entry_id
        changes.description = changes.description.strip()
        updated = self.entries.update(changes)
        if updated is None:
            raise MonthlyEntryNotFoundError(f"Monthly entry {entry_id} not found")
        return updated

    def delete(self, entry_id: int) -> None:
        if not self.entries.delete(entry_id):
            raise MonthlyEntryNotFoundError(f"Monthly entry {entry_id} not found")

    def set_active(self, entry_id: int, is_active: bool) -> MonthlyEntry:
        entry = self.entries.set_active(entry_id, is_active)
        if entry is None:
            raise MonthlyEntryNotFoundError(f"Monthly entry {entry_id} not found")
        return entry

    def list(self, year: Optional[int] = None, month: Optional[int] = None) -> List[MonthlyEntry]:
        return self.entries.list(year=year, month=month)

    def duplicate_to_next_month(self, entry_id: int, amount: Decimal, today: Optional[date] = None) -> MonthlyEntry:
        """Copy an entry into the following month with a new amount"""
        original = self.entries.get(entry_id)
        if original is None:
            raise MonthlyEntryNotFoundError(f"Monthly entry {entry_id} not found")

        # Entries without a reference month roll forward from the current month
        today = today or date.today()
        year, month = next_month(original.year or today.year, original.month or today.month)
        validate_period(year, month)

        duplicate = self.entries.create(
            MonthlyEntry(
                entry_type=original.entry_type,
                description=original.description,
                amount=amount,
                operation=original.operation,
                is_active=True,
                month=month,
                year=year,
            )
        )
        logger.info(
            "Monthly entry duplicated",
            extra={"entry_id": entry_id, "new_entry_id": duplicate.id, "month": month, "year": year},
        )
        return duplicate

    def summarize(self, year: int, month: int) -> EntrySummary:
        validate_period(year, month)
        return summarize_entries(self.entries.list(), year, month)
