"""Monthly entry totals (salary, taxes, fixed bills)"""

from typing import Iterable

from caderninho.domain.models import EntrySummary, MonthlyEntry, OperationType
from caderninho.domain.money import ZERO


def applies_to(entry: MonthlyEntry, year: int, month: int) -> bool:
    """Entries without month/year recur every month"""
    return (entry.year is None or entry.year == year) and (entry.month is None or entry.month == month)


def summarize_entries(entries: Iterable[MonthlyEntry], year: int, month: int) -> EntrySummary:
    """Sum active entries that apply to (year, month) into income, outflow and net"""
    total_income = ZERO
    total_outflow = ZERO
    count = 0

    for entry in entries:
        if not entry.is_active or not applies_to(entry, year, month):
            continue
        count += 1
        if entry.operation == OperationType.INCOME:
            total_income += entry.amount
        else:
            total_outflow += entry.amount

    return EntrySummary(
        year=year,
        month=month,
        total_income=total_income,
        total_outflow=total_outflow,
        net=total_income - total_outflow,
        entry_count=count,
    )
