"""Data access layer - maps ORM records to domain models"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from caderninho.domain.models import (
    Card,
    Category,
    CreditCardInstallment,
    Establishment,
    Expense,
    MonthlyEntry,
    MonthlySpendingLimit,
    PaymentMethod,
)
from caderninho.infrastructure.database.models import (
    CardRecord,
    EstablishmentRecord,
    ExpenseRecord,
    InstallmentRecord,
    MonthlyEntryRecord,
    SpendingLimitRecord,
)


def card_to_domain(record: CardRecord) -> Card:
    return Card(
        id=record.id,
        name=record.name,
        last_four_digits=record.last_four_digits,
        card_type=record.card_type,
        brand=record.brand,
        closing_day=record.closing_day,
    )


def establishment_to_domain(record: EstablishmentRecord) -> Establishment:
    return Establishment(
        id=record.id,
        name=record.name,
        category=record.category,
        card_invoice_name=record.card_invoice_name,
    )


def expense_to_domain(record: ExpenseRecord, with_relations: bool = True) -> Expense:
    expense = Expense(
        id=record.id,
        amount=record.amount,
        purchase_date=record.purchase_date,
        description=record.description,
        payment_method=record.payment_method,
        establishment_id=record.establishment_id,
        card_id=record.card_id,
        installment_count=record.installment_count,
    )
    if with_relations:
        if record.establishment is not None:
            expense.establishment = establishment_to_domain(record.establishment)
        if record.card is not None:
            expense.card = card_to_domain(record.card)
    return expense


def installment_to_domain(record: InstallmentRecord, with_relations: bool = True) -> CreditCardInstallment:
    installment = CreditCardInstallment(
        id=record.id,
        expense_id=record.expense_id,
        card_id=record.card_id,
        installment_number=record.installment_number,
        total_installments=record.total_installments,
        due_date=record.due_date,
        amount=record.amount,
        is_paid=record.is_paid,
        paid_date=record.paid_date,
    )
    if with_relations:
        if record.expense is not None:
            installment.expense = expense_to_domain(record.expense)
        if record.card is not None:
            installment.card = card_to_domain(record.card)
    return installment


def limit_to_domain(record: SpendingLimitRecord) -> MonthlySpendingLimit:
    return MonthlySpendingLimit(
        id=record.id,
        category=record.category,
        month=record.month,
        year=record.year,
        limit_amount=record.limit_amount,
        is_active=record.is_active,
    )


def entry_to_domain(record: MonthlyEntryRecord) -> MonthlyEntry:
    return MonthlyEntry(
        id=record.id,
        entry_type=record.entry_type,
        description=record.description,
        amount=record.amount,
        operation=record.operation,
        is_active=record.is_active,
        month=record.month,
        year=record.year,
    )


class CardRepository:
    """Repository for cards"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, card: Card) -> Card:
        record = CardRecord(
            name=card.name,
            last_four_digits=card.last_four_digits,
            card_type=card.card_type,
            brand=card.brand,
            closing_day=card.closing_day,
        )
        self.db.add(record)
        self.db.flush()
        return card_to_domain(record)

    def get(self, card_id: int) -> Optional[Card]:
        record = self.db.get(CardRecord, card_id)
        return card_to_domain(record) if record else None

    def list(self) -> List[Card]:
        return [card_to_domain(r) for r in self.db.query(CardRecord).order_by(CardRecord.name).all()]

    def update(self, card: Card) -> Optional[Card]:
        record = self.db.get(CardRecord, card.id)
        if record is None:
            return None
        record.name = card.name
        record.last_four_digits = card.last_four_digits
        record.card_type = card.card_type
        record.brand = card.brand
        record.closing_day = card.closing_day
        self.db.flush()
        return card_to_domain(record)

    def delete(self, card_id: int) -> bool:
        record = self.db.get(CardRecord, card_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


class EstablishmentRepository:
    """Repository for establishments"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, establishment: Establishment) -> Establishment:
        record = EstablishmentRecord(
            name=establishment.name,
            category=establishment.category,
            card_invoice_name=establishment.card_invoice_name,
        )
        self.db.add(record)
        self.db.flush()
        return establishment_to_domain(record)

    def get(self, establishment_id: int) -> Optional[Establishment]:
        record = self.db.get(EstablishmentRecord, establishment_id)
        return establishment_to_domain(record) if record else None

    def get_by_invoice_name(self, invoice_name: str) -> Optional[Establishment]:
        record = (
            self.db.query(EstablishmentRecord)
            .filter(EstablishmentRecord.card_invoice_name == invoice_name)
            .first()
        )
        return establishment_to_domain(record) if record else None

    def list(self, category: Optional[Category] = None) -> List[Establishment]:
        query = self.db.query(EstablishmentRecord)
        if category is not None:
            query = query.filter(EstablishmentRecord.category == category)
        return [establishment_to_domain(r) for r in query.order_by(EstablishmentRecord.name).all()]

    def update(self, establishment: Establishment) -> Optional[Establishment]:
        record = self.db.get(EstablishmentRecord, establishment.id)
        if record is None:
            return None
        record.name = establishment.name
        record.category = establishment.category
        record.card_invoice_name = establishment.card_invoice_name
        self.db.flush()
        return establishment_to_domain(record)

    def delete(self, establishment_id: int) -> bool:
        record = self.db.get(EstablishmentRecord, establishment_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


class ExpenseRepository:
    """Repository for expenses and their installments"""

    def __init__(self, db: Session):
        self.db = db

    def create_with_installments(
        self,
        expense: Expense,
        installments: List[CreditCardInstallment],
    ) -> Expense:
        """Persist an expense and its installment batch in the current transaction"""
        record = ExpenseRecord(
            description=expense.description,
            amount=expense.amount,
            purchase_date=expense.purchase_date,
            payment_method=expense.payment_method,
            installment_count=expense.installment_count,
            establishment_id=expense.establishment_id,
            card_id=expense.card_id,
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing

        for inst in installments:
            self.db.add(
                InstallmentRecord(
                    expense_id=record.id,
                    card_id=inst.card_id,
                    installment_number=inst.installment_number,
                    total_installments=inst.total_installments,
                    due_date=inst.due_date,
                    amount=inst.amount,
                    is_paid=inst.is_paid,
                    paid_date=inst.paid_date,
                )
            )
        self.db.flush()
        return expense_to_domain(record)

    def get(self, expense_id: int) -> Optional[Expense]:
        record = self.db.get(ExpenseRecord, expense_id)
        return expense_to_domain(record) if record else None

    def list_between(self, start: date, end: date) -> List[Expense]:
        records = (
            self.db.query(ExpenseRecord)
            .options(joinedload(ExpenseRecord.establishment), joinedload(ExpenseRecord.card))
            .filter(ExpenseRecord.purchase_date >= start, ExpenseRecord.purchase_date <= end)
            .order_by(ExpenseRecord.purchase_date.desc(), ExpenseRecord.id.desc())
            .all()
        )
        return [expense_to_domain(r) for r in records]

    def exists_duplicate(self, purchase_date: date, establishment_id: int, amount: Decimal, card_id: int) -> bool:
        """True if an identical purchase (same day, place, amount and card) exists"""
        return (
            self.db.query(ExpenseRecord.id)
            .filter(
                ExpenseRecord.purchase_date == purchase_date,
                ExpenseRecord.establishment_id == establishment_id,
                ExpenseRecord.amount == amount,
                ExpenseRecord.card_id == card_id,
            )
            .first()
            is not None
        )

    def delete(self, expense_id: int) -> bool:
        record = self.db.get(ExpenseRecord, expense_id)
        if record is None:
            return False
        self.db.delete(record)  # cascades to installments
        self.db.flush()
        return True


class InstallmentRepository:
    """Repository for credit card installments"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(InstallmentRecord).options(
            joinedload(InstallmentRecord.expense).joinedload(ExpenseRecord.establishment),
            joinedload(InstallmentRecord.card),
        )

    def get(self, installment_id: int) -> Optional[CreditCardInstallment]:
        record = self.db.get(InstallmentRecord, installment_id)
        return installment_to_domain(record) if record else None

    def list_by_expense(self, expense_id: int) -> List[CreditCardInstallment]:
        records = (
            self._query()
            .filter(InstallmentRecord.expense_id == expense_id)
            .order_by(InstallmentRecord.installment_number)
            .all()
        )
        return [installment_to_domain(r) for r in records]

    def list_by_card_and_period(self, card_id: int, start: date, end: date) -> List[CreditCardInstallment]:
        records = (
            self._query()
            .filter(
                InstallmentRecord.card_id == card_id,
                InstallmentRecord.due_date >= start,
                InstallmentRecord.due_date <= end,
            )
            .order_by(InstallmentRecord.due_date, InstallmentRecord.installment_number)
            .all()
        )
        return [installment_to_domain(r) for r in records]

    def list_due_between(self, start: date, end: date) -> List[CreditCardInstallment]:
        records = (
            self._query()
            .filter(InstallmentRecord.due_date >= start, InstallmentRecord.due_date <= end)
            .all()
        )
        return [installment_to_domain(r) for r in records]

    def mark_paid(self, installment_id: int, paid_date: date) -> Optional[CreditCardInstallment]:
        record = self.db.get(InstallmentRecord, installment_id)
        if record is None:
            return None
        record.is_paid = True
        record.paid_date = paid_date
        self.db.flush()
        return installment_to_domain(record)


class SpendingLimitRepository:
    """Repository for monthly spending limits"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, limit: MonthlySpendingLimit) -> MonthlySpendingLimit:
        record = SpendingLimitRecord(
            category=limit.category,
            month=limit.month,
            year=limit.year,
            limit_amount=limit.limit_amount,
            is_active=limit.is_active,
        )
        self.db.add(record)
        self.db.flush()
        return limit_to_domain(record)

    def get(self, limit_id: int) -> Optional[MonthlySpendingLimit]:
        record = self.db.get(SpendingLimitRecord, limit_id)
        return limit_to_domain(record) if record else None

    def find(
        self,
        category: Category,
        month: int,
        year: int,
        exclude_id: Optional[int] = None,
    ) -> Optional[MonthlySpendingLimit]:
        query = self.db.query(SpendingLimitRecord).filter(
            SpendingLimitRecord.category == category,
            SpendingLimitRecord.month == month,
            SpendingLimitRecord.year == year,
        )
        if exclude_id is not None:
            query = query.filter(SpendingLimitRecord.id != exclude_id)
        record = query.first()
        return limit_to_domain(record) if record else None

    def list_for_month(self, year: int, month: int, active_only: bool = False) -> List[MonthlySpendingLimit]:
        query = self.db.query(SpendingLimitRecord).filter(
            SpendingLimitRecord.year == year,
            SpendingLimitRecord.month == month,
        )
        if active_only:
            query = query.filter(SpendingLimitRecord.is_active.is_(True))
        return [limit_to_domain(r) for r in query.order_by(SpendingLimitRecord.category).all()]

    def update(self, limit: MonthlySpendingLimit) -> Optional[MonthlySpendingLimit]:
        record = self.db.get(SpendingLimitRecord, limit.id)
        if record is None:
            return None
        record.category = limit.category
        record.month = limit.month
        record.year = limit.year
        record.limit_amount = limit.limit_amount
        self.db.flush()
        return limit_to_domain(record)

    def set_active(self, limit_id: int, is_active: bool) -> Optional[MonthlySpendingLimit]:
        record = self.db.get(SpendingLimitRecord, limit_id)
        if record is None:
            return None
        record.is_active = is_active
        self.db.flush()
        return limit_to_domain(record)

    def delete(self, limit_id: int) -> bool:
        record = self.db.get(SpendingLimitRecord, limit_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


class MonthlyEntryRepository:
    """Repository for monthly entries"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, entry: MonthlyEntry) -> MonthlyEntry:
        record = MonthlyEntryRecord(
            entry_type=entry.entry_type,
            description=entry.description,
            amount=entry.amount,
            operation=entry.operation,
            is_active=entry.is_active,
            month=entry.month,
            year=entry.year,
        )
        self.db.add(record)
        self.db.flush()
        return entry_to_domain(record)

    def get(self, entry_id: int) -> Optional[MonthlyEntry]:
        record = self.db.get(MonthlyEntryRecord, entry_id)
        return entry_to_domain(record) if record else None

    def list(self, year: Optional[int] = None, month: Optional[int] = None) -> List[MonthlyEntry]:
        query = self.db.query(MonthlyEntryRecord)
        if year is not None:
            query = query.filter(MonthlyEntryRecord.year == year)
        if month is not None:
            query = query.filter(MonthlyEntryRecord.month == month)
        return [entry_to_domain(r) for r in query.order_by(MonthlyEntryRecord.id).all()]

    def update(self, entry: MonthlyEntry) -> Optional[MonthlyEntry]:
        record = self.db.get(MonthlyEntryRecord, entry.id)
        if record is None:
            return None
        record.entry_type = entry.entry_type
        record.description = entry.description
        record.amount = entry.amount
        record.operation = entry.operation
        record.month = entry.month
        record.year = entry.year
        self.db.flush()
        return entry_to_domain(record)

    def set_active(self, entry_id: int, is_active: bool) -> Optional[MonthlyEntry]:
        record = self.db.get(MonthlyEntryRecord, entry_id)
        if record is None:
            return None
        record.is_active = is_active
        self.db.flush()
        return entry_to_domain(record)

    def delete(self, entry_id: int) -> bool:
        record = self.db.get(MonthlyEntryRecord, entry_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.flush()
        return True


class StatementRepository:
    """Read side used to build monthly statements (implements StatementSource)"""

    def __init__(self, db: Session):
        self.db = db

    def fetch_expenses(self, start: date, end: date, exclude_method: PaymentMethod) -> List[Expense]:
        records = (
            self.db.query(ExpenseRecord)
            .options(joinedload(ExpenseRecord.establishment), joinedload(ExpenseRecord.card))
            .filter(
                ExpenseRecord.purchase_date >= start,
                ExpenseRecord.purchase_date <= end,
                ExpenseRecord.payment_method != exclude_method,
            )
            .all()
        )
        return [expense_to_domain(r) for r in records]

    def fetch_installments_due(self, start: date, end: date) -> List[CreditCardInstallment]:
        return InstallmentRepository(self.db).list_due_between(start, end)

    def fetch_active_limits(self, year: int, month: int) -> List[MonthlySpendingLimit]:
        return SpendingLimitRepository(self.db).list_for_month(year, month, active_only=True)
