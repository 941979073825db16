"""SQLAlchemy ORM models"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from caderninho.domain.models import (
    CardBrand,
    CardType,
    Category,
    EntryType,
    OperationType,
    PaymentMethod,
)

Base = declarative_base()

MONEY = Numeric(12, 2, asdecimal=True)


def _enum(enum_cls, name: str) -> Enum:
    # Store the enum values ("credit_card"), not member names
    return Enum(enum_cls, name=name, values_callable=lambda cls: [member.value for member in cls])


class CardRecord(Base):
    """Payment card"""

    __tablename__ = "card"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    last_four_digits = Column(String(4), nullable=False)
    card_type = Column(_enum(CardType, "card_type"), nullable=False)
    brand = Column(_enum(CardBrand, "card_brand"), nullable=False)
    closing_day = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class EstablishmentRecord(Base):
    """Establishment with its spending category"""

    __tablename__ = "establishment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    category = Column(_enum(Category, "category"), nullable=False, index=True)
    card_invoice_name = Column(String(200), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class ExpenseRecord(Base):
    """Expense as purchased"""

    __tablename__ = "expense"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(Text, nullable=False)
    amount = Column(MONEY, nullable=False)
    purchase_date = Column(Date, nullable=False, index=True)
    payment_method = Column(_enum(PaymentMethod, "payment_method"), nullable=False)
    installment_count = Column(Integer, nullable=False, default=1)
    establishment_id = Column(Integer, ForeignKey("establishment.id"), nullable=False)
    card_id = Column(Integer, ForeignKey("card.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    establishment = relationship("EstablishmentRecord")
    card = relationship("CardRecord")
    installments = relationship(
        "InstallmentRecord",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="InstallmentRecord.installment_number",
    )


class InstallmentRecord(Base):
    """Credit card installment of an expense"""

    __tablename__ = "credit_card_installment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    expense_id = Column(Integer, ForeignKey("expense.id", ondelete="CASCADE"), nullable=False, index=True)
    card_id = Column(Integer, ForeignKey("card.id"), nullable=False, index=True)
    installment_number = Column(Integer, nullable=False)
    total_installments = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    amount = Column(MONEY, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    expense = relationship("ExpenseRecord", back_populates="installments")
    card = relationship("CardRecord")


class SpendingLimitRecord(Base):
    """Monthly cap per category"""

    __tablename__ = "monthly_spending_limit"
    __table_args__ = (UniqueConstraint("category", "month", "year", name="uq_limit_category_month_year"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(_enum(Category, "limit_category"), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    limit_amount = Column(MONEY, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class MonthlyEntryRecord(Base):
    """Recurring income or outflow"""

    __tablename__ = "monthly_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_type = Column(_enum(EntryType, "entry_type"), nullable=False)
    description = Column(String(200), nullable=False)
    amount = Column(MONEY, nullable=False)
    operation = Column(_enum(OperationType, "operation_type"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    month = Column(Integer, nullable=True)
    year = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
