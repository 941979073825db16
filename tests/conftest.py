"""Pytest fixtures for testing"""

import os

# Point the app at the test database before any caderninho module builds its engine
TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ.setdefault("CADERNINHO_DATABASE_URL", TEST_DATABASE_URL)

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from caderninho.api.main import create_app
from caderninho.domain.models import (
    Card,
    CardBrand,
    CardType,
    Category,
    CreditCardInstallment,
    Establishment,
    Expense,
    PaymentMethod,
)
from caderninho.infrastructure.database.models import Base
from caderninho.infrastructure.database.session import enable_sqlite_foreign_keys, get_db


# Test database
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
event.listen(engine, "connect", enable_sqlite_foreign_keys)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def credit_card() -> Card:
    """Credit card closing on the 15th"""
    return Card(
        id=1,
        name="Nubank",
        last_four_digits="1234",
        card_type=CardType.CREDIT,
        brand=CardBrand.MASTERCARD,
        closing_day=15,
    )


@pytest.fixture
def supermarket() -> Establishment:
    return Establishment(id=10, name="Mercado Central", category=Category.SUPERMARKET)


@pytest.fixture
def pharmacy() -> Establishment:
    return Establishment(id=11, name="Drogaria Sao Paulo", category=Category.PHARMACY)


@pytest.fixture
def card_expense(credit_card: Card, supermarket: Establishment) -> Expense:
    """100.00 purchase in 3 installments on 2025-03-20"""
    return Expense(
        id=100,
        amount=Decimal("100.00"),
        purchase_date=date(2025, 3, 20),
        description="Monthly groceries",
        payment_method=PaymentMethod.CREDIT_CARD,
        establishment_id=supermarket.id,
        card_id=credit_card.id,
        installment_count=3,
        establishment=supermarket,
        card=credit_card,
    )


@pytest.fixture
def make_installment():
    """Build installments with expense and card loaded, as storage returns them"""

    def _make(expense: Expense, number: int, total: int, due_date: date, amount: str) -> CreditCardInstallment:
        return CreditCardInstallment(
            installment_number=number,
            total_installments=total,
            due_date=due_date,
            amount=Decimal(amount),
            card_id=expense.card_id,
            expense_id=expense.id,
            expense=expense,
            card=expense.card,
        )

    return _make
