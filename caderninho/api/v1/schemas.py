"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from caderninho.domain.models import (
    CardBrand,
    CardType,
    Category,
    EntryType,
    OperationType,
    PaymentMethod,
)


class ORMSchema(BaseModel):
    """Response schema built from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


# Cards

class CardRequest(BaseModel):
    """Request body for POST/PUT /v1/cards"""

    name: str = Field(..., min_length=1, max_length=100)
    last_four_digits: str = Field(..., pattern=r"^\d{4}$")
    card_type: CardType
    brand: CardBrand
    closing_day: Optional[int] = Field(None, ge=1, le=31, description="Billing-cycle closing day")


class CardResponse(ORMSchema):
    id: int
    name: str
    last_four_digits: str
    card_type: CardType
    brand: CardBrand
    closing_day: Optional[int] = None


# Establishments

class EstablishmentRequest(BaseModel):
    """Request body for POST/PUT /v1/establishments"""

    name: str = Field(..., min_length=1, max_length=200)
    category: Category
    card_invoice_name: Optional[str] = Field(None, max_length=200)


class EstablishmentResponse(ORMSchema):
    id: int
    name: str
    category: Category
    card_invoice_name: Optional[str] = None


# Expenses and installments

class ExpenseRequest(BaseModel):
    """Request body for POST /v1/expenses"""

    description: str = Field(..., max_length=500)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    purchase_date: date
    payment_method: PaymentMethod
    establishment_id: int
    card_id: Optional[int] = None
    installment_count: int = Field(1, description="Number of installments (credit card only)")


class ExpenseResponse(ORMSchema):
    id: int
    description: str
    amount: Decimal
    purchase_date: date
    payment_method: PaymentMethod
    establishment_id: int
    card_id: Optional[int] = None
    installment_count: int


class InstallmentResponse(ORMSchema):
    id: int
    expense_id: int
    card_id: int
    installment_number: int
    total_installments: int
    label: str
    due_date: date
    amount: Decimal
    is_paid: bool
    paid_date: Optional[date] = None


class ExpenseCreatedResponse(BaseModel):
    """Response for POST /v1/expenses"""

    expense: ExpenseResponse
    installments: List[InstallmentResponse]


class InvoiceLineSchema(BaseModel):
    purchase_date: date
    establishment_name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., decimal_places=2)


class InvoiceImportRequest(BaseModel):
    """Request body for POST /v1/expenses/import-invoice"""

    card_id: int
    lines: List[InvoiceLineSchema]


class InvoiceImportResponse(BaseModel):
    created_count: int
    expenses: List[ExpenseResponse]


class PayInstallmentRequest(BaseModel):
    paid_date: Optional[date] = None


# Spending limits

class SpendingLimitRequest(BaseModel):
    """Request body for POST/PUT /v1/spending-limits"""

    category: Category
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    limit_amount: Decimal = Field(..., ge=0, decimal_places=2)


class SpendingLimitResponse(ORMSchema):
    id: int
    category: Category
    month: int
    year: int
    limit_amount: Decimal
    is_active: bool


class ToggleActiveRequest(BaseModel):
    is_active: bool


class DuplicateRequest(BaseModel):
    """New amount for a copy made into the next month"""

    amount: Decimal = Field(..., gt=0, decimal_places=2)


# Monthly entries

class MonthlyEntryRequest(BaseModel):
    """Request body for POST/PUT /v1/monthly-entries"""

    entry_type: EntryType
    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    operation: OperationType
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=2000, le=2100)


class MonthlyEntryResponse(ORMSchema):
    id: int
    entry_type: EntryType
    description: str
    amount: Decimal
    operation: OperationType
    is_active: bool
    month: Optional[int] = None
    year: Optional[int] = None


class EntrySummaryResponse(ORMSchema):
    year: int
    month: int
    total_income: Decimal
    total_outflow: Decimal
    net: Decimal
    entry_count: int


# Statements

class StatementTransactionSchema(ORMSchema):
    expense_id: Optional[int] = None
    description: str
    establishment_name: str
    category: Category
    date: date
    amount: Decimal
    payment_method: PaymentMethod
    payment_method_label: str
    purchase_date: date
    card_name: Optional[str] = None
    installment_label: Optional[str] = None
    is_installment: bool
    due_date: Optional[date] = None


class CategorySummarySchema(ORMSchema):
    category: Category
    category_label: str
    total_spent: Decimal
    monthly_limit: Optional[Decimal] = None
    available_balance: Optional[Decimal] = None
    percentage_used: Optional[Decimal] = None
    is_over_limit: Optional[bool] = None
    transactions: List[StatementTransactionSchema]


class MonthlyStatementResponse(ORMSchema):
    """Response for GET /v1/statements/{year}/{month}"""

    year: int
    month: int
    categories: List[CategorySummarySchema]
    total_expenses: Decimal
    total_limits: Decimal
    available_balance: Decimal
    percentage_used: Decimal
