"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"
    PIX = "pix"
    DEPOSIT = "deposit"
    BANK_SLIP = "bank_slip"

    @property
    def requires_card(self) -> bool:
        return self in (PaymentMethod.CREDIT_CARD, PaymentMethod.DEBIT_CARD)

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CREDIT_CARD: "Credit card",
    PaymentMethod.DEBIT_CARD: "Debit card",
    PaymentMethod.CASH: "Cash",
    PaymentMethod.PIX: "PIX",
    PaymentMethod.DEPOSIT: "Bank deposit",
    PaymentMethod.BANK_SLIP: "Bank slip",
}


class Category(str, Enum):
    """Spending category attached to an establishment"""

    SUPERMARKET = "supermarket"
    CLOTHING_STORE = "clothing_store"
    GAS_STATION = "gas_station"
    ONLINE_SERVICE = "online_service"
    GAMES = "games"
    DEPARTMENT_STORE = "department_store"
    RESTAURANT = "restaurant"
    DELIVERY = "delivery"
    CHARITY = "charity"
    CHURCH = "church"
    EVENTS = "events"
    ENTERTAINMENT = "entertainment"
    PHARMACY = "pharmacy"
    HEALTH = "health"
    TRANSPORT = "transport"
    SERVICES = "services"
    PERSONAL_CARE = "personal_care"
    E_COMMERCE = "e_commerce"
    OTHER = "other"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.SUPERMARKET: "Supermarket",
    Category.CLOTHING_STORE: "Clothing store",
    Category.GAS_STATION: "Gas station",
    Category.ONLINE_SERVICE: "Online service",
    Category.GAMES: "Games",
    Category.DEPARTMENT_STORE: "Department store",
    Category.RESTAURANT: "Restaurant",
    Category.DELIVERY: "Delivery",
    Category.CHARITY: "Charity",
    Category.CHURCH: "Church",
    Category.EVENTS: "Events",
    Category.ENTERTAINMENT: "Entertainment",
    Category.PHARMACY: "Pharmacy",
    Category.HEALTH: "Health",
    Category.TRANSPORT: "Transport",
    Category.SERVICES: "Services",
    Category.PERSONAL_CARE: "Personal care",
    Category.E_COMMERCE: "E-commerce",
    Category.OTHER: "Other",
}


class CardType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    VOUCHER = "voucher"


class CardBrand(str, Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"
    HIPERCARD = "hipercard"
    ELO = "elo"


class EntryType(str, Enum):
    SALARY = "salary"
    TAX = "tax"
    MONTHLY_BILL = "monthly_bill"
    OTHER = "other"


class OperationType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class Card:
    """Payment card; closing_day drives the installment billing cycle"""

    name: str
    last_four_digits: str
    card_type: CardType
    brand: CardBrand
    closing_day: Optional[int] = None
    id: Optional[int] = None


@dataclass
class Establishment:
    """Place where purchases happen; its category is the statement grouping key"""

    name: str
    category: Category
    card_invoice_name: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Expense:
    """A purchase. establishment/card are hydrated by the storage layer when read."""

    amount: Decimal
    purchase_date: date
    description: str
    payment_method: PaymentMethod
    establishment_id: int
    card_id: Optional[int] = None
    installment_count: int = 1
    id: Optional[int] = None
    establishment: Optional[Establishment] = None
    card: Optional[Card] = None


@dataclass
class CreditCardInstallment:
    """One scheduled payment of a credit-card expense"""

    installment_number: int
    total_installments: int
    due_date: date
    amount: Decimal
    card_id: int
    expense_id: Optional[int] = None
    is_paid: bool = False
    paid_date: Optional[date] = None
    id: Optional[int] = None
    expense: Optional[Expense] = None
    card: Optional[Card] = None

    @property
    def label(self) -> str:
        return f"{self.installment_number}/{self.total_installments}"


@dataclass
class MonthlySpendingLimit:
    """Spending cap for one category in one month"""

    category: Category
    month: int
    year: int
    limit_amount: Decimal
    is_active: bool = True
    id: Optional[int] = None


@dataclass
class MonthlyEntry:
    """Recurring monthly cash flow such as salary, taxes or fixed bills"""

    entry_type: EntryType
    description: str
    amount: Decimal
    operation: OperationType
    is_active: bool = True
    month: Optional[int] = None
    year: Optional[int] = None
    id: Optional[int] = None


@dataclass
class ValidationIssue:
    """Single problem found while validating an entity"""

    field: str
    code: str
    message: str


@dataclass
class StatementTransaction:
    """Normalized view of an expense or installment inside a statement"""

    expense_id: Optional[int]
    description: str
    establishment_name: str
    category: Category
    date: date  # purchase date for plain expenses, due date for installments
    amount: Decimal
    payment_method: PaymentMethod
    payment_method_label: str
    purchase_date: date
    card_name: Optional[str] = None
    installment_label: Optional[str] = None  # "k/N"
    is_installment: bool = False
    due_date: Optional[date] = None


@dataclass
class CategorySummary:
    """Spending of one category in a month, compared with its limit"""

    category: Category
    category_label: str
    total_spent: Decimal
    monthly_limit: Optional[Decimal] = None
    available_balance: Optional[Decimal] = None
    percentage_used: Optional[Decimal] = None
    is_over_limit: Optional[bool] = None
    transactions: List[StatementTransaction] = field(default_factory=list)


@dataclass
class MonthlyStatement:
    """Reconciled view of everything due in a month"""

    year: int
    month: int
    categories: List[CategorySummary]
    total_expenses: Decimal
    total_limits: Decimal
    available_balance: Decimal
    percentage_used: Decimal


@dataclass
class EntrySummary:
    """Totals of active monthly entries for a month"""

    year: int
    month: int
    total_income: Decimal
    total_outflow: Decimal
    net: Decimal
    entry_count: int
