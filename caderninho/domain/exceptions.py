"""Domain-specific exceptions"""

from typing import List

from caderninho.domain.models import ValidationIssue


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidArgumentError(DomainException):
    """Caller-controlled input is malformed (bad month, installment count, day...)"""

    pass


class PreconditionError(DomainException):
    """A domain rule required by the operation is not met"""

    pass


class NotFoundError(DomainException):
    """Referenced entity does not exist"""

    pass


class CardRequiredError(PreconditionError):
    """Expense has no card but the operation needs one"""

    pass


class CardNotFoundError(PreconditionError, NotFoundError):
    """Referenced card does not exist"""

    pass


class MissingClosingDayError(PreconditionError):
    """Card has no billing-cycle closing day configured"""

    pass


class EstablishmentNotFoundError(PreconditionError, NotFoundError):
    """Referenced establishment does not exist"""

    pass


class ExpenseNotFoundError(NotFoundError):
    pass


class InstallmentNotFoundError(NotFoundError):
    pass


class SpendingLimitNotFoundError(NotFoundError):
    pass


class MonthlyEntryNotFoundError(NotFoundError):
    pass


class DuplicateLimitError(DomainException):
    """A limit already exists for the same category, month and year"""

    pass


class ExpenseValidationError(PreconditionError):
    """Expense failed validation; carries every issue found"""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(f"{issue.field}: {issue.message}" for issue in issues))
