"""GET /v1/statements/{year}/{month} - reconciled monthly statement"""

import logging
import time

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from caderninho.api.dependencies import get_request_id, http_error
from caderninho.api.v1.schemas import MonthlyStatementResponse
from caderninho.config import settings
from caderninho.domain.exceptions import DomainException
from caderninho.domain.statement import build_statement
from caderninho.infrastructure.database.repositories import StatementRepository
from caderninho.infrastructure.database.session import get_db
from caderninho.infrastructure.observability.logging import log_statement_built
from caderninho.infrastructure.observability.metrics import record_statement, statement_build_histogram

router = APIRouter()


@router.get("/statements/{year}/{month}", response_model=MonthlyStatementResponse)
def get_monthly_statement(year: int, month: int, request: Request, db: Session = Depends(get_db)):
    """
    Everything due in a month, grouped by spending category.

    Non credit card expenses count on their purchase date; credit card
    purchases count through their installments on each due date.
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        with statement_build_histogram.time():
            statement = build_statement(
                year,
                month,
                StatementRepository(db),
                min_year=settings.statement_min_year,
                max_year=settings.statement_max_year,
            )
    except DomainException as e:
        logging.warning(f"Statement rejected: {e}", extra={"request_id": request_id})
        raise http_error(e) from e

    duration_ms = (time.perf_counter() - start_time) * 1000
    record_statement(statement)
    log_statement_built(
        request_id,
        year,
        month,
        len(statement.categories),
        statement.total_expenses,
        statement.total_limits,
        duration_ms,
    )

    return MonthlyStatementResponse.model_validate(statement)
