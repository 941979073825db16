"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from caderninho.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_installments_generated(
    request_id: str,
    expense_id: int,
    card_id: int,
    installment_count: int,
    first_due_date: date,
    total_amount: Decimal,
) -> None:
    """Log the installment schedule created for an expense"""
    logging.info(
        "Installments generated",
        extra={
            "request_id": request_id,
            "step": "installments_generated",
            "expense_id": expense_id,
            "card_id": card_id,
            "installment_count": installment_count,
            "first_due_date": first_due_date.isoformat(),
            "total_amount": str(total_amount),
        },
    )


def log_statement_built(
    request_id: str,
    year: int,
    month: int,
    category_count: int,
    total_expenses: Decimal,
    total_limits: Decimal,
    duration_ms: float,
) -> None:
    """Log structured statement outcome for analysis"""
    logging.info(
        "Statement built",
        extra={
            "request_id": request_id,
            "step": "statement_built",
            "period": f"{year:04d}-{month:02d}",
            "category_count": category_count,
            "total_expenses": str(total_expenses),
            "total_limits": str(total_limits),
            "duration_ms": duration_ms,
        },
    )
