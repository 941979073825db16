"""Installment queries per card and payment"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from caderninho.api.dependencies import http_error
from caderninho.api.v1.schemas import InstallmentResponse, PayInstallmentRequest
from caderninho.domain.exceptions import CardNotFoundError, DomainException
from caderninho.infrastructure.database.session import get_db
from caderninho.infrastructure.observability.metrics import installments_paid_counter
from caderninho.services.installments import InstallmentService

router = APIRouter()


@router.get("/cards/{card_id}/installments", response_model=List[InstallmentResponse])
def list_card_installments(
    card_id: int,
    start: date = Query(..., description="First due date (inclusive)"),
    end: date = Query(..., description="Last due date (inclusive)"),
    db: Session = Depends(get_db),
):
    """Installments of a card due within a period, by due date"""
    try:
        installments = InstallmentService(db).list_by_card_and_period(card_id, start, end)
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found")
    except DomainException as e:
        raise http_error(e) from e
    return [InstallmentResponse.model_validate(i) for i in installments]


@router.post("/installments/{installment_id}/pay", response_model=InstallmentResponse)
def pay_installment(
    installment_id: int,
    request_body: Optional[PayInstallmentRequest] = None,
    db: Session = Depends(get_db),
):
    """Mark an installment as paid (defaults to today)"""
    try:
        installment = InstallmentService(db).mark_as_paid(
            installment_id, request_body.paid_date if request_body else None
        )
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e

    installments_paid_counter.inc()
    return InstallmentResponse.model_validate(installment)
