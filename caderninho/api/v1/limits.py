"""/v1/spending-limits - monthly caps per category"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from caderninho.api.dependencies import http_error
from caderninho.api.v1.schemas import (
    DuplicateRequest,
    SpendingLimitRequest,
    SpendingLimitResponse,
    ToggleActiveRequest,
)
from caderninho.domain.exceptions import DomainException
from caderninho.domain.models import MonthlySpendingLimit
from caderninho.infrastructure.database.session import get_db
from caderninho.services.limits import SpendingLimitService

router = APIRouter()


@router.post("/spending-limits", response_model=SpendingLimitResponse, status_code=201)
def create_limit(request_body: SpendingLimitRequest, db: Session = Depends(get_db)):
    try:
        limit = SpendingLimitService(db).create(MonthlySpendingLimit(**request_body.model_dump()))
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return SpendingLimitResponse.model_validate(limit)


@router.get("/spending-limits", response_model=List[SpendingLimitResponse])
def list_limits(
    year: int = Query(...),
    month: int = Query(...),
    db: Session = Depends(get_db),
):
    try:
        limits = SpendingLimitService(db).list_for_month(year, month)
    except DomainException as e:
        raise http_error(e) from e
    return [SpendingLimitResponse.model_validate(limit) for limit in limits]


@router.put("/spending-limits/{limit_id}", response_model=SpendingLimitResponse)
def update_limit(limit_id: int, request_body: SpendingLimitRequest, db: Session = Depends(get_db)):
    try:
        limit = SpendingLimitService(db).update(limit_id, MonthlySpendingLimit(**request_body.model_dump()))
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return SpendingLimitResponse.model_validate(limit)


@router.delete("/spending-limits/{limit_id}", status_code=204)
def delete_limit(limit_id: int, db: Session = Depends(get_db)):
    try:
        SpendingLimitService(db).delete(limit_id)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e


@router.patch("/spending-limits/{limit_id}/active", response_model=SpendingLimitResponse)
def toggle_limit(limit_id: int, request_body: ToggleActiveRequest, db: Session = Depends(get_db)):
    """Inactive limits are ignored by statements"""
    try:
        limit = SpendingLimitService(db).set_active(limit_id, request_body.is_active)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return SpendingLimitResponse.model_validate(limit)


@router.post("/spending-limits/{limit_id}/duplicate", response_model=SpendingLimitResponse, status_code=201)
def duplicate_limit(limit_id: int, request_body: DuplicateRequest, db: Session = Depends(get_db)):
    """Copy a limit into the next month with a new amount"""
    try:
        limit = SpendingLimitService(db).duplicate_to_next_month(limit_id, request_body.amount)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return SpendingLimitResponse.model_validate(limit)
