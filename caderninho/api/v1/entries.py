"""/v1/monthly-entries - recurring income and outflows"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from caderninho.api.dependencies import http_error
from caderninho.api.v1.schemas import (
    DuplicateRequest,
    EntrySummaryResponse,
    MonthlyEntryRequest,
    MonthlyEntryResponse,
    ToggleActiveRequest,
)
from caderninho.domain.exceptions import DomainException
from caderninho.domain.models import MonthlyEntry
from caderninho.infrastructure.database.session import get_db
from caderninho.services.entries import MonthlyEntryService

router = APIRouter()


@router.post("/monthly-entries", response_model=MonthlyEntryResponse, status_code=201)
def create_entry(request_body: MonthlyEntryRequest, db: Session = Depends(get_db)):
    entry = MonthlyEntryService(db).create(MonthlyEntry(**request_body.model_dump()))
    db.commit()
    return MonthlyEntryResponse.model_validate(entry)


@router.get("/monthly-entries", response_model=List[MonthlyEntryResponse])
def list_entries(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return [MonthlyEntryResponse.model_validate(e) for e in MonthlyEntryService(db).list(year, month)]


@router.get("/monthly-entries/summary", response_model=EntrySummaryResponse)
def summarize_entries(
    year: int = Query(...),
    month: int = Query(...),
    db: Session = Depends(get_db),
):
    """Income, outflow and net of the active entries applying to a month"""
    try:
        summary = MonthlyEntryService(db).summarize(year, month)
    except DomainException as e:
        raise http_error(e) from e
    return EntrySummaryResponse.model_validate(summary)


@router.put("/monthly-entries/{entry_id}", response_model=MonthlyEntryResponse)
def update_entry(entry_id: int, request_body: MonthlyEntryRequest, db: Session = Depends(get_db)):
    try:
        entry = MonthlyEntryService(db).update(entry_id, MonthlyEntry(**request_body.model_dump()))
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return MonthlyEntryResponse.model_validate(entry)


@router.delete("/monthly-entries/{entry_id}", status_code=204)
def delete_entry(entry_id: int, db: Session = Depends(get_db)):
    try:
        MonthlyEntryService(db).delete(entry_id)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e


@router.patch("/monthly-entries/{entry_id}/active", response_model=MonthlyEntryResponse)
def toggle_entry(entry_id: int, request_body: ToggleActiveRequest, db: Session = Depends(get_db)):
    try:
        entry = MonthlyEntryService(db).set_active(entry_id, request_body.is_active)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return MonthlyEntryResponse.model_validate(entry)


@router.post("/monthly-entries/{entry_id}/duplicate", response_model=MonthlyEntryResponse, status_code=201)
def duplicate_entry(entry_id: int, request_body: DuplicateRequest, db: Session = Depends(get_db)):
    try:
        entry = MonthlyEntryService(db).duplicate_to_next_month(entry_id, request_body.amount)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e
    return MonthlyEntryResponse.model_validate(entry)
