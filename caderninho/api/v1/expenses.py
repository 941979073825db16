"""/v1/expenses - expense creation, installments and invoice import"""

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from caderninho.api.dependencies import get_request_id, http_error
from caderninho.api.v1.schemas import (
    ExpenseCreatedResponse,
    ExpenseRequest,
    ExpenseResponse,
    InstallmentResponse,
    InvoiceImportRequest,
    InvoiceImportResponse,
)
from caderninho.domain.exceptions import DomainException
from caderninho.domain.models import Expense
from caderninho.infrastructure.database.session import get_db
from caderninho.infrastructure.observability.logging import log_installments_generated
from caderninho.infrastructure.observability.metrics import record_expense
from caderninho.services.expenses import ExpenseService, InvoiceLine
from caderninho.services.installments import InstallmentService

router = APIRouter()


@router.post("/expenses", response_model=ExpenseCreatedResponse, status_code=201)
def create_expense(request_body: ExpenseRequest, request: Request, db: Session = Depends(get_db)):
    """
    Register an expense.

    Flow:
    1. Validate the expense (card required for card payments, installments credit-only)
    2. For credit card purchases, generate the installment schedule from the card's closing day
    3. Persist expense + installments in a single transaction
    """
    request_id = get_request_id(request)

    try:
        expense, installments = ExpenseService(db).create_expense(Expense(**request_body.model_dump()))
        db.commit()
    except DomainException as e:
        db.rollback()
        logging.warning(f"Expense rejected: {e}", extra={"request_id": request_id})
        raise http_error(e) from e

    record_expense(expense.payment_method.value, len(installments))
    if installments:
        log_installments_generated(
            request_id,
            expense.id,
            expense.card_id,
            len(installments),
            installments[0].due_date,
            expense.amount,
        )

    return ExpenseCreatedResponse(
        expense=ExpenseResponse.model_validate(expense),
        installments=[InstallmentResponse.model_validate(i) for i in installments],
    )


@router.get("/expenses", response_model=List[ExpenseResponse])
def list_expenses(
    start: date = Query(..., description="First purchase date (inclusive)"),
    end: date = Query(..., description="Last purchase date (inclusive)"),
    db: Session = Depends(get_db),
):
    if start > end:
        raise HTTPException(status_code=400, detail="start must be on or before end")
    return [ExpenseResponse.model_validate(e) for e in ExpenseService(db).list_expenses(start, end)]


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    try:
        expense = ExpenseService(db).get_expense(expense_id)
    except DomainException as e:
        raise http_error(e) from e
    return ExpenseResponse.model_validate(expense)


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    """Delete an expense together with its installments"""
    try:
        ExpenseService(db).delete_expense(expense_id)
        db.commit()
    except DomainException as e:
        db.rollback()
        raise http_error(e) from e


@router.get("/expenses/{expense_id}/installments", response_model=List[InstallmentResponse])
def list_expense_installments(expense_id: int, db: Session = Depends(get_db)):
    try:
        ExpenseService(db).get_expense(expense_id)
    except DomainException as e:
        raise http_error(e) from e
    installments = InstallmentService(db).list_by_expense(expense_id)
    return [InstallmentResponse.model_validate(i) for i in installments]


@router.post("/expenses/import-invoice", response_model=InvoiceImportResponse, status_code=201)
def import_card_invoice(request_body: InvoiceImportRequest, request: Request, db: Session = Depends(get_db)):
    """
    Import the lines of a credit card invoice as single-installment expenses.

    Unknown establishments are created under the "other" category;
    lines already imported are skipped.
    """
    request_id = get_request_id(request)
    lines = [InvoiceLine(**line.model_dump()) for line in request_body.lines]

    try:
        created = ExpenseService(db).import_card_invoice(request_body.card_id, lines)
        db.commit()
    except DomainException as e:
        db.rollback()
        logging.warning(f"Invoice import failed: {e}", extra={"request_id": request_id})
        raise http_error(e) from e

    for expense in created:
        record_expense(expense.payment_method.value, 1)

    return InvoiceImportResponse(
        created_count=len(created),
        expenses=[ExpenseResponse.model_validate(e) for e in created],
    )
