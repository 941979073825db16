"""Dependency injection and error translation for FastAPI endpoints"""

from fastapi import HTTPException, Request

from caderninho.domain.exceptions import (
    DomainException,
    DuplicateLimitError,
    ExpenseValidationError,
    InvalidArgumentError,
    NotFoundError,
    PreconditionError,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def http_error(exc: DomainException) -> HTTPException:
    """
    Map a domain exception to an HTTP error.

    - InvalidArgumentError → 400
    - DuplicateLimitError → 409
    - ExpenseValidationError → 422 with the list of issues
    - PreconditionError → 422 (a referenced card/establishment counts as a precondition)
    - NotFoundError → 404
    """
    if isinstance(exc, InvalidArgumentError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, DuplicateLimitError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, ExpenseValidationError):
        return HTTPException(
            status_code=422,
            detail=[{"field": i.field, "code": i.code, "message": i.message} for i in exc.issues],
        )
    if isinstance(exc, PreconditionError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=500, detail="Internal server error")
