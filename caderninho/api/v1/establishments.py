"""/v1/establishments - establishment management"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from caderninho.api.v1.schemas import EstablishmentRequest, EstablishmentResponse
from caderninho.domain.models import Category, Establishment
from caderninho.infrastructure.database.repositories import EstablishmentRepository
from caderninho.infrastructure.database.session import get_db

router = APIRouter()


@router.post("/establishments", response_model=EstablishmentResponse, status_code=201)
def create_establishment(request_body: EstablishmentRequest, db: Session = Depends(get_db)):
    establishment = EstablishmentRepository(db).create(Establishment(**request_body.model_dump()))
    db.commit()
    return EstablishmentResponse.model_validate(establishment)


@router.get("/establishments", response_model=List[EstablishmentResponse])
def list_establishments(
    category: Optional[Category] = Query(None, description="Filter by category"),
    db: Session = Depends(get_db),
):
    return [EstablishmentResponse.model_validate(e) for e in EstablishmentRepository(db).list(category)]


@router.get("/establishments/{establishment_id}", response_model=EstablishmentResponse)
def get_establishment(establishment_id: int, db: Session = Depends(get_db)):
    establishment = EstablishmentRepository(db).get(establishment_id)
    if establishment is None:
        raise HTTPException(status_code=404, detail="Establishment not found")
    return EstablishmentResponse.model_validate(establishment)


@router.put("/establishments/{establishment_id}", response_model=EstablishmentResponse)
def update_establishment(
    establishment_id: int,
    request_body: EstablishmentRequest,
    db: Session = Depends(get_db),
):
    """
    Update an establishment.

    Statements resolve categories when they are built, so a category change
    here also moves past spending to the new category.
    """
    establishment = EstablishmentRepository(db).update(
        Establishment(id=establishment_id, **request_body.model_dump())
    )
    if establishment is None:
        raise HTTPException(status_code=404, detail="Establishment not found")
    db.commit()
    return EstablishmentResponse.model_validate(establishment)


@router.delete("/establishments/{establishment_id}", status_code=204)
def delete_establishment(establishment_id: int, db: Session = Depends(get_db)):
    try:
        deleted = EstablishmentRepository(db).delete(establishment_id)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Establishment is referenced by expenses")
    if not deleted:
        raise HTTPException(status_code=404, detail="Establishment not found")
    db.commit()
