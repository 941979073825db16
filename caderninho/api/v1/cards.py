"""/v1/cards - card management"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from caderninho.api.v1.schemas import CardRequest, CardResponse
from caderninho.domain.models import Card
from caderninho.infrastructure.database.repositories import CardRepository
from caderninho.infrastructure.database.session import get_db

router = APIRouter()


@router.post("/cards", response_model=CardResponse, status_code=201)
def create_card(request_body: CardRequest, db: Session = Depends(get_db)):
    card = CardRepository(db).create(Card(**request_body.model_dump()))
    db.commit()
    return CardResponse.model_validate(card)


@router.get("/cards", response_model=List[CardResponse])
def list_cards(db: Session = Depends(get_db)):
    return [CardResponse.model_validate(c) for c in CardRepository(db).list()]


@router.get("/cards/{card_id}", response_model=CardResponse)
def get_card(card_id: int, db: Session = Depends(get_db)):
    card = CardRepository(db).get(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail="Card not found")
    return CardResponse.model_validate(card)


@router.put("/cards/{card_id}", response_model=CardResponse)
def update_card(card_id: int, request_body: CardRequest, db: Session = Depends(get_db)):
    """
    Update a card.

    Changing closing_day only affects installments generated afterwards.
    """
    card = CardRepository(db).update(Card(id=card_id, **request_body.model_dump()))
    if card is None:
        raise HTTPException(status_code=404, detail="Card not found")
    db.commit()
    return CardResponse.model_validate(card)


@router.delete("/cards/{card_id}", status_code=204)
def delete_card(card_id: int, db: Session = Depends(get_db)):
    try:
        deleted = CardRepository(db).delete(card_id)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Card is referenced by expenses")
    if not deleted:
        raise HTTPException(status_code=404, detail="Card not found")
    db.commit()
