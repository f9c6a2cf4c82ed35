from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from alcateia_auth.db.session import get_db
from alcateia_auth.schemas.ledger import (
    ProducerSessionCreate,
    ProducerSessionCreated,
    ProducerSessionResponse,
)
from alcateia_auth.services import ledger

router = APIRouter()


@router.post("", response_model=ProducerSessionCreated)
def book_session(body: ProducerSessionCreate, db: Session = Depends(get_db)):
    session = ledger.book_producer_session(
        db,
        subscription_id=body.subscription_id,
        producer_name=body.producer_name,
        session_date=body.session_date,
        notes=body.notes,
    )
    return {"session_id": session.id}


@router.get("/{subscription_id:int}", response_model=List[ProducerSessionResponse])
def list_sessions(subscription_id: int, db: Session = Depends(get_db)):
    return ledger.list_producer_sessions(db, subscription_id)
