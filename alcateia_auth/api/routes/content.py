from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from alcateia_auth.db.session import get_db
from alcateia_auth.schemas.ledger import ContentAccessCreate, ContentAccessResponse
from alcateia_auth.services import ledger

router = APIRouter()


@router.post("/access")
def record_access(body: ContentAccessCreate, db: Session = Depends(get_db)):
    ledger.record_content_access(db, body.user_id, body.content_type, body.content_id)
    return {"success": True}


@router.get("/{user_id:int}", response_model=List[ContentAccessResponse])
def list_access(user_id: int, db: Session = Depends(get_db)):
    return ledger.list_content_access(db, user_id)
