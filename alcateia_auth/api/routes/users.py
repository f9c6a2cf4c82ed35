from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from alcateia_auth.db.session import get_db
from alcateia_auth.schemas.subscription import UserIdentifyRequest, UserSubject
from alcateia_auth.services.subscriptions import get_or_create_user, build_user_subject

router = APIRouter()


@router.post("", response_model=UserSubject)
def identify_user(body: UserIdentifyRequest, db: Session = Depends(get_db)):
    """
    Find or create the user for an authenticated email and return the
    identity payload (id, email, active subscription) the issuer signs.
    """
    user = get_or_create_user(db, body.email)
    return build_user_subject(db, user)
