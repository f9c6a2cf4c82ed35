"""Append-only producer-session bookings and content-access events."""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from alcateia_auth.models.content_access import ContentAccess
from alcateia_auth.models.producer_session import ProducerSession

logger = logging.getLogger(__name__)


def book_producer_session(
    db: Session,
    subscription_id: int,
    producer_name: str,
    session_date: datetime,
    notes: Optional[str] = None,
) -> ProducerSession:
    session = ProducerSession(
        subscription_id=subscription_id,
        producer_name=producer_name,
        session_date=session_date,
        notes=notes,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("Booked producer session %s for subscription %s", session.id, subscription_id)
    return session


def list_producer_sessions(db: Session, subscription_id: int) -> List[ProducerSession]:
    return (
        db.query(ProducerSession)
        .filter(ProducerSession.subscription_id == subscription_id)
        .order_by(ProducerSession.session_date.desc(), ProducerSession.created_at.desc())
        .all()
    )


def record_content_access(db: Session, user_id: int, content_type: str, content_id: str) -> ContentAccess:
    event = ContentAccess(user_id=user_id, content_type=content_type, content_id=content_id)
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def list_content_access(db: Session, user_id: int) -> List[ContentAccess]:
    return (
        db.query(ContentAccess)
        .filter(ContentAccess.user_id == user_id)
        .order_by(ContentAccess.accessed_at.desc(), ContentAccess.id.desc())
        .all()
    )
