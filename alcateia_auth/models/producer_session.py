from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from alcateia_auth.db.base import Base
from alcateia_auth.utils.clock import utcnow


class ProducerSession(Base):
    """Booking of a session with one of the community's producers. Append-only."""

    __tablename__ = "producer_sessions"

    id = Column(Integer, primary_key=True, index=True)
    subscription_id = Column(
        Integer, ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    producer_name = Column(String, nullable=False)
    session_date = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)
