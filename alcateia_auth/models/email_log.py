from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from alcateia_auth.db.base import Base
from alcateia_auth.utils.clock import utcnow


class EmailLog(Base):
    """
    Best-effort record of transactional emails.

    email_type: verification | password_reset | welcome
    status: pending | sent
    """

    __tablename__ = "email_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    email_type = Column(String, nullable=False)
    recipient_email = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
