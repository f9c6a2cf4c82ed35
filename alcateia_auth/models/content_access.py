from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from alcateia_auth.db.base import Base
from alcateia_auth.utils.clock import utcnow


class ContentAccess(Base):
    """Audit trail of content opened by a user. No deduplication."""

    __tablename__ = "content_access"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    content_type = Column(String, nullable=False)
    content_id = Column(String, nullable=False)
    accessed_at = Column(DateTime, default=utcnow, index=True)
