from sqlalchemy import Column, Integer, String, Boolean, DateTime
from alcateia_auth.db.base import Base
from alcateia_auth.utils.clock import utcnow


class User(Base):
    # Table name kept as "user" to match the auth issuer's schema.
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    email_verified = Column(Boolean, default=False, nullable=False)
    verification_code = Column(String, nullable=True)
    verification_expires_at = Column(DateTime, nullable=True)
    password_reset_code = Column(String, nullable=True)
    password_reset_expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
