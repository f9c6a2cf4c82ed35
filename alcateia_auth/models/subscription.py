import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from alcateia_auth.db.base import Base
from alcateia_auth.utils.clock import utcnow


class PlanTier(str, enum.Enum):
    START = "start"
    PLUS = "plus"
    PREMIUM = "premium"


class SubscriptionStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class FeatureKind(str, enum.Enum):
    MUSIC_LIMIT = "music_limit"
    PRODUCER_SESSIONS = "producer_sessions"
    DOMAIN_REGISTRATION = "domain_registration"


class Subscription(Base):
    __tablename__ = "subscriptions"

    # One active plan per user is a convention enforced by query ordering,
    # so user_id is deliberately not unique here.
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=SubscriptionStatus.PENDING.value)
    mercadopago_subscription_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    expires_at = Column(DateTime, nullable=True)

    features = relationship(
        "SubscriptionFeature",
        back_populates="subscription",
        cascade="all, delete-orphan",
    )


class SubscriptionFeature(Base):
    __tablename__ = "subscription_features"
    __table_args__ = (
        UniqueConstraint("subscription_id", "feature_type", name="uq_subscription_feature"),
    )

    id = Column(Integer, primary_key=True, index=True)
    subscription_id = Column(
        Integer, ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    feature_type = Column(String, nullable=False)
    feature_value = Column(Integer, nullable=False, default=0)  # limit
    used_value = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)

    subscription = relationship("Subscription", back_populates="features")
