"""
Subscriptions, their feature entitlements and payment-driven status changes.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from alcateia_auth.core.plan_features import PlanFeatureTable
from alcateia_auth.models.subscription import (
    Subscription,
    SubscriptionFeature,
    SubscriptionStatus,
    PlanTier,
    FeatureKind,
)
from alcateia_auth.models.user import User
from alcateia_auth.utils.clock import utcnow
from alcateia_auth.utils.email import normalize_email

logger = logging.getLogger(__name__)

# Payment provider action -> subscription status
PAYMENT_ACTION_STATUS = {
    "payment.approved": SubscriptionStatus.ACTIVE,
    "payment.cancelled": SubscriptionStatus.CANCELLED,
    "payment.failed": SubscriptionStatus.CANCELLED,
}

# Once a subscription reaches one of these it is never moved again here.
TERMINAL_STATUSES = (SubscriptionStatus.CANCELLED.value, SubscriptionStatus.EXPIRED.value)


def create_subscription(
    db: Session,
    user_id: int,
    plan_type: PlanTier,
    plan_features: PlanFeatureTable,
    mercadopago_subscription_id: Optional[str] = None,
) -> Subscription:
    """
    Create a pending subscription with one feature row per FeatureKind.

    The subscription and its features are committed together; any failure
    rolls both back and re-raises.
    """
    plan_type = PlanTier(plan_type)
    features = plan_features[plan_type]
    try:
        subscription = Subscription(
            user_id=user_id,
            plan_type=plan_type.value,
            status=SubscriptionStatus.PENDING.value,
            mercadopago_subscription_id=mercadopago_subscription_id,
        )
        db.add(subscription)
        db.flush()
        for kind, limit in features.items():
            db.add(SubscriptionFeature(
                subscription_id=subscription.id,
                feature_type=kind.value,
                feature_value=limit,
                used_value=0,
            ))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(subscription)
    logger.info(
        "Created %s subscription %s for user %s", plan_type.value, subscription.id, user_id
    )
    return subscription


def serialize_subscription(subscription: Subscription) -> dict:
    by_kind = {f.feature_type: f for f in subscription.features}
    features = {}
    for kind in FeatureKind:
        row = by_kind.get(kind.value)
        features[kind.value] = {
            "limit": row.feature_value if row else 0,
            "used": row.used_value if row else 0,
        }
    return {
        "id": subscription.id,
        "plan_type": subscription.plan_type,
        "status": subscription.status,
        "features": features,
    }


def get_active_subscription(db: Session, user_id: int) -> Optional[dict]:
    """Most recently created active subscription for the user, or None."""
    subscription = (
        db.query(Subscription)
        .filter(
            Subscription.user_id == user_id,
            Subscription.status == SubscriptionStatus.ACTIVE.value,
        )
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        .first()
    )
    if not subscription:
        return None
    return serialize_subscription(subscription)


def record_feature_usage(
    db: Session,
    subscription_id: int,
    feature_kind: FeatureKind,
    amount: int = 1,
) -> Optional[SubscriptionFeature]:
    """Increment a feature's used-count with a single UPDATE. Limits are not enforced."""
    criteria = (
        SubscriptionFeature.subscription_id == subscription_id,
        SubscriptionFeature.feature_type == FeatureKind(feature_kind).value,
    )
    updated = (
        db.query(SubscriptionFeature)
        .filter(*criteria)
        .update(
            {SubscriptionFeature.used_value: func.coalesce(SubscriptionFeature.used_value, 0) + amount},
            synchronize_session=False,
        )
    )
    db.commit()
    if not updated:
        return None
    # commit expired the identity map, so this reads the stored counter
    return db.query(SubscriptionFeature).filter(*criteria).first()


def apply_payment_event(db: Session, external_reference: str, action: str) -> int:
    """
    Move subscriptions matching the payment provider reference according to
    the action. Unknown actions and unmatched references change nothing.
    Returns the number of subscriptions updated.
    """
    new_status = PAYMENT_ACTION_STATUS.get(action)
    if new_status is None or not external_reference:
        return 0

    updated = (
        db.query(Subscription)
        .filter(
            Subscription.mercadopago_subscription_id == external_reference,
            Subscription.status.notin_(TERMINAL_STATUSES),
        )
        .update(
            {Subscription.status: new_status.value, Subscription.updated_at: utcnow()},
            synchronize_session=False,
        )
    )
    db.commit()
    if updated:
        logger.info("Subscription %s -> %s (%s)", external_reference, new_status.value, action)
    else:
        logger.info("No subscription updated for reference %s (%s)", external_reference, action)
    return updated


def get_or_create_user(db: Session, email: str) -> User:
    """Match a user by email, creating the record on first authentication."""
    email = normalize_email(email)
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    user = User(email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s with email %s", user.id, email)
    return user


def build_user_subject(db: Session, user: User) -> dict:
    """Identity payload embedded in issued tokens: id, email and active plan."""
    return {
        "id": user.id,
        "email": user.email,
        "subscription": get_active_subscription(db, user.id),
    }
