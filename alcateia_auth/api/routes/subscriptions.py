from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from alcateia_auth.core.plan_features import PlanFeatureTable
from alcateia_auth.db.session import get_db
from alcateia_auth.dependencies.services import get_plan_features
from alcateia_auth.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionCreated,
    SubscriptionResponse,
    FeatureUsageRequest,
)
from alcateia_auth.services import subscriptions as subscription_service

router = APIRouter()


@router.post("", response_model=SubscriptionCreated)
def create_subscription(
    body: SubscriptionCreate,
    db: Session = Depends(get_db),
    plan_features: PlanFeatureTable = Depends(get_plan_features),
):
    """Create a pending subscription; it becomes active once the payment webhook approves it."""
    subscription = subscription_service.create_subscription(
        db,
        user_id=body.user_id,
        plan_type=body.plan_type,
        plan_features=plan_features,
        mercadopago_subscription_id=body.mercadopago_subscription_id,
    )
    return {"subscription_id": subscription.id}


@router.get("/{user_id:int}", response_model=Optional[SubscriptionResponse])
def get_user_subscription(user_id: int, db: Session = Depends(get_db)):
    return subscription_service.get_active_subscription(db, user_id)


@router.post("/{subscription_id:int}/usage")
def record_usage(
    subscription_id: int,
    body: FeatureUsageRequest,
    db: Session = Depends(get_db),
):
    feature = subscription_service.record_feature_usage(
        db, subscription_id, body.feature_type, body.amount
    )
    if not feature:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Feature not found for subscription",
        )
    return {"success": True, "used": feature.used_value, "limit": feature.feature_value}
