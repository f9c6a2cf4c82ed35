from pydantic import BaseModel, EmailStr, Field
from typing import Dict, Optional, Union
from alcateia_auth.models.subscription import PlanTier, FeatureKind


class SubscriptionCreate(BaseModel):
    user_id: int
    plan_type: PlanTier
    mercadopago_subscription_id: Optional[str] = None


class SubscriptionCreated(BaseModel):
    subscription_id: int


class FeatureUsage(BaseModel):
    limit: int
    used: int


class SubscriptionResponse(BaseModel):
    id: int
    plan_type: str
    status: str
    features: Dict[str, FeatureUsage]


class FeatureUsageRequest(BaseModel):
    feature_type: FeatureKind
    amount: int = Field(1, ge=1)


class UserIdentifyRequest(BaseModel):
    email: EmailStr


class UserSubject(BaseModel):
    id: int
    email: str
    subscription: Optional[SubscriptionResponse] = None


class MercadoPagoWebhookData(BaseModel):
    # Mercado Pago sends ids as strings or numbers depending on the topic
    id: Optional[Union[str, int]] = None


class MercadoPagoWebhook(BaseModel):
    type: Optional[str] = None
    action: Optional[str] = None
    data: Optional[MercadoPagoWebhookData] = None
