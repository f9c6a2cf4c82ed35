from alcateia_auth.models.user import User
from alcateia_auth.models.subscription import (
    Subscription,
    SubscriptionFeature,
    PlanTier,
    SubscriptionStatus,
    FeatureKind,
)
from alcateia_auth.models.producer_session import ProducerSession
from alcateia_auth.models.content_access import ContentAccess
from alcateia_auth.models.email_log import EmailLog

__all__ = [
    "User",
    "Subscription",
    "SubscriptionFeature",
    "PlanTier",
    "SubscriptionStatus",
    "FeatureKind",
    "ProducerSession",
    "ContentAccess",
    "EmailLog",
]
