from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from alcateia_auth.models.subscription import PlanTier, FeatureKind


@dataclass(frozen=True)
class PlanFeatures:
    """Feature limits granted by a plan tier at subscription time."""

    music_limit: int
    producer_sessions: int
    domain_registration: int

    def items(self):
        return (
            (FeatureKind.MUSIC_LIMIT, self.music_limit),
            (FeatureKind.PRODUCER_SESSIONS, self.producer_sessions),
            (FeatureKind.DOMAIN_REGISTRATION, self.domain_registration),
        )


PlanFeatureTable = Mapping[PlanTier, PlanFeatures]


def load_plan_features() -> PlanFeatureTable:
    """Build the read-only plan -> limits table passed to subscription creation."""
    return MappingProxyType({
        PlanTier.START: PlanFeatures(music_limit=1, producer_sessions=0, domain_registration=0),
        PlanTier.PLUS: PlanFeatures(music_limit=2, producer_sessions=1, domain_registration=0),
        PlanTier.PREMIUM: PlanFeatures(music_limit=4, producer_sessions=4, domain_registration=1),
    })
