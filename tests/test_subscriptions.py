"""Tests for alcateia_auth/services/subscriptions.py and core/plan_features.py"""

from __future__ import annotations

from types import MappingProxyType

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from alcateia_auth.core.plan_features import PlanFeatures, load_plan_features
from alcateia_auth.models import FeatureKind, PlanTier, Subscription, SubscriptionFeature
from alcateia_auth.services import subscriptions as service


def _features(db, subscription_id):
    rows = db.query(SubscriptionFeature).filter(SubscriptionFeature.subscription_id == subscription_id).all()
    return {row.feature_type: (row.feature_value, row.used_value) for row in rows}


class _DuplicateKindFeatures(PlanFeatures):
    """Yields music_limit twice, which violates uq_subscription_feature."""

    def items(self):
        return (
            (FeatureKind.MUSIC_LIMIT, self.music_limit),
            (FeatureKind.MUSIC_LIMIT, self.producer_sessions),
        )


class TestPlanFeatures:
    def test_table_is_read_only(self):
        table = load_plan_features()
        with pytest.raises(TypeError):
            table[PlanTier.PLUS] = PlanFeatures(9, 9, 9)

    def test_limits_per_tier(self):
        table = load_plan_features()
        assert table[PlanTier.START] == PlanFeatures(music_limit=1, producer_sessions=0, domain_registration=0)
        assert table[PlanTier.PLUS] == PlanFeatures(music_limit=2, producer_sessions=1, domain_registration=0)
        assert table[PlanTier.PREMIUM] == PlanFeatures(music_limit=4, producer_sessions=4, domain_registration=1)


class TestCreateSubscription:
    def test_plus_plan_features(self, db, make_user):
        user = make_user()
        subscription = service.create_subscription(db, user.id, PlanTier.PLUS, load_plan_features(), "mp-123")

        assert subscription.status == "pending"
        assert subscription.plan_type == "plus"
        assert subscription.mercadopago_subscription_id == "mp-123"
        assert _features(db, subscription.id) == {
            "music_limit": (2, 0),
            "producer_sessions": (1, 0),
            "domain_registration": (0, 0),
        }

    def test_accepts_plain_strings(self, db, make_user):
        user = make_user()
        subscription = service.create_subscription(db, user.id, "premium", load_plan_features())
        assert _features(db, subscription.id)["domain_registration"] == (1, 0)

    def test_custom_table_is_used(self, db, make_user):
        user = make_user()
        table = MappingProxyType({PlanTier.START: PlanFeatures(7, 3, 1)})
        subscription = service.create_subscription(db, user.id, PlanTier.START, table)
        assert _features(db, subscription.id)["music_limit"] == (7, 0)

    def test_feature_failure_rolls_back_subscription(self, db, make_user):
        user = make_user()
        broken = MappingProxyType({PlanTier.PLUS: _DuplicateKindFeatures(2, 1, 0)})

        with pytest.raises(IntegrityError):
            service.create_subscription(db, user.id, PlanTier.PLUS, broken)

        assert db.query(Subscription).count() == 0
        assert db.query(SubscriptionFeature).count() == 0


class TestActiveSubscription:
    def test_none_while_pending(self, db, make_user):
        user = make_user()
        service.create_subscription(db, user.id, PlanTier.PLUS, load_plan_features(), "mp-1")
        assert service.get_active_subscription(db, user.id) is None

    def test_shape_after_activation(self, db, make_user):
        user = make_user()
        subscription = service.create_subscription(db, user.id, PlanTier.PLUS, load_plan_features(), "mp-1")
        service.apply_payment_event(db, "mp-1", "payment.approved")

        assert service.get_active_subscription(db, user.id) == {
            "id": subscription.id,
            "plan_type": "plus",
            "status": "active",
            "features": {
                "music_limit": {"limit": 2, "used": 0},
                "producer_sessions": {"limit": 1, "used": 0},
                "domain_registration": {"limit": 0, "used": 0},
            },
        }

    def test_most_recent_active_wins(self, db, make_user):
        user = make_user()
        table = load_plan_features()
        service.create_subscription(db, user.id, PlanTier.START, table, "mp-old")
        newer = service.create_subscription(db, user.id, PlanTier.PREMIUM, table, "mp-new")
        service.apply_payment_event(db, "mp-old", "payment.approved")
        service.apply_payment_event(db, "mp-new", "payment.approved")

        assert service.get_active_subscription(db, user.id)["id"] == newer.id


class TestPaymentEvents:
    @pytest.fixture
    def subscription(self, db, make_user):
        user = make_user()
        return service.create_subscription(db, user.id, PlanTier.PLUS, load_plan_features(), "mp-42")

    def test_approved_activates(self, db, subscription):
        assert service.apply_payment_event(db, "mp-42", "payment.approved") == 1
        db.refresh(subscription)
        assert subscription.status == "active"

    @pytest.mark.parametrize("action", ["payment.cancelled", "payment.failed"])
    def test_cancel_actions(self, db, subscription, action):
        assert service.apply_payment_event(db, "mp-42", action) == 1
        db.refresh(subscription)
        assert subscription.status == "cancelled"

    def test_unmatched_reference_changes_nothing(self, db, subscription):
        assert service.apply_payment_event(db, "mp-unknown", "payment.approved") == 0
        db.refresh(subscription)
        assert subscription.status == "pending"

    def test_other_actions_are_ignored(self, db, subscription):
        assert service.apply_payment_event(db, "mp-42", "payment.created") == 0
        db.refresh(subscription)
        assert subscription.status == "pending"

    def test_cancelled_is_terminal(self, db, subscription):
        service.apply_payment_event(db, "mp-42", "payment.cancelled")
        assert service.apply_payment_event(db, "mp-42", "payment.approved") == 0
        db.refresh(subscription)
        assert subscription.status == "cancelled"


class TestFeatureUsage:
    def test_increments_without_enforcing_limit(self, db, make_user):
        user = make_user()
        subscription = service.create_subscription(db, user.id, PlanTier.PLUS, load_plan_features())

        service.record_feature_usage(db, subscription.id, "producer_sessions")
        feature = service.record_feature_usage(db, subscription.id, "producer_sessions", amount=2)

        assert feature.used_value == 3
        assert feature.feature_value == 1

    def test_missing_feature(self, db):
        assert service.record_feature_usage(db, 999, "music_limit") is None

    def test_increment_applies_to_stored_counter(self, db, make_user):
        user = make_user()
        subscription = service.create_subscription(db, user.id, PlanTier.PLUS, load_plan_features())
        stale = (
            db.query(SubscriptionFeature)
            .filter_by(subscription_id=subscription.id, feature_type="music_limit")
            .one()
        )
        assert stale.used_value == 0

        other = Session(bind=db.get_bind())
        try:
            service.record_feature_usage(other, subscription.id, "music_limit")
        finally:
            other.close()

        feature = service.record_feature_usage(db, subscription.id, "music_limit")
        assert feature.used_value == 2


class TestUsers:
    def test_get_or_create_is_idempotent(self, db):
        first = service.get_or_create_user(db, "Producer@Example.com")
        second = service.get_or_create_user(db, "producer@example.com")
        assert first.id == second.id
        assert first.email == "producer@example.com"

    def test_subject_includes_active_subscription(self, db):
        user = service.get_or_create_user(db, "producer@example.com")
        assert service.build_user_subject(db, user) == {
            "id": user.id,
            "email": "producer@example.com",
            "subscription": None,
        }
