"""Tests for alcateia_auth/services/verification.py"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from alcateia_auth.services import verification
from alcateia_auth.utils.clock import utcnow

FIXED_NOW = datetime(2026, 10, 17, 12, 0, 0)


@pytest.fixture
def frozen_now(monkeypatch):
    monkeypatch.setattr(verification, "utcnow", lambda: FIXED_NOW)
    return FIXED_NOW


class TestGenerateCode:
    def test_codes_are_six_digits_in_range(self):
        for _ in range(500):
            code = verification.generate_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_lower_bound_is_reachable(self, monkeypatch):
        monkeypatch.setattr(verification.secrets, "randbelow", lambda n: 0)
        assert verification.generate_code() == "100000"

    def test_upper_bound_is_reachable(self, monkeypatch):
        monkeypatch.setattr(verification.secrets, "randbelow", lambda n: n - 1)
        assert verification.generate_code() == "999999"


class TestCodeExpiry:
    def test_verification_code_expires_in_ten_minutes(self, frozen_now):
        issued = verification.create_verification_code()
        assert issued.expires_at == frozen_now + timedelta(minutes=10)
        assert len(issued.code) == 6

    def test_password_reset_code_expires_in_fifteen_minutes(self, frozen_now):
        issued = verification.create_password_reset_code()
        assert issued.expires_at == frozen_now + timedelta(minutes=15)

    def test_future_expiry_is_valid(self, frozen_now):
        assert verification.is_code_valid(frozen_now + timedelta(seconds=1))

    def test_past_expiry_is_invalid(self, frozen_now):
        assert not verification.is_code_valid(frozen_now - timedelta(seconds=1))

    def test_expiry_equal_to_now_counts_as_expired(self, frozen_now):
        assert not verification.is_code_valid(frozen_now)

    def test_accepts_iso_strings(self, frozen_now):
        assert verification.is_code_valid("2026-10-17T12:05:00Z")
        assert not verification.is_code_valid("2026-10-17T11:55:00")

    def test_aware_datetimes_are_compared_in_utc(self, frozen_now):
        # 09:05 at UTC-3 is 12:05 UTC
        brt = timezone(timedelta(hours=-3))
        assert verification.is_code_valid(datetime(2026, 10, 17, 9, 5, tzinfo=brt))


class TestValidateCode:
    def test_matching_unexpired_code(self):
        assert verification.validate_code("482913", "482913", utcnow() + timedelta(minutes=5))

    def test_mismatched_code(self):
        assert not verification.validate_code("482914", "482913", utcnow() + timedelta(minutes=5))

    def test_expired_code(self):
        assert not verification.validate_code("482913", "482913", utcnow() - timedelta(minutes=1))

    @pytest.mark.parametrize("input_code, stored_code", [("", "482913"), ("482913", ""), (None, "482913")])
    def test_empty_codes(self, input_code, stored_code):
        assert not verification.validate_code(input_code, stored_code, utcnow() + timedelta(minutes=5))

    def test_missing_expiry(self):
        assert not verification.validate_code("482913", "482913", None)

    def test_comparison_is_exact(self):
        assert not verification.validate_code(" 482913", "482913", utcnow() + timedelta(minutes=5))


class TestHelpers:
    def test_time_remaining_rounds_up(self, frozen_now):
        assert verification.get_time_remaining(frozen_now + timedelta(minutes=9, seconds=1)) == 10

    def test_time_remaining_never_negative(self, frozen_now):
        assert verification.get_time_remaining(frozen_now - timedelta(minutes=3)) == 0

    def test_format_expiry_date(self):
        assert verification.format_expiry_date(datetime(2026, 10, 17, 12, 10)) == "2026-10-17T12:10:00Z"
