"""
One-time numeric codes for email verification and password reset.

Pure value construction: nothing here touches the database.
"""
import math
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Union

from alcateia_auth.utils.clock import utcnow

CODE_LENGTH = 6
VERIFICATION_EXPIRY_MINUTES = 10
PASSWORD_RESET_EXPIRY_MINUTES = 15

Timestamp = Union[str, datetime]


@dataclass(frozen=True)
class VerificationCode:
    code: str
    expires_at: datetime


def generate_code() -> str:
    """Return a CODE_LENGTH-digit decimal code, uniform over [10**(n-1), 10**n - 1]."""
    low = 10 ** (CODE_LENGTH - 1)
    high = 10 ** CODE_LENGTH - 1
    return str(low + secrets.randbelow(high - low + 1))


def create_verification_code() -> VerificationCode:
    return VerificationCode(
        code=generate_code(),
        expires_at=utcnow() + timedelta(minutes=VERIFICATION_EXPIRY_MINUTES),
    )


def create_password_reset_code() -> VerificationCode:
    return VerificationCode(
        code=generate_code(),
        expires_at=utcnow() + timedelta(minutes=PASSWORD_RESET_EXPIRY_MINUTES),
    )


def _to_naive_utc(value: Timestamp) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is not None:
        value = (value - value.utcoffset()).replace(tzinfo=None)
    return value


def is_code_valid(expires_at: Timestamp) -> bool:
    """True while expires_at is strictly in the future; the boundary counts as expired."""
    return _to_naive_utc(expires_at) > utcnow()


def validate_code(input_code: str, stored_code: str, expires_at: Timestamp) -> bool:
    if not input_code or not stored_code or expires_at is None:
        return False
    if not is_code_valid(expires_at):
        return False
    return input_code == stored_code


def format_expiry_date(value: datetime) -> str:
    return _to_naive_utc(value).isoformat() + "Z"


def get_time_remaining(expires_at: Timestamp) -> int:
    """Whole minutes left before expiry, rounded up and never negative."""
    delta = (_to_naive_utc(expires_at) - utcnow()).total_seconds()
    return max(0, math.ceil(delta / 60))
