"""
Runtime configuration read from the environment.

Values are re-read on every call to get_settings() so a changed environment
(e.g. a redeploy that only rotates ALLOWED_ORIGINS) is picked up without
restarting workers.
"""
import os
from dataclasses import dataclass
from typing import Tuple

DEFAULT_FRONTEND_DOMAIN = "https://alcateiahits.org"
DEFAULT_ALLOWED_ORIGINS: Tuple[str, ...] = (
    "https://alcateiahits.org",
    "https://www.alcateiahits.org",
    "http://localhost:80",
    "http://localhost:3000",
)
DEFAULT_EMAIL_FROM = "Alcateia Hits <noreply@alcateiahits.org>"


@dataclass(frozen=True)
class Settings:
    frontend_domain: str
    allowed_origins: Tuple[str, ...]
    resend_api_key: str
    email_from: str


def _parse_origins(raw: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def get_settings() -> Settings:
    raw_origins = os.getenv("ALLOWED_ORIGINS", "")
    allowed_origins = _parse_origins(raw_origins) if raw_origins.strip() else DEFAULT_ALLOWED_ORIGINS
    return Settings(
        frontend_domain=os.getenv("FRONTEND_DOMAIN", "").strip() or DEFAULT_FRONTEND_DOMAIN,
        allowed_origins=allowed_origins,
        resend_api_key=os.getenv("RESEND_API_KEY", "").strip(),
        email_from=os.getenv("EMAIL_FROM", "").strip() or DEFAULT_EMAIL_FROM,
    )
