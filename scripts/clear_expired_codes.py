#!/usr/bin/env python3
"""
Null out expired verification and password-reset codes.

Pure hygiene: expired codes are already rejected on validation, so this can
run on any schedule (cron, Render job) or not at all.

Run from project root with DATABASE_URL set:
  python scripts/clear_expired_codes.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from alcateia_auth.db.session import SessionLocal
from alcateia_auth.services.verification_manager import EmailVerificationManager


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    db = SessionLocal()
    try:
        cleared = EmailVerificationManager(db).clear_expired_codes()
    finally:
        db.close()
    print(f"Cleared {cleared} expired code(s)")


if __name__ == "__main__":
    main()
