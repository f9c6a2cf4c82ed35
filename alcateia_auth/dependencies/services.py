from fastapi import Depends
from sqlalchemy.orm import Session

from alcateia_auth.core.config import Settings, get_settings
from alcateia_auth.core.plan_features import PlanFeatureTable, load_plan_features
from alcateia_auth.db.session import get_db
from alcateia_auth.services.email_service import EmailService
from alcateia_auth.services.verification_manager import EmailVerificationManager


def get_email_service(settings: Settings = Depends(get_settings)) -> EmailService:
    return EmailService.from_settings(settings)


def get_verification_manager(
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> EmailVerificationManager:
    return EmailVerificationManager(db, email_service)


def get_plan_features() -> PlanFeatureTable:
    return load_plan_features()
