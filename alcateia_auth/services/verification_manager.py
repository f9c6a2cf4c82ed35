"""
Email verification and password-reset code lifecycle.

Every public method returns a VerificationResult; internal errors are logged,
rolled back and reported as a generic failure instead of being raised.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from alcateia_auth.models.email_log import EmailLog
from alcateia_auth.models.user import User
from alcateia_auth.services import verification
from alcateia_auth.services.email_service import (
    EmailService,
    create_verification_template,
    create_password_recovery_template,
    create_welcome_template,
)
from alcateia_auth.utils.clock import utcnow
from alcateia_auth.utils.email import normalize_email

logger = logging.getLogger(__name__)

MSG_USER_NOT_FOUND = "Usuário não encontrado"
MSG_ALREADY_VERIFIED = "Email já verificado"
MSG_NO_VERIFICATION_CODE = "Nenhum código de verificação encontrado"
MSG_NO_RESET_CODE = "Nenhum código de recuperação encontrado"
MSG_INVALID_CODE = "Código inválido ou expirado"
MSG_INTERNAL_ERROR = "Erro interno do servidor"
MSG_VERIFICATION_SENT = "Código de verificação enviado"
MSG_VERIFIED = "Email verificado com sucesso!"
MSG_RESET_SENT = "Código de recuperação enviado"
MSG_RESET_PRIVACY = "Se o email existir, você receberá instruções de recuperação"
MSG_RESET_CODE_VALID = "Código válido"
MSG_WELCOME_SENT = "Email de boas-vindas enviado"
MSG_SEND_FAILED = "Não foi possível enviar o email"

EMAIL_TYPE_VERIFICATION = "verification"
EMAIL_TYPE_PASSWORD_RESET = "password_reset"
EMAIL_TYPE_WELCOME = "welcome"


@dataclass
class VerificationResult:
    success: bool
    message: str
    time_remaining: Optional[int] = None
    # not_found | already_verified | no_code | invalid_code | internal_error | send_failed
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"success": self.success, "message": self.message}
        if self.time_remaining is not None:
            data["timeRemaining"] = self.time_remaining
        return data


def _failure(message: str, reason: str) -> VerificationResult:
    return VerificationResult(success=False, message=message, reason=reason)


class EmailVerificationManager:
    def __init__(self, db: Session, email_service: Optional[EmailService] = None):
        self.db = db
        self.email_service = email_service

    def _get_user(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def initiate_email_verification(self, email: str) -> VerificationResult:
        try:
            user = self._get_user(email)
            if not user:
                return _failure(MSG_USER_NOT_FOUND, "not_found")
            if user.email_verified:
                return _failure(MSG_ALREADY_VERIFIED, "already_verified")

            issued = verification.create_verification_code()
            user.verification_code = issued.code
            user.verification_expires_at = issued.expires_at
            self.db.commit()
            logger.info("Issued verification code for user %s", user.id)

            self._log_email(user.id, EMAIL_TYPE_VERIFICATION, user.email, "pending")
            self._dispatch(user.email, create_verification_template(issued.code, user.email))

            return VerificationResult(
                success=True,
                message=MSG_VERIFICATION_SENT,
                time_remaining=verification.VERIFICATION_EXPIRY_MINUTES,
            )
        except Exception:
            logger.exception("Error initiating email verification for %s", email)
            self.db.rollback()
            return _failure(MSG_INTERNAL_ERROR, "internal_error")

    def verify_email_code(self, email: str, code: str) -> VerificationResult:
        try:
            user = self._get_user(email)
            if not user:
                return _failure(MSG_USER_NOT_FOUND, "not_found")
            if user.email_verified:
                return _failure(MSG_ALREADY_VERIFIED, "already_verified")
            if not user.verification_code:
                return _failure(MSG_NO_VERIFICATION_CODE, "no_code")
            # Wrong and expired codes share one message on purpose.
            if not verification.validate_code(code, user.verification_code, user.verification_expires_at):
                return _failure(MSG_INVALID_CODE, "invalid_code")

            user.email_verified = True
            user.verification_code = None
            user.verification_expires_at = None
            self.db.commit()
            logger.info("Email verified for user %s", user.id)

            self._mark_email_sent(user.id, EMAIL_TYPE_VERIFICATION)
            return VerificationResult(success=True, message=MSG_VERIFIED)
        except Exception:
            logger.exception("Error verifying email code for %s", email)
            self.db.rollback()
            return _failure(MSG_INTERNAL_ERROR, "internal_error")

    def initiate_password_reset(self, email: str) -> VerificationResult:
        try:
            user = self._get_user(email)
            if not user:
                # Never reveal whether the address is registered.
                return VerificationResult(success=True, message=MSG_RESET_PRIVACY)

            issued = verification.create_password_reset_code()
            user.password_reset_code = issued.code
            user.password_reset_expires_at = issued.expires_at
            self.db.commit()
            logger.info("Issued password reset code for user %s", user.id)

            self._log_email(user.id, EMAIL_TYPE_PASSWORD_RESET, user.email, "pending")
            self._dispatch(user.email, create_password_recovery_template(issued.code, user.email))

            return VerificationResult(
                success=True,
                message=MSG_RESET_SENT,
                time_remaining=verification.PASSWORD_RESET_EXPIRY_MINUTES,
            )
        except Exception:
            logger.exception("Error initiating password reset for %s", email)
            self.db.rollback()
            return _failure(MSG_INTERNAL_ERROR, "internal_error")

    def verify_password_reset_code(self, email: str, code: str) -> VerificationResult:
        """
        Check a reset code without consuming it.

        The code stays stored after a successful check: there is no password
        mutation step here that would consume it.
        """
        try:
            user = self._get_user(email)
            if not user:
                return _failure(MSG_USER_NOT_FOUND, "not_found")
            if not user.password_reset_code:
                return _failure(MSG_NO_RESET_CODE, "no_code")
            if not verification.validate_code(code, user.password_reset_code, user.password_reset_expires_at):
                return _failure(MSG_INVALID_CODE, "invalid_code")
            return VerificationResult(success=True, message=MSG_RESET_CODE_VALID)
        except Exception:
            logger.exception("Error verifying password reset code for %s", email)
            self.db.rollback()
            return _failure(MSG_INTERNAL_ERROR, "internal_error")

    def send_welcome_email(self, email: str) -> VerificationResult:
        try:
            user = self._get_user(email)
            if not user:
                return _failure(MSG_USER_NOT_FOUND, "not_found")

            sent = self._dispatch(user.email, create_welcome_template(user.email))
            self._log_email(user.id, EMAIL_TYPE_WELCOME, user.email, "sent" if sent else "pending")
            if not sent:
                return _failure(MSG_SEND_FAILED, "send_failed")
            return VerificationResult(success=True, message=MSG_WELCOME_SENT)
        except Exception:
            logger.exception("Error sending welcome email to %s", email)
            self.db.rollback()
            return _failure(MSG_INTERNAL_ERROR, "internal_error")

    def clear_expired_codes(self) -> int:
        """Null out every code whose expiry is already in the past. Returns rows touched."""
        now = utcnow()
        try:
            cleared = self.db.execute(
                update(User)
                .where(User.verification_expires_at < now)
                .values(verification_code=None, verification_expires_at=None)
            ).rowcount
            cleared += self.db.execute(
                update(User)
                .where(User.password_reset_expires_at < now)
                .values(password_reset_code=None, password_reset_expires_at=None)
            ).rowcount
            self.db.commit()
        except Exception:
            logger.exception("Error clearing expired codes")
            self.db.rollback()
            return 0
        logger.info("Cleared %d expired codes", cleared)
        return cleared

    def _dispatch(self, email: str, template) -> bool:
        if self.email_service is None:
            return False
        sent = self.email_service.send_email(email, template)
        if not sent:
            logger.warning("'%s' email to %s was not delivered", template.subject, email)
        return sent

    def _log_email(self, user_id: int, email_type: str, recipient_email: str, status: str) -> None:
        try:
            self.db.add(EmailLog(
                user_id=user_id,
                email_type=email_type,
                recipient_email=recipient_email,
                status=status,
                sent_at=utcnow(),
            ))
            self.db.commit()
        except Exception:
            logger.exception("Error logging %s email for user %s", email_type, user_id)
            self.db.rollback()

    def _mark_email_sent(self, user_id: int, email_type: str) -> None:
        try:
            log = (
                self.db.query(EmailLog)
                .filter(
                    EmailLog.user_id == user_id,
                    EmailLog.email_type == email_type,
                    EmailLog.status == "pending",
                )
                .order_by(EmailLog.created_at.desc(), EmailLog.id.desc())
                .first()
            )
            if log is None:
                return
            log.status = "sent"
            log.sent_at = utcnow()
            self.db.commit()
        except Exception:
            logger.exception("Error updating %s email log for user %s", email_type, user_id)
            self.db.rollback()
