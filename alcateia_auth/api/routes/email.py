from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from alcateia_auth.dependencies.services import get_verification_manager
from alcateia_auth.schemas.email import EmailRequest, CodeVerificationRequest, EmailResultResponse
from alcateia_auth.services.verification_manager import EmailVerificationManager, VerificationResult

router = APIRouter()

REASON_STATUS = {
    None: 200,
    "not_found": 404,
    "already_verified": 409,
    "no_code": 400,
    "invalid_code": 400,
    "send_failed": 502,
    "internal_error": 500,
}


def _respond(result: VerificationResult) -> JSONResponse:
    status_code = 200 if result.success else REASON_STATUS.get(result.reason, 400)
    return JSONResponse(status_code=status_code, content=result.to_dict())


@router.post("/verify", response_model=EmailResultResponse)
def start_email_verification(
    body: EmailRequest,
    manager: EmailVerificationManager = Depends(get_verification_manager),
):
    """Issue a new verification code and email it to the user."""
    return _respond(manager.initiate_email_verification(body.email))


@router.post("/verify-code", response_model=EmailResultResponse)
def verify_email_code(
    body: CodeVerificationRequest,
    manager: EmailVerificationManager = Depends(get_verification_manager),
):
    return _respond(manager.verify_email_code(body.email, body.code))


@router.post("/password-reset", response_model=EmailResultResponse)
def start_password_reset(
    body: EmailRequest,
    manager: EmailVerificationManager = Depends(get_verification_manager),
):
    """
    Issue a password reset code. Unknown addresses get the same success
    response as known ones so the endpoint can't be used to probe accounts.
    """
    return _respond(manager.initiate_password_reset(body.email))


@router.post("/verify-reset-code", response_model=EmailResultResponse)
def verify_reset_code(
    body: CodeVerificationRequest,
    manager: EmailVerificationManager = Depends(get_verification_manager),
):
    return _respond(manager.verify_password_reset_code(body.email, body.code))


@router.post("/welcome", response_model=EmailResultResponse)
def send_welcome(
    body: EmailRequest,
    manager: EmailVerificationManager = Depends(get_verification_manager),
):
    return _respond(manager.send_welcome_email(body.email))
