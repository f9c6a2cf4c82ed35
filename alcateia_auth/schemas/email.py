from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class EmailRequest(BaseModel):
    email: EmailStr


class CodeVerificationRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., max_length=32)


class EmailResultResponse(BaseModel):
    success: bool
    message: str
    timeRemaining: Optional[int] = None
