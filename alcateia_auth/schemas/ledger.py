from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ProducerSessionCreate(BaseModel):
    subscription_id: int
    producer_name: str = Field(..., min_length=1)
    session_date: datetime
    notes: Optional[str] = None


class ProducerSessionCreated(BaseModel):
    session_id: int


class ProducerSessionResponse(BaseModel):
    id: int
    subscription_id: int
    producer_name: str
    session_date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContentAccessCreate(BaseModel):
    user_id: int
    content_type: str = Field(..., min_length=1)
    content_id: str = Field(..., min_length=1)


class ContentAccessResponse(BaseModel):
    id: int
    user_id: int
    content_type: str
    content_id: str
    accessed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
