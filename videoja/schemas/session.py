import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from videoja.models.session import SessionStatus


class SessionCreate(BaseModel):
    email: str | None = None


class SessionResponse(BaseModel):
    id: uuid.UUID
    email: str
    credits: int
    status: SessionStatus
    status_message: str
    video_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CreditsResponse(BaseModel):
    credits: int
    added: int | None = None


class TopUpRequest(BaseModel):
    amount: int = Field(ge=0, description="Payment units; each unit buys a fixed number of credits")


class PricingResponse(BaseModel):
    costs: dict[str, int]
    credits_per_payment_unit: int


class CredentialConnect(BaseModel):
    api_key: str | None = None


class CredentialStatus(BaseModel):
    connected: bool
