from pydantic import BaseModel, Field
from typing import List
from sanchalana.models.registration_model import PaymentMethod, PaymentStatus
from sanchalana.schema.user_schema import PHONE_PATTERN


class TeamMember(BaseModel):
    name: str = Field(..., min_length=2)
    usn: str = Field(..., min_length=5, max_length=10)
    phone: str = Field(..., pattern=PHONE_PATTERN)


class RegistrationCreate(BaseModel):
    event_id: int
    team_members: List[TeamMember] = Field(..., min_length=1)
    payment_method: PaymentMethod


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus
