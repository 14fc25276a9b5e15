from pydantic import BaseModel, Field
from typing import List, Optional


class CoordinatorContact(BaseModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    role: Optional[str] = None


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    department_id: int
    team_size: int = Field(1, ge=1)
    registration_fee: float = Field(0.0, ge=0)
    event_type: str = Field(..., min_length=1)
    venue: Optional[str] = None
    conduction_venue: Optional[str] = None
    date: Optional[str] = None
    image_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    payment_qr_url: Optional[str] = None
    faculty_coordinators: List[CoordinatorContact] = []
    student_coordinators: List[CoordinatorContact] = []
    is_trending: bool = False


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    department_id: Optional[int] = None
    team_size: Optional[int] = Field(None, ge=1)
    registration_fee: Optional[float] = Field(None, ge=0)
    event_type: Optional[str] = Field(None, min_length=1)
    venue: Optional[str] = None
    conduction_venue: Optional[str] = None
    date: Optional[str] = None
    image_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    payment_qr_url: Optional[str] = None
    faculty_coordinators: Optional[List[CoordinatorContact]] = None
    student_coordinators: Optional[List[CoordinatorContact]] = None
    is_trending: Optional[bool] = None

    class Config:
        extra = "ignore"
