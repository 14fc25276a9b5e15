from pydantic import BaseModel, Field
from typing import List, Optional


class CoordinatorIn(BaseModel):
    id: Optional[int] = None
    name: str = Field(..., min_length=1)
    phone_number: str = ""


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    short_name: str = Field(..., min_length=1)
    icon: Optional[str] = None
    coordinators: List[CoordinatorIn] = []


class DepartmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    short_name: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = None
    # None leaves the coordinator set untouched
    coordinators: Optional[List[CoordinatorIn]] = None

    class Config:
        extra = "ignore"
