from pydantic import BaseModel, EmailStr, Field
from typing import Optional

PHONE_PATTERN = r"^\+?\d{10,13}$"


class SignUp(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=2)
    usn: str = Field(..., min_length=5, max_length=10)
    phone: str = Field(..., pattern=PHONE_PATTERN)


class SignIn(BaseModel):
    email: EmailStr
    password: str


class OTPRequest(BaseModel):
    email: EmailStr


class OTPVerify(BaseModel):
    email: EmailStr
    token: str = Field(..., min_length=6, max_length=6)


class PasswordUpdate(BaseModel):
    password: str = Field(..., min_length=8)


class ProfileCreate(BaseModel):
    name: str = Field(..., min_length=2)
    usn: str = Field(..., min_length=5, max_length=10)
    phone: str = Field(..., pattern=PHONE_PATTERN)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    usn: Optional[str] = None

    class Config:
        extra = "ignore"
