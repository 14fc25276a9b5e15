import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from sanchalana.database import Base


def new_identity_id():
    return str(uuid.uuid4())


class User(Base):
    """Authentication identity. Profile and Admin rows share its id."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_identity_id)
    email = Column(String, nullable=False, unique=True, index=True)
    # one-time-code accounts have no password until they set one
    password = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    admin = relationship("Admin", back_populates="user", uselist=False, cascade="all, delete-orphan")
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    registrations = relationship("Registration", back_populates="user", cascade="all, delete-orphan")


def user_helper(user) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "created_at": user.created_at,
    }
