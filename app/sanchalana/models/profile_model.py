from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from sanchalana.database import Base

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    name = Column(String, nullable=False)
    usn = Column(String(10), nullable=False)
    phone = Column(String(13), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="profile")


def profile_helper(profile) -> dict:
    return {
        "id": profile.id,
        "name": profile.name,
        "usn": profile.usn,
        "phone": profile.phone,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }
