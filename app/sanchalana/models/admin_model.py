import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from sanchalana.database import Base


class AdminRole(str, enum.Enum):
    MAIN_ADMIN = "main_admin"
    DEPARTMENT_ADMIN = "department_admin"
    EVENT_ADMIN = "event_admin"


class Admin(Base):
    __tablename__ = "admins"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(String(20), nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="CASCADE"), nullable=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=True)
    username = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="admin")
    department = relationship("Department", back_populates="admins")
    event = relationship("Event", back_populates="admins")


def admin_helper(admin) -> dict:
    return {
        "id": admin.id,
        "role": admin.role,
        "department_id": admin.department_id,
        "event_id": admin.event_id,
        "username": admin.username,
        "created_at": admin.created_at,
        "updated_at": admin.updated_at,
    }
