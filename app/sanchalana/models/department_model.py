from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from sanchalana.database import Base

class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    short_name = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    events = relationship("Event", back_populates="department", cascade="all, delete-orphan")
    coordinators = relationship("Coordinator", back_populates="department", cascade="all, delete-orphan",
                                order_by="Coordinator.id")
    admins = relationship("Admin", back_populates="department", cascade="all, delete")


def department_helper(department) -> dict:
    return {
        "id": department.id,
        "name": department.name,
        "short_name": department.short_name,
        "icon": department.icon,
        "created_at": department.created_at,
        "updated_at": department.updated_at,
    }
