from sqlalchemy import Column, Integer, String, Float, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from sanchalana.database import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)

    department_id = Column(Integer, ForeignKey("departments.id", ondelete="CASCADE"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    team_size = Column(Integer, nullable=False, default=1)
    registration_fee = Column(Float, nullable=False, default=0.0)
    event_type = Column(String, nullable=False)
    venue = Column(String, nullable=True)
    conduction_venue = Column(String, nullable=True)
    date = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    qr_code_url = Column(String, nullable=True)
    payment_qr_url = Column(String, nullable=True)
    # lists of {"name", "phone", "role"}
    faculty_coordinators = Column(JSON, nullable=True)
    student_coordinators = Column(JSON, nullable=True)
    is_trending = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    department = relationship("Department", back_populates="events")
    registrations = relationship("Registration", back_populates="event", cascade="all, delete-orphan")
    admins = relationship("Admin", back_populates="event", cascade="all, delete")


def event_helper(event) -> dict:
    return {
        "id": event.id,
        "department_id": event.department_id,
        "title": event.title,
        "description": event.description,
        "team_size": event.team_size,
        "registration_fee": event.registration_fee,
        "event_type": event.event_type,
        "venue": event.venue,
        "conduction_venue": event.conduction_venue,
        "date": event.date,
        "image_url": event.image_url,
        "qr_code_url": event.qr_code_url,
        "payment_qr_url": event.payment_qr_url,
        "faculty_coordinators": event.faculty_coordinators or [],
        "student_coordinators": event.student_coordinators or [],
        "is_trending": event.is_trending,
        "created_at": event.created_at,
        "updated_at": event.updated_at,
    }
