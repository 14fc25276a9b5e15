from sqlalchemy import Column, Integer, String, DateTime
from sanchalana.database import Base
from datetime import datetime

class OTPRecord(Base):
    __tablename__ = "otp_records"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, index=True)

    otp = Column(String(6), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    # wrong guesses against this code
    attempts = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
