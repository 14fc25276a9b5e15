#!/usr/bin/env python3
"""
Script to create database tables
Run this after the database is created to set up all tables
"""
import logging
import sys
import os

# Add the app directory to the path
app_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'app')
sys.path.insert(0, app_dir)

from sqlalchemy.exc import SQLAlchemyError
from sanchalana.logging_config import setup_logging
from sanchalana.database import Base, engine
from sanchalana.models.user_model import User
from sanchalana.models.session_model import AuthSession
from sanchalana.models.otp_records_model import OTPRecord
from sanchalana.models.profile_model import Profile
from sanchalana.models.department_model import Department
from sanchalana.models.coordinator_model import Coordinator
from sanchalana.models.event_model import Event
from sanchalana.models.registration_model import Registration
from sanchalana.models.admin_model import Admin

logger = logging.getLogger("create_tables")


def create_tables():
    """Create all database tables"""
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
        return True
    except SQLAlchemyError as e:
        logger.error("Error creating tables: %s", e)
        return False


if __name__ == "__main__":
    setup_logging()
    sys.exit(0 if create_tables() else 1)
