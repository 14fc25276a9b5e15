"""
Script to give every event without an image a placeholder picture
Safe to run repeatedly, events that already have an image are left alone
"""
import logging
import sys
import os

# Add the app directory to the path
app_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'app')
sys.path.insert(0, app_dir)

from sqlalchemy.exc import SQLAlchemyError
from sanchalana.logging_config import setup_logging
from sanchalana.database import SessionLocal
from sanchalana.models.user_model import User
from sanchalana.models.session_model import AuthSession
from sanchalana.models.profile_model import Profile
from sanchalana.models.department_model import Department
from sanchalana.models.coordinator_model import Coordinator
from sanchalana.models.event_model import Event
from sanchalana.models.registration_model import Registration
from sanchalana.models.admin_model import Admin
from sanchalana.controller.event_controller import assign_placeholder_images

logger = logging.getLogger("assign_placeholder_images")


def main():
    db = SessionLocal()
    try:
        count = assign_placeholder_images(db)
        logger.info("Assigned placeholder images to %d events", count)
        return count
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    logger.info("Starting to assign placeholder images...")
    try:
        main()
    except SQLAlchemyError as e:
        logger.error("Failed to assign placeholder images: %s", e)
        sys.exit(1)
