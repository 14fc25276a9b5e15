import logging
import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from sanchalana.logging_config import setup_logging
from sanchalana.constant_file import UPLOAD_DIR, CORS_ORIGINS
from sanchalana.exceptions import FestError
from sanchalana.response_model import ErrorResponseModel

from sanchalana.routes.auth_route import router as AuthRouter
from sanchalana.routes.user_route import router as UserRouter
from sanchalana.routes.department_route import router as DepartmentRouter
from sanchalana.routes.event_route import router as EventRouter
from sanchalana.routes.registration_route import router as RegistrationRouter
from sanchalana.routes.admin_route import router as AdminRouter
from sanchalana.routes.storage_route import router as StorageRouter

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

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Sanchalana")

# Uploaded images are served from the storage buckets
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")

app.include_router(AuthRouter, tags=["Auth"], prefix="/auth")
app.include_router(UserRouter, tags=["User"], prefix="/user")
app.include_router(DepartmentRouter, tags=["Department"], prefix="/department")
app.include_router(EventRouter, tags=["Event"], prefix="/event")
app.include_router(RegistrationRouter, tags=["Registration"], prefix="/registration")
app.include_router(AdminRouter, tags=["Admin"], prefix="/admin")
app.include_router(StorageRouter, tags=["Storage"], prefix="/storage")


@app.exception_handler(FestError)
async def fest_error_handler(request: Request, exc: FestError):
    # errors raised inside dependencies, before a route's own try/except
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponseModel(exc.code, exc.status_code, exc.message),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponseModel("DATABASE_ERROR", 500, "The database could not complete the request. Please try again."),
    )


# Create all tables (must be after importing all models)
# The server still starts when the database is unreachable
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")
except SQLAlchemyError as e:
    logger.warning("Could not create database tables: %s", e)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS", "DELETE", "PUT"],
    allow_headers=["*"],
)
