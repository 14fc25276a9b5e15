import logging
from datetime import datetime, timedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sanchalana.models.user_model import User, user_helper
from sanchalana.models.profile_model import Profile, profile_helper
from sanchalana.models.admin_model import Admin, admin_helper
from sanchalana.models.session_model import AuthSession
from sanchalana.models.otp_records_model import OTPRecord
from sanchalana.controller.ws_manager import session_manager
from sanchalana.controller.otp_handler import generate_otp, send_email
from sanchalana.cryptography import encrypt_password, verify_password, create_access_token
from sanchalana.constant_file import otp_expire_minutes, otp_max_attempts
from sanchalana.exceptions import (AuthenticationError, DeliveryError,
                                   NotFoundError, ValidationError)

logger = logging.getLogger(__name__)


async def notify_session_change(user_id: str, event: str):
    await session_manager.send_to_user(user_id, {"event": event, "user_id": user_id})


async def open_session(db: Session, user: User, method: str):
    auth_session = AuthSession(user_id=user.id, method=method)
    db.add(auth_session)
    db.commit()
    db.refresh(auth_session)

    await notify_session_change(user.id, "SIGNED_IN")
    return {
        "access_token": create_access_token(user.id, auth_session.id),
        "token_type": "bearer",
        "user": user_helper(user),
    }


# ------------------ Sign up ------------------
async def sign_up(db: Session, email: str, password: str, profile_data: dict):
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise ValidationError(f"User with email {email} exists!", field="email")

    new_user = User(email=email, password=encrypt_password(password))
    # profile is created alongside the account
    new_user.profile = Profile(**profile_data)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Created account %s", new_user.id)

    return await open_session(db, new_user, "password")


# ------------------ Password sign in ------------------
async def sign_in(db: Session, email: str, password: str):
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password):
        raise AuthenticationError("Invalid email or password")
    return await open_session(db, user, "password")


# ------------------ One-time code sign in ------------------
async def send_otp(db: Session, email: str):
    now = datetime.utcnow()
    otp_record = db.query(OTPRecord).filter(OTPRecord.email == email).first()
    if otp_record and otp_record.expires_at > now:
        otp_to_send = otp_record.otp
    else:
        otp_to_send = generate_otp()
        expires_at = now + timedelta(minutes=otp_expire_minutes)
        if otp_record:
            otp_record.otp = otp_to_send
            otp_record.expires_at = expires_at
            otp_record.attempts = 0
        else:
            db.add(OTPRecord(email=email, otp=otp_to_send, expires_at=expires_at, attempts=0))
        db.commit()

    if not await send_email(email, otp_to_send):
        raise DeliveryError("Could not send the sign-in code. Try again later.")
    return {"email": email}


async def verify_otp(db: Session, email: str, token: str):
    otp_record = db.query(OTPRecord).filter(OTPRecord.email == email).first()
    if not otp_record:
        raise AuthenticationError("No sign-in code was requested for this email")

    if otp_record.expires_at < datetime.utcnow():
        db.delete(otp_record)
        db.commit()
        raise AuthenticationError("Sign-in code has expired")

    if otp_record.otp != token:
        otp_record.attempts = (otp_record.attempts or 0) + 1
        if otp_record.attempts >= otp_max_attempts:
            # too many wrong guesses, a new code must be requested
            db.delete(otp_record)
            db.commit()
            logger.warning("Sign-in code for %s discarded after %d wrong attempts", email, otp_max_attempts)
            raise AuthenticationError("Too many incorrect attempts. Request a new sign-in code.")
        db.commit()
        raise AuthenticationError("Incorrect sign-in code")

    db.delete(otp_record)
    user = db.query(User).filter(User.email == email).first()
    if not user:
        # one-time-code sign in creates the identity; the profile comes later
        user = User(email=email)
        db.add(user)
        logger.info("Created code-only account for %s", email)
    db.commit()
    db.refresh(user)
    return await open_session(db, user, "otp")


# ------------------ Password update / sign out ------------------
async def update_password(db: Session, user: User, password: str):
    user.password = encrypt_password(password)
    # every session ends, the caller signs in again with the new password
    db.query(AuthSession).filter(AuthSession.user_id == user.id).delete(synchronize_session=False)
    db.commit()
    await notify_session_change(user.id, "PASSWORD_UPDATED")
    return {"user_id": user.id}


async def sign_out(db: Session, auth_session: AuthSession):
    user_id = auth_session.user_id
    db.delete(auth_session)
    db.commit()
    await notify_session_change(user_id, "SIGNED_OUT")
    return {"user_id": user_id}


# ------------------ Identity resolution ------------------
def fetch_profile(db: Session, user_id: str):
    try:
        return db.query(Profile).filter(Profile.id == user_id).first()
    except SQLAlchemyError as e:
        logger.error("Error fetching profile for %s: %s", user_id, e)
        return None


def fetch_admin(db: Session, user_id: str):
    # most users have no admin row, that is not an error
    try:
        return db.query(Admin).filter(Admin.id == user_id).first()
    except SQLAlchemyError as e:
        logger.error("Error checking admin status for %s: %s", user_id, e)
        return None


async def resolve_identity(db: Session, user: User):
    profile = fetch_profile(db, user.id)
    admin = fetch_admin(db, user.id)
    return {
        "user": user_helper(user),
        "profile": profile_helper(profile) if profile else None,
        "is_admin": admin is not None,
        "admin_role": admin.role if admin else None,
        "admin": admin_helper(admin) if admin else None,
    }


# ------------------ Profile ------------------
async def get_profile(db: Session, user_id: str):
    profile = fetch_profile(db, user_id)
    if not profile:
        raise NotFoundError("Profile")
    return profile


async def create_profile(db: Session, user: User, profile_data: dict):
    if fetch_profile(db, user.id):
        raise ValidationError("Profile already exists")
    profile = Profile(id=user.id, **profile_data)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    await notify_session_change(user.id, "PROFILE_UPDATED")
    return profile


async def update_profile(db: Session, user_id: str, update_data: dict):
    profile = await get_profile(db, user_id)
    usn = update_data.pop("usn", None)
    if usn is not None and usn != profile.usn:
        raise ValidationError("USN cannot be changed", field="usn")

    for key in ("name", "phone"):
        if update_data.get(key) is not None:
            setattr(profile, key, update_data[key])
    db.commit()
    db.refresh(profile)
    await notify_session_change(user_id, "PROFILE_UPDATED")
    return profile
