from fastapi import (
    APIRouter, Response, Depends, WebSocket, WebSocketDisconnect, status
)
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.dependencies import get_current_session, get_current_user, authenticate_websocket
from sanchalana.controller.auth_controller import *
from sanchalana.controller.ws_manager import session_manager
from sanchalana.schema.user_schema import SignUp, SignIn, OTPRequest, OTPVerify, PasswordUpdate
from sanchalana.models.session_model import AuthSession
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()

# ----------------------- SIGN UP -----------------------
@router.post("/signup", response_description="Create an account and its profile")
async def sign_up_user(response: Response, body: SignUp, db: Session = Depends(get_db)):
    try:
        profile_data = body.model_dump(include={"name", "usn", "phone"})
        result = await sign_up(db, body.email, body.password, profile_data)
        return ResponseModel(result, "Account created successfully! Welcome to Sanchalana.")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- PASSWORD SIGN IN -----------------------
@router.post("/signin", response_description="Sign in with email and password")
async def sign_in_user(response: Response, body: SignIn, db: Session = Depends(get_db)):
    try:
        result = await sign_in(db, body.email, body.password)
        return ResponseModel(result, "Welcome back! You have successfully signed in.")
    except FestError as e:
        return ErrorFromException(response, e)


# ----------------------- ONE-TIME CODE -----------------------
@router.post("/otp/send", response_description="Send a one-time sign-in code")
async def send_sign_in_code(response: Response, body: OTPRequest, db: Session = Depends(get_db)):
    try:
        result = await send_otp(db, body.email)
        return ResponseModel(result, "OTP sent! Check your email for the one-time code.")
    except FestError as e:
        return ErrorFromException(response, e)


@router.post("/otp/verify", response_description="Sign in with a one-time code")
async def verify_sign_in_code(response: Response, body: OTPVerify, db: Session = Depends(get_db)):
    try:
        result = await verify_otp(db, body.email, body.token)
        return ResponseModel(result, "Login successful! You have been logged in.")
    except FestError as e:
        return ErrorFromException(response, e)


# ----------------------- PASSWORD UPDATE -----------------------
@router.put("/password", response_description="Update password and end all sessions")
async def update_user_password(
    body: PasswordUpdate,
    user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    result = await update_password(db, user, body.password)
    return ResponseModel(result, "Password updated successfully. Please log in again.")


# ----------------------- SIGN OUT -----------------------
@router.post("/signout", response_description="End the current session")
async def sign_out_user(auth_session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)):
    result = await sign_out(db, auth_session)
    return ResponseModel(result, "Signed out successfully")


# ----------------------- CURRENT IDENTITY -----------------------
@router.get("/session", response_description="Current user, profile and admin role")
async def get_session_identity(user=Depends(get_current_user), db: Session = Depends(get_db)):
    identity = await resolve_identity(db, user)
    return ResponseModel(identity, "Session resolved")


# ----------------------- WEBSOCKET -----------------------
@router.websocket("/ws/session")
async def websocket_session(websocket: WebSocket, token: str = None, db: Session = Depends(get_db)):
    auth_session = authenticate_websocket(db, token)
    if not auth_session:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id = auth_session.user_id
    await session_manager.connect(user_id, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        session_manager.disconnect(user_id, websocket)


__all__ = ["router"]
