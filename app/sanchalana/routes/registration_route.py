from fastapi import (
    APIRouter, Response, Depends, Query, WebSocket, WebSocketDisconnect, status
)
from types import SimpleNamespace
from typing import Optional
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.dependencies import get_current_user, get_current_admin, authenticate_websocket
from sanchalana.controller.registration_controller import *
from sanchalana.controller.ws_manager import registration_manager, live_count_manager
from sanchalana.schema.registration_schema import RegistrationCreate, PaymentStatusUpdate
from sanchalana.models.admin_model import Admin
from sanchalana.models.registration_model import PaymentStatus
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()

# ----------------------- ADD Registration -----------------------
@router.post("/add", response_description="Register a team for an event")
async def add_registration(
    response: Response,
    body: RegistrationCreate,
    user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        registration_data = body.model_dump()
        registration_data["payment_method"] = body.payment_method.value
        registration = await add_registration_controller(db, user, registration_data)
        return ResponseModel(registration, f"Registration successful! Your team id is {registration['team_id']}.")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- GET my Registrations -----------------------
@router.get("/mine", response_description="Registrations of the signed-in user")
async def get_my_registrations(user=Depends(get_current_user), db: Session = Depends(get_db)):
    registrations = await retrieve_user_registrations_controller(db, user.id)
    return ResponseModel(registrations, "Registrations retrieved successfully")


# ----------------------- GET Registrations for admins -----------------------
@router.get("/admin", response_description="Registrations within the admin's scope")
async def get_admin_registrations(
    payment_status: Optional[str] = Query(None, alias="status"),
    department_id: Optional[int] = None,
    event_id: Optional[int] = None,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    registrations = await retrieve_admin_registrations_controller(db, admin, payment_status, department_id, event_id)
    return ResponseModel(registrations, "Registrations retrieved successfully")


@router.get("/count", response_description="Number of registrations, optionally by payment status")
async def get_registration_count(payment_status: Optional[str] = Query(None, alias="status"),
                                 db: Session = Depends(get_db)):
    count = await count_registrations_controller(db, payment_status)
    return ResponseModel({"count": count, "status": payment_status}, "Registration count retrieved")


# ----------------------- UPDATE payment status -----------------------
@router.put("/status/{registration_id}", response_description="Set the payment status of a registration")
async def update_payment_status(
    response: Response,
    registration_id: int,
    body: PaymentStatusUpdate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        registration = await update_payment_status_controller(db, admin, registration_id, body.payment_status.value)
        return ResponseModel(registration, f"Registration marked {registration['payment_status']}")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


@router.put("/verify/{registration_id}", response_description="Verify the payment of a registration")
async def verify_registration(
    response: Response,
    registration_id: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        registration = await verify_registration_controller(db, admin, registration_id)
        return ResponseModel(registration, "Payment verified")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


@router.put("/reject/{registration_id}", response_description="Reject the payment of a registration")
async def reject_registration(
    response: Response,
    registration_id: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        registration = await reject_registration_controller(db, admin, registration_id)
        return ResponseModel(registration, "Payment rejected")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


@router.put("/reset/{registration_id}", response_description="Move a registration back to pending")
async def reset_registration(
    response: Response,
    registration_id: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        registration = await reset_registration_controller(db, admin, registration_id)
        return ResponseModel(registration, "Payment status reset to Pending")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- WEBSOCKETS -----------------------
@router.websocket("/ws/changes")
async def websocket_registration_changes(websocket: WebSocket, token: str = None, db: Session = Depends(get_db)):
    auth_session = authenticate_websocket(db, token)
    admin = db.query(Admin).filter(Admin.id == auth_session.user_id).first() if auth_session else None
    if not admin:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    # the scope is fixed for the life of the socket
    scope = SimpleNamespace(id=admin.id, role=admin.role, department_id=admin.department_id, event_id=admin.event_id)
    await registration_manager.connect(websocket, scope)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        registration_manager.disconnect(websocket)


@router.websocket("/ws/live-count")
async def websocket_live_count(websocket: WebSocket, db: Session = Depends(get_db)):
    await live_count_manager.connect(websocket)
    try:
        verified = await count_registrations_controller(db, PaymentStatus.VERIFIED.value)
        await websocket.send_json({"event": "count", "verified": verified})
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        live_count_manager.disconnect(websocket)


__all__ = ["router"]
