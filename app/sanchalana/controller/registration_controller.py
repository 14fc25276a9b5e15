import json
import logging
import uuid
from fastapi.encoders import jsonable_encoder
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from sanchalana.models.registration_model import Registration, PaymentMethod, PaymentStatus
from sanchalana.models.event_model import Event, event_helper
from sanchalana.models.department_model import department_helper
from sanchalana.models.profile_model import Profile
from sanchalana.models.admin_model import AdminRole
from sanchalana.controller.ws_manager import registration_manager, live_count_manager
from sanchalana.controller.permission_controller import (require,
                                                         can_update_registration_status,
                                                         can_view_registration)
from sanchalana.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TEAM_ID_PREFIX = "TEAM-"
TEAM_ID_ATTEMPTS = 5


def generate_team_id():
    return f"{TEAM_ID_PREFIX}{uuid.uuid4().hex[:8]}"


def parse_team_members(raw) -> list:
    """Normalise stored team_members into a list of {name, usn, phone}.

    Rows written by older clients may hold a JSON string or a single object
    instead of a list. Anything that cannot be read becomes an empty list.
    """
    members = raw
    if isinstance(members, str):
        try:
            members = json.loads(members)
        except ValueError as e:
            logger.error("Error parsing team members: %s", e)
            return []

    if isinstance(members, dict):
        members = [members]
    if not isinstance(members, list):
        return []

    return [
        {
            "name": member.get("name") or "",
            "usn": member.get("usn") or "",
            "phone": member.get("phone") or "",
        }
        for member in members if isinstance(member, dict)
    ]


def registration_helper(registration, with_event: bool = False) -> dict:
    data = {
        "id": registration.id,
        "event_id": registration.event_id,
        "user_id": registration.user_id,
        "team_id": registration.team_id,
        "team_members": parse_team_members(registration.team_members),
        "payment_method": registration.payment_method,
        "payment_status": registration.payment_status,
        "created_at": registration.created_at,
        "updated_at": registration.updated_at,
    }
    if with_event:
        event = registration.event
        data["event"] = event_helper(event) if event else None
        data["department"] = department_helper(event.department) if event and event.department else None
    return data


# ------------------ Change notifications ------------------
async def count_registrations_controller(db: Session, payment_status: str = None):
    query = db.query(func.count(Registration.id))
    if payment_status:
        query = query.filter(Registration.payment_status == payment_status)
    return query.scalar() or 0


async def publish_registration_change(db: Session, change: str, record: dict, department_id: int):
    # admins only hear about registrations inside their own scope
    await registration_manager.broadcast(
        {
            "event": change,
            "table": "registrations",
            "record": jsonable_encoder(record),
        },
        lambda scope: can_view_registration(scope, record["event_id"], department_id)
    )
    # the live counter re-queries on every change
    if live_count_manager.active_connections:
        verified = await count_registrations_controller(db, PaymentStatus.VERIFIED.value)
        await live_count_manager.broadcast({"event": "count", "verified": verified})


# ------------------ Add Registration ------------------
def validate_team(event: Event, team_members: list):
    if len(team_members) < 1:
        raise ValidationError("At least one team member is required", field="team_members")
    if len(team_members) > event.team_size:
        raise ValidationError(
            f"Team cannot have more than {event.team_size} members for {event.title}",
            field="team_members"
        )


def unique_team_id(db: Session):
    for _ in range(TEAM_ID_ATTEMPTS):
        team_id = generate_team_id()
        if not db.query(Registration.id).filter(Registration.team_id == team_id).first():
            return team_id
        logger.warning("Team id %s already taken, generating another", team_id)
    raise ConflictError("Could not allocate a team id, please retry")


async def add_registration_controller(db: Session, user, registration_data: dict):
    profile = db.query(Profile).filter(Profile.id == user.id).first()
    if not profile:
        raise ValidationError("Complete your profile before registering for events", field="profile")

    event = db.query(Event).filter(Event.id == registration_data["event_id"]).first()
    if not event:
        raise NotFoundError("Event", registration_data["event_id"])

    team_members = registration_data["team_members"]
    validate_team(event, team_members)
    payment_method = PaymentMethod(registration_data["payment_method"]).value

    new_registration = Registration(
        event_id=event.id,
        user_id=user.id,
        team_id=unique_team_id(db),
        team_members=team_members,
        payment_method=payment_method,
        payment_status=PaymentStatus.PENDING.value,
    )
    db.add(new_registration)
    db.commit()
    db.refresh(new_registration)
    logger.info("Registration %s (%s) created for event %s", new_registration.id, new_registration.team_id, event.id)

    record = registration_helper(new_registration)
    await publish_registration_change(db, "INSERT", record, event.department_id)

    if payment_method == PaymentMethod.QR_CODE.value:
        record["payment_qr_url"] = event.payment_qr_url or event.qr_code_url
    return record


# ------------------ Retrieve user registrations ------------------
async def retrieve_user_registrations_controller(db: Session, user_id: str):
    registrations = db.query(Registration).options(
        joinedload(Registration.event).joinedload(Event.department)
    ).filter(Registration.user_id == user_id).order_by(
        Registration.created_at.desc(), Registration.id.desc()
    ).all()
    return [registration_helper(r, with_event=True) for r in registrations]


# ------------------ Retrieve registrations for an admin ------------------
async def retrieve_admin_registrations_controller(db: Session, admin, payment_status: str = None,
                                                  department_id: int = None, event_id: int = None):
    query = db.query(Registration).join(Event, Registration.event_id == Event.id).options(
        joinedload(Registration.event).joinedload(Event.department)
    )

    if admin.role == AdminRole.DEPARTMENT_ADMIN.value:
        query = query.filter(Event.department_id == admin.department_id)
    elif admin.role == AdminRole.EVENT_ADMIN.value:
        query = query.filter(Registration.event_id == admin.event_id)

    if payment_status:
        query = query.filter(func.lower(Registration.payment_status) == payment_status.lower())
    if department_id is not None:
        query = query.filter(Event.department_id == department_id)
    if event_id is not None:
        query = query.filter(Registration.event_id == event_id)

    registrations = query.order_by(Registration.created_at.desc(), Registration.id.desc()).all()
    return [registration_helper(r, with_event=True) for r in registrations]


# ------------------ Update payment status ------------------
async def update_payment_status_controller(db: Session, admin, registration_id: int, payment_status: str):
    registration = db.query(Registration).options(
        joinedload(Registration.event)
    ).filter(Registration.id == registration_id).first()
    if not registration:
        raise NotFoundError("Registration", registration_id)

    require(
        can_update_registration_status(admin, registration),
        "You do not have permission to update this registration.",
        admin
    )

    new_status = PaymentStatus(payment_status).value
    if registration.payment_status == new_status:
        # repeating a transition changes nothing
        return registration_helper(registration)

    # last write wins, concurrent admins are not detected
    registration.payment_status = new_status
    db.commit()
    db.refresh(registration)
    logger.info("Registration %s set to %s by %s", registration_id, new_status, admin.id)

    record = registration_helper(registration)
    await publish_registration_change(db, "UPDATE", record, registration.event.department_id)
    return record


async def verify_registration_controller(db: Session, admin, registration_id: int):
    return await update_payment_status_controller(db, admin, registration_id, PaymentStatus.VERIFIED.value)


async def reject_registration_controller(db: Session, admin, registration_id: int):
    return await update_payment_status_controller(db, admin, registration_id, PaymentStatus.REJECTED.value)


async def reset_registration_controller(db: Session, admin, registration_id: int):
    return await update_payment_status_controller(db, admin, registration_id, PaymentStatus.PENDING.value)


# ------------------ Cascaded deletes ------------------
def registration_records_for_events(db: Session, event_ids: list):
    """Snapshot (record, department_id) pairs before their events are deleted."""
    if not event_ids:
        return []
    registrations = db.query(Registration).options(
        joinedload(Registration.event)
    ).filter(Registration.event_id.in_(event_ids)).all()
    return [(registration_helper(r), r.event.department_id) for r in registrations]


async def publish_cascaded_deletes(db: Session, records: list):
    for record, department_id in records:
        await publish_registration_change(db, "DELETE", record, department_id)
