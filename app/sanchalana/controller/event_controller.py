import logging
import random
from sqlalchemy.orm import Session
from sanchalana.models.event_model import Event
from sanchalana.models.department_model import Department
from sanchalana.models.admin_model import Admin, AdminRole
from sanchalana.models.registration_model import Registration
from sanchalana.controller.permission_controller import (require,
                                                         can_create_event,
                                                         can_edit_event,
                                                         can_delete_event)
from sanchalana.controller.registration_controller import (parse_team_members,
                                                           registration_records_for_events,
                                                           publish_cascaded_deletes)
from sanchalana.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGES = [
    "https://images.unsplash.com/photo-1488590528505-98d2b5aba04b",
    "https://images.unsplash.com/photo-1518770660439-4636190af475",
    "https://images.unsplash.com/photo-1461749280684-dccba630e2f6",
    "https://images.unsplash.com/photo-1486312338219-ce68d2c6f44d",
    "https://images.unsplash.com/photo-1581091226825-a6a2a5aee158",
    "https://images.unsplash.com/photo-1485827404703-89b55fcc595e",
    "https://images.unsplash.com/photo-1526374965328-7f61d4dc18c5",
    "https://images.unsplash.com/photo-1531297484001-80022131f5a1",
]


def ensure_department(db: Session, department_id: int):
    department = db.query(Department).filter(Department.id == department_id).first()
    if not department:
        raise ValidationError(f"Department {department_id} does not exist", field="department_id")
    return department


# ------------------ Retrieve ALL Events ------------------
async def retrieve_events_controller(db: Session, department_id: int = None):
    query = db.query(Event)
    if department_id is not None:
        query = query.filter(Event.department_id == department_id)
    return query.order_by(Event.title).all()


# ------------------ Retrieve Event ------------------
async def retrieve_event_controller(db: Session, event_id: int):
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event", event_id)
    return event


# ------------------ Trending Events ------------------
async def retrieve_trending_events_controller(db: Session):
    return db.query(Event).filter(Event.is_trending.is_(True)).order_by(Event.created_at.desc(), Event.id.desc()).all()


# ------------------ Search Events ------------------
async def search_events_controller(db: Session, keyword: str = None, department_id: int = None,
                                   team_size: int = None, event_type: str = None):
    query = db.query(Event)
    if keyword:
        query = query.filter(Event.title.ilike(f"%{keyword}%"))
    if department_id is not None:
        query = query.filter(Event.department_id == department_id)
    if team_size is not None:
        query = query.filter(Event.team_size == team_size)
    if event_type:
        query = query.filter(Event.event_type.ilike(event_type))
    return query.order_by(Event.title).all()


# ------------------ Events visible to an admin ------------------
def scope_events_query(query, admin):
    if admin.role == AdminRole.DEPARTMENT_ADMIN.value:
        return query.filter(Event.department_id == admin.department_id)
    if admin.role == AdminRole.EVENT_ADMIN.value:
        return query.filter(Event.id == admin.event_id)
    return query


async def retrieve_admin_events_controller(db: Session, admin):
    return scope_events_query(db.query(Event), admin).order_by(Event.title).all()


# ------------------ Add Event ------------------
async def add_event_controller(db: Session, admin, event_data: dict):
    require(
        can_create_event(admin, event_data["department_id"]),
        "You can only manage events for your department.",
        admin
    )
    ensure_department(db, event_data["department_id"])

    new_event = Event(**event_data)
    db.add(new_event)
    db.commit()
    db.refresh(new_event)
    logger.info("Event %s created by %s", new_event.id, admin.id)
    return new_event


# ------------------ Update Event ------------------
REQUIRED_FIELDS = {"title", "department_id", "team_size", "registration_fee", "event_type", "is_trending"}


async def update_event_controller(db: Session, admin, event_id: int, update_data: dict):
    # an explicit null only clears optional columns
    update_data = {k: v for k, v in update_data.items() if v is not None or k not in REQUIRED_FIELDS}
    event = await retrieve_event_controller(db, event_id)
    require(
        can_edit_event(admin, event, update_data.get("department_id")),
        "You can only manage your assigned events.",
        admin
    )
    if "department_id" in update_data:
        ensure_department(db, update_data["department_id"])
    if "team_size" in update_data:
        ensure_team_size_fits(db, event, update_data["team_size"])

    moved = "department_id" in update_data and update_data["department_id"] != event.department_id
    for key, val in update_data.items():
        setattr(event, key, val)

    if moved:
        # event admins follow their event into the new department
        for event_admin in db.query(Admin).filter(Admin.event_id == event.id).all():
            event_admin.department_id = event.department_id
        logger.info("Event %s moved to department %s by %s", event.id, event.department_id, admin.id)

    db.commit()
    db.refresh(event)
    return event


def ensure_team_size_fits(db: Session, event: Event, team_size: int):
    registrations = db.query(Registration.team_members).filter(Registration.event_id == event.id).all()
    largest = max((len(parse_team_members(r.team_members)) for r in registrations), default=0)
    if team_size < largest:
        raise ValidationError(
            f"{event.title} already has a registered team of {largest} members",
            field="team_size"
        )


# ------------------ Delete Event ------------------
async def delete_event_controller(db: Session, admin, event_id: int):
    event = await retrieve_event_controller(db, event_id)
    require(can_delete_event(admin, event), "You can only delete events from your department.", admin)

    deleted = {"id": event.id, "title": event.title, "department_id": event.department_id}
    removed_registrations = registration_records_for_events(db, [event.id])
    db.delete(event)
    db.commit()
    await publish_cascaded_deletes(db, removed_registrations)
    logger.info("Event %s deleted by %s", event_id, admin.id)
    return deleted


# ------------------ Placeholder images ------------------
def assign_placeholder_images(db: Session, rng: random.Random = None):
    """Give every event without an image a random stock picture."""
    rng = rng or random.Random()
    events = db.query(Event).filter(Event.image_url.is_(None)).all()
    for event in events:
        event.image_url = f"{rng.choice(PLACEHOLDER_IMAGES)}?w=600&h=400&fit=crop&auto=format"
    db.commit()
    return len(events)
