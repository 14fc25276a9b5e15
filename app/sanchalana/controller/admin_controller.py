import logging
from sqlalchemy import func
from sqlalchemy.orm import Session
from sanchalana.models.admin_model import Admin, AdminRole
from sanchalana.models.user_model import User
from sanchalana.models.event_model import Event
from sanchalana.models.department_model import Department
from sanchalana.models.registration_model import Registration, PaymentStatus
from sanchalana.controller.permission_controller import (require,
                                                         is_main_admin,
                                                         can_create_admin,
                                                         can_delete_admin)
from sanchalana.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


# ------------------ Retrieve Admins ------------------
async def retrieve_admins_controller(db: Session, admin):
    query = db.query(Admin)
    if admin.role == AdminRole.DEPARTMENT_ADMIN.value:
        query = query.filter(Admin.department_id == admin.department_id)
    elif admin.role == AdminRole.EVENT_ADMIN.value:
        query = query.filter(Admin.event_id == admin.event_id)
    return query.order_by(Admin.username).all()


# ------------------ Users with emails ------------------
async def retrieve_users_with_emails_controller(db: Session, search: str = None):
    query = db.query(User.id, User.email)
    if search:
        query = query.filter(User.email.ilike(f"%{search}%"))
    return [{"id": row.id, "email": row.email} for row in query.order_by(User.email).all()]


# ------------------ Add Admin ------------------
def resolve_scope(db: Session, role: str, department_id: int = None, event_id: int = None):
    """Return (department_id, event_id, event) satisfying the role's scope rules."""
    if role == AdminRole.MAIN_ADMIN.value:
        return None, None, None

    if role == AdminRole.DEPARTMENT_ADMIN.value:
        if department_id is None:
            raise ValidationError("Please select a department for the department admin", field="department_id")
        if not db.query(Department.id).filter(Department.id == department_id).first():
            raise ValidationError(f"Department {department_id} does not exist", field="department_id")
        return department_id, None, None

    if event_id is None:
        raise ValidationError("Please select an event for the event admin", field="event_id")
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise ValidationError(f"Event {event_id} does not exist", field="event_id")
    if department_id is not None and department_id != event.department_id:
        raise ValidationError("Department does not match the event's department", field="department_id")
    # an event admin always carries its event's department
    return event.department_id, event.id, event


async def add_admin_controller(db: Session, admin, admin_data: dict):
    role = AdminRole(admin_data["role"]).value
    user = db.query(User).filter(User.id == admin_data["user_id"]).first()
    if not user:
        raise ValidationError("Please select a user", field="user_id")

    department_id, event_id, event = resolve_scope(
        db, role, admin_data.get("department_id"), admin_data.get("event_id")
    )
    require(can_create_admin(admin, role, event), "You do not have permission to assign this role", admin)

    # one admin row per identity, a second assignment replaces the first
    target = db.query(Admin).filter(Admin.id == user.id).first()
    if target is not None and not is_main_admin(admin):
        require(can_delete_admin(admin, target), "You do not have permission to change this admin", admin)
    if target is None:
        target = Admin(id=user.id)
        db.add(target)
    target.role = role
    target.department_id = department_id
    target.event_id = event_id
    target.username = user.email

    db.commit()
    db.refresh(target)
    logger.info("Admin %s set to %s by %s", target.id, role, admin.id)
    return target


# ------------------ Delete Admin ------------------
async def delete_admin_controller(db: Session, admin, admin_id: str):
    target = db.query(Admin).filter(Admin.id == admin_id).first()
    if not target:
        raise NotFoundError("Admin", admin_id)
    require(can_delete_admin(admin, target), "You do not have permission to remove this admin", admin)

    deleted = {"id": target.id, "username": target.username, "role": target.role}
    db.delete(target)
    db.commit()
    logger.info("Admin %s removed by %s", admin_id, admin.id)
    return deleted


# ------------------ Overview counts ------------------
async def retrieve_overview_controller(db: Session):
    return {
        "events": db.query(func.count(Event.id)).scalar() or 0,
        "departments": db.query(func.count(Department.id)).scalar() or 0,
        "registrations": db.query(func.count(Registration.id)).scalar() or 0,
        "verified_registrations": db.query(func.count(Registration.id)).filter(
            Registration.payment_status == PaymentStatus.VERIFIED.value
        ).scalar() or 0,
    }
