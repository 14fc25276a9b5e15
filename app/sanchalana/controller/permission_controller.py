"""
Role-scoped authorization for admin actions.

Three roles exist. A main_admin may do anything. A department_admin acts
inside one department, an event_admin on one event. Every check here is a
plain predicate over rows that are already loaded; callers run them before
any write and turn a denial into ``PermissionDeniedError`` via ``require``.
"""
import logging
from typing import Optional

from sanchalana.exceptions import PermissionDeniedError
from sanchalana.models.admin_model import AdminRole
from sanchalana.models.event_model import Event

logger = logging.getLogger(__name__)

MAIN = AdminRole.MAIN_ADMIN.value
DEPARTMENT = AdminRole.DEPARTMENT_ADMIN.value
EVENT = AdminRole.EVENT_ADMIN.value


def require(allowed: bool, message: str, admin=None):
    if not allowed:
        logger.info("Permission denied for admin %s: %s", getattr(admin, "id", None), message)
        raise PermissionDeniedError(message)


def is_main_admin(admin) -> bool:
    return admin is not None and admin.role == MAIN


def owns_department(admin, department_id: Optional[int]) -> bool:
    return (
        admin is not None
        and admin.role == DEPARTMENT
        and admin.department_id is not None
        and admin.department_id == department_id
    )


def owns_event(admin, event_id: Optional[int]) -> bool:
    return (
        admin is not None
        and admin.role == EVENT
        and admin.event_id is not None
        and admin.event_id == event_id
    )


def can_modify(admin, event: Event) -> bool:
    """Main admin, the department admin of the event's department, or the event's own admin."""
    return is_main_admin(admin) or owns_department(admin, event.department_id) or owns_event(admin, event.id)


# ------------------ Departments ------------------

def can_manage_departments(admin) -> bool:
    return is_main_admin(admin)


# ------------------ Events ------------------

def can_create_event(admin, department_id: int) -> bool:
    return is_main_admin(admin) or owns_department(admin, department_id)


def can_edit_event(admin, event: Event, new_department_id: Optional[int] = None) -> bool:
    moving = new_department_id is not None and new_department_id != event.department_id
    if is_main_admin(admin):
        return True
    # scoped admins may not hand the event to another department
    if owns_department(admin, event.department_id) or owns_event(admin, event.id):
        return not moving
    return False


def can_delete_event(admin, event: Event) -> bool:
    return is_main_admin(admin) or owns_department(admin, event.department_id)


# ------------------ Admin accounts ------------------

def assignable_roles(admin) -> list:
    if is_main_admin(admin):
        return [MAIN, DEPARTMENT, EVENT]
    if admin is not None and admin.role == DEPARTMENT:
        return [EVENT]
    return []


def can_create_admin(admin, role: str, event: Optional[Event] = None) -> bool:
    if role not in assignable_roles(admin):
        return False
    if is_main_admin(admin):
        return True
    # department admins only hand out event_admin rows inside their own department
    return event is not None and owns_department(admin, event.department_id)


def can_delete_admin(admin, target) -> bool:
    if admin is None or target is None or admin.id == target.id:
        return False
    if is_main_admin(admin):
        return True
    return target.role == EVENT and owns_department(admin, target.department_id)


# ------------------ Registrations ------------------

def can_view_registration(admin, event_id: Optional[int], department_id: Optional[int]) -> bool:
    return is_main_admin(admin) or owns_department(admin, department_id) or owns_event(admin, event_id)


def can_update_registration_status(admin, registration, event: Optional[Event] = None) -> bool:
    event = event or registration.event
    if event is None:
        return is_main_admin(admin)
    return (
        is_main_admin(admin)
        or owns_department(admin, event.department_id)
        or owns_event(admin, registration.event_id)
    )
