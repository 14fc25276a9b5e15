import logging
from sqlalchemy.orm import Session, selectinload
from sanchalana.models.department_model import Department, department_helper
from sanchalana.models.coordinator_model import Coordinator, coordinator_helper
from sanchalana.models.event_model import event_helper
from sanchalana.controller.permission_controller import require, can_manage_departments
from sanchalana.controller.registration_controller import (registration_records_for_events,
                                                           publish_cascaded_deletes)
from sanchalana.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def department_detail(department: Department) -> dict:
    data = department_helper(department)
    data["events"] = [event_helper(e) for e in department.events]
    data["coordinators"] = [coordinator_helper(c) for c in department.coordinators]
    return data


# ------------------ Retrieve ALL Departments ------------------
async def retrieve_departments_controller(db: Session):
    return db.query(Department).order_by(Department.name).all()


# ------------------ Retrieve Department ------------------
async def retrieve_department_controller(db: Session, department_id: int):
    department = db.query(Department).options(
        selectinload(Department.events),
        selectinload(Department.coordinators)
    ).filter(Department.id == department_id).first()
    if not department:
        raise NotFoundError("Department", department_id)
    return department


async def retrieve_department_coordinators_controller(db: Session, department_id: int):
    await retrieve_department_controller(db, department_id)
    return db.query(Coordinator).filter(Coordinator.department_id == department_id).order_by(Coordinator.id).all()


# ------------------ Add Department ------------------
async def add_department_controller(db: Session, admin, department_data: dict):
    require(can_manage_departments(admin), "Only the main admin can manage departments", admin)

    coordinators = department_data.pop("coordinators", None) or []
    new_department = Department(**department_data)
    new_department.coordinators = [
        Coordinator(name=c["name"], phone_number=c.get("phone_number") or "") for c in coordinators
    ]
    db.add(new_department)
    db.commit()
    db.refresh(new_department)
    logger.info("Department %s created by %s", new_department.id, admin.id)
    return new_department


# ------------------ Update Department ------------------
async def update_department_controller(db: Session, admin, department_id: int, update_data: dict):
    require(can_manage_departments(admin), "Only the main admin can manage departments", admin)
    department = await retrieve_department_controller(db, department_id)

    coordinators = update_data.pop("coordinators", None)
    if coordinators is not None:
        sync_coordinators(department, coordinators)

    for key, val in update_data.items():
        setattr(department, key, val)

    # department fields and coordinator changes land in one commit
    db.commit()
    db.refresh(department)
    return department


def sync_coordinators(department: Department, coordinators: list):
    """Delete coordinators missing from the list, update kept ones, insert new ones."""
    existing = {c.id: c for c in department.coordinators}
    kept_ids = {c["id"] for c in coordinators if c.get("id") is not None}

    unknown = kept_ids - set(existing)
    if unknown:
        raise ValidationError(f"Coordinators {sorted(unknown)} do not belong to this department", field="coordinators")

    for coordinator in list(department.coordinators):
        if coordinator.id not in kept_ids:
            department.coordinators.remove(coordinator)

    for data in coordinators:
        if data.get("id") is not None:
            coordinator = existing[data["id"]]
            coordinator.name = data["name"]
            coordinator.phone_number = data.get("phone_number") or ""
        else:
            department.coordinators.append(
                Coordinator(name=data["name"], phone_number=data.get("phone_number") or "")
            )


# ------------------ Delete Department ------------------
async def delete_department_controller(db: Session, admin, department_id: int):
    require(can_manage_departments(admin), "Only the main admin can manage departments", admin)
    department = await retrieve_department_controller(db, department_id)
    deleted = department_helper(department)
    removed_registrations = registration_records_for_events(db, [e.id for e in department.events])

    # events, coordinators and scoped admins go with it
    db.delete(department)
    db.commit()
    await publish_cascaded_deletes(db, removed_registrations)
    logger.info("Department %s deleted by %s", department_id, admin.id)
    return deleted


async def delete_coordinator_controller(db: Session, admin, coordinator_id: int):
    require(can_manage_departments(admin), "Only the main admin can manage coordinators", admin)
    coordinator = db.query(Coordinator).filter(Coordinator.id == coordinator_id).first()
    if not coordinator:
        raise NotFoundError("Coordinator", coordinator_id)
    deleted = coordinator_helper(coordinator)
    db.delete(coordinator)
    db.commit()
    return deleted
