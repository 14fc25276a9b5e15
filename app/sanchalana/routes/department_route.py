from fastapi import APIRouter, Response, Depends
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.dependencies import get_current_admin
from sanchalana.controller.department_controller import *
from sanchalana.schema.department_schema import DepartmentCreate, DepartmentUpdate
from sanchalana.models.department_model import department_helper
from sanchalana.models.coordinator_model import coordinator_helper
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()

# ----------------------- GET ALL Departments -----------------------
@router.get("/all", response_description="Retrieve all departments")
async def get_departments(db: Session = Depends(get_db)):
    departments = await retrieve_departments_controller(db)
    return ResponseModel([department_helper(d) for d in departments], "Departments retrieved successfully")


# ----------------------- GET Department -----------------------
@router.get("/{department_id}", response_description="Department with its events and coordinators")
async def get_department(response: Response, department_id: int, db: Session = Depends(get_db)):
    try:
        department = await retrieve_department_controller(db, department_id)
        return ResponseModel(department_detail(department), "Department retrieved successfully")
    except FestError as e:
        return ErrorFromException(response, e)


@router.get("/{department_id}/coordinators", response_description="Department coordinators")
async def get_department_coordinators(response: Response, department_id: int, db: Session = Depends(get_db)):
    try:
        coordinators = await retrieve_department_coordinators_controller(db, department_id)
        return ResponseModel([coordinator_helper(c) for c in coordinators], "Coordinators retrieved successfully")
    except FestError as e:
        return ErrorFromException(response, e)


# ----------------------- ADD Department -----------------------
@router.post("/add", response_description="Create a department with coordinators")
async def add_department(
    response: Response,
    body: DepartmentCreate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        department = await add_department_controller(db, admin, body.model_dump())
        return ResponseModel(department_detail(department), "Department created successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- UPDATE Department -----------------------
@router.put("/update/{department_id}", response_description="Update a department and its coordinators")
async def update_department(
    response: Response,
    department_id: int,
    update_data: DepartmentUpdate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        department = await update_department_controller(
            db, admin, department_id, update_data.model_dump(exclude_none=True)
        )
        return ResponseModel(department_detail(department), "Department and coordinators have been updated successfully.")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- DELETE Department -----------------------
@router.delete("/{department_id}", response_description="Delete a department, its events and coordinators")
async def delete_department(
    response: Response,
    department_id: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        deleted = await delete_department_controller(db, admin, department_id)
        return ResponseModel(deleted, "Department deleted successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


@router.delete("/coordinator/{coordinator_id}", response_description="Delete a coordinator")
async def delete_coordinator(
    response: Response,
    coordinator_id: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        deleted = await delete_coordinator_controller(db, admin, coordinator_id)
        return ResponseModel(deleted, "Coordinator deleted successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


__all__ = ["router"]
