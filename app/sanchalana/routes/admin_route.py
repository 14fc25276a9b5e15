from fastapi import APIRouter, Response, Depends
from typing import Optional
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.dependencies import get_current_admin
from sanchalana.controller.admin_controller import *
from sanchalana.controller.permission_controller import assignable_roles
from sanchalana.schema.admin_schema import AdminCreate
from sanchalana.models.admin_model import admin_helper
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()

# ----------------------- GET ALL Admins -----------------------
@router.get("/all", response_description="Admins visible to the current admin")
async def get_admins(admin=Depends(get_current_admin), db: Session = Depends(get_db)):
    admins = await retrieve_admins_controller(db, admin)
    return ResponseModel([admin_helper(a) for a in admins], "Admins retrieved successfully")


@router.get("/me", response_description="Current admin row and the roles it may assign")
async def get_current_admin_row(admin=Depends(get_current_admin)):
    data = admin_helper(admin)
    data["assignable_roles"] = assignable_roles(admin)
    return ResponseModel(data, "Admin retrieved successfully")


@router.get("/users", response_description="Accounts that can be made admins")
async def get_users_with_emails(search: Optional[str] = None, admin=Depends(get_current_admin),
                                db: Session = Depends(get_db)):
    users = await retrieve_users_with_emails_controller(db, search)
    return ResponseModel(users, "Users retrieved successfully")


@router.get("/overview", response_description="Dashboard counts")
async def get_overview(admin=Depends(get_current_admin), db: Session = Depends(get_db)):
    overview = await retrieve_overview_controller(db)
    return ResponseModel(overview, "Overview retrieved successfully")


# ----------------------- ADD Admin -----------------------
@router.post("/add", response_description="Grant an admin role to an account")
async def add_admin(
    response: Response,
    body: AdminCreate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        admin_data = body.model_dump()
        admin_data["role"] = body.role.value
        new_admin = await add_admin_controller(db, admin, admin_data)
        return ResponseModel(admin_helper(new_admin), "Admin created successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- DELETE Admin -----------------------
@router.delete("/{admin_id}", response_description="Revoke an admin role")
async def delete_admin(
    response: Response,
    admin_id: str,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        deleted = await delete_admin_controller(db, admin, admin_id)
        return ResponseModel(deleted, "Admin deleted successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


__all__ = ["router"]
