from fastapi import APIRouter, Response, Depends
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.dependencies import get_current_user
from sanchalana.controller.auth_controller import get_profile, create_profile, update_profile
from sanchalana.schema.user_schema import ProfileCreate, ProfileUpdate
from sanchalana.models.profile_model import profile_helper
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()

# ----------------------- GET PROFILE -----------------------
@router.get("/profile", response_description="Retrieve own profile")
async def get_user_profile(response: Response, user=Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        profile = await get_profile(db, user.id)
        return ResponseModel(profile_helper(profile), "Profile retrieved successfully")
    except FestError as e:
        return ErrorFromException(response, e)


# ----------------------- CREATE PROFILE -----------------------
@router.post("/profile", response_description="Create profile for an account that has none")
async def add_user_profile(
    response: Response,
    body: ProfileCreate,
    user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        profile = await create_profile(db, user, body.model_dump())
        return ResponseModel(profile_helper(profile), "Profile created successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- UPDATE PROFILE -----------------------
@router.put("/profile", response_description="Update name and phone")
async def update_user_profile(
    response: Response,
    update_data: ProfileUpdate,
    user=Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        update_dict = update_data.model_dump(exclude_none=True)
        profile = await update_profile(db, user.id, update_dict)
        return ResponseModel(profile_helper(profile), "Profile updated successfully")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


__all__ = ["router"]
