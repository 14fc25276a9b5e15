from fastapi import APIRouter, Response, Depends
from typing import Optional
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.dependencies import get_current_admin
from sanchalana.controller.event_controller import *
from sanchalana.schema.event_schema import EventCreate, EventUpdate
from sanchalana.models.event_model import event_helper
from sanchalana.response_model import ResponseModel, ErrorFromException
from sanchalana.exceptions import FestError

router = APIRouter()

# ----------------------- GET ALL Events -----------------------
@router.get("/all", response_description="Retrieve all events")
async def get_events(department_id: Optional[int] = None, db: Session = Depends(get_db)):
    events = await retrieve_events_controller(db, department_id)
    return ResponseModel([event_helper(e) for e in events], "Events retrieved successfully")


# ----------------------- GET Trending Events -----------------------
@router.get("/trending", response_description="Events featured on the homepage")
async def get_trending_events(db: Session = Depends(get_db)):
    events = await retrieve_trending_events_controller(db)
    return ResponseModel([event_helper(e) for e in events], "Trending events retrieved successfully")


# ----------------------- SEARCH Events -----------------------
@router.get("/search", response_description="Search and filter events")
async def search_events(
    q: Optional[str] = None,
    department_id: Optional[int] = None,
    team_size: Optional[int] = None,
    event_type: Optional[str] = None,
    db: Session = Depends(get_db)
):
    events = await search_events_controller(db, q, department_id, team_size, event_type)
    return ResponseModel([event_helper(e) for e in events], "Events filtered successfully")


# ----------------------- GET Events managed by the admin -----------------------
@router.get("/admin", response_description="Events visible to the current admin")
async def get_admin_events(admin=Depends(get_current_admin), db: Session = Depends(get_db)):
    events = await retrieve_admin_events_controller(db, admin)
    return ResponseModel([event_helper(e) for e in events], "Events retrieved successfully")


# ----------------------- GET Event -----------------------
@router.get("/{event_id}", response_description="Retrieve one event")
async def get_event(response: Response, event_id: int, db: Session = Depends(get_db)):
    try:
        event = await retrieve_event_controller(db, event_id)
        return ResponseModel(event_helper(event), "Event retrieved successfully")
    except FestError as e:
        return ErrorFromException(response, e)


# ----------------------- ADD Event -----------------------
@router.post("/add", response_description="Create a new event")
async def add_event(
    response: Response,
    body: EventCreate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        new_event = await add_event_controller(db, admin, body.model_dump())
        return ResponseModel(event_helper(new_event), "New event has been created successfully.")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- UPDATE Event -----------------------
@router.put("/update/{event_id}", response_description="Update an event")
async def update_event(
    response: Response,
    event_id: int,
    update_data: EventUpdate,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        updated_event = await update_event_controller(db, admin, event_id, update_data.model_dump(exclude_unset=True))
        return ResponseModel(event_helper(updated_event), "Event has been updated successfully.")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


# ----------------------- DELETE Event -----------------------
@router.delete("/{event_id}", response_description="Delete an event")
async def delete_event(
    response: Response,
    event_id: int,
    admin=Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        deleted_event = await delete_event_controller(db, admin, event_id)
        return ResponseModel(deleted_event, "Event has been deleted successfully.")
    except FestError as e:
        db.rollback()
        return ErrorFromException(response, e)


__all__ = ["router"]
