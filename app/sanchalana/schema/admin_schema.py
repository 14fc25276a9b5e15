from pydantic import BaseModel
from typing import Optional
from sanchalana.models.admin_model import AdminRole


class AdminCreate(BaseModel):
    user_id: str
    role: AdminRole
    department_id: Optional[int] = None
    event_id: Optional[int] = None
