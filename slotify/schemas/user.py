from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from uuid import UUID

from slotify.models.user import Role


class ProfileOut(BaseModel):
    employee_id: str
    vehicle_id: str
    phone_number: str

    class Config:
        from_attributes = True


class UserListItem(BaseModel):
    id: UUID
    email: str
    role: Role
    created_at: datetime
    profile: Optional[ProfileOut]

    class Config:
        from_attributes = True
