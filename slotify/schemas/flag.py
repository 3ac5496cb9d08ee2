from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from uuid import UUID

from slotify.schemas.slot import SlotOut


class FlagCreate(BaseModel):
    slot_id: UUID
    vehicle_id: str = Field(min_length=1)


class UserSummary(BaseModel):
    id: UUID
    email: str

    class Config:
        from_attributes = True


class FlagOut(BaseModel):
    id: UUID
    slot_id: UUID
    vehicle_id: str
    reported_at: datetime
    resolved_at: Optional[datetime]
    slot: SlotOut
    reported_by: UserSummary
    resolved_by: Optional[UserSummary]

    class Config:
        from_attributes = True
