from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from uuid import UUID

from slotify.schemas.slot import SlotOut


class CheckInCreate(BaseModel):
    slot_id: UUID


class CheckInOut(BaseModel):
    id: UUID
    user_id: UUID
    slot_id: UUID
    vehicle_id: str
    checked_in_at: datetime
    checked_out_at: Optional[datetime]
    slot: SlotOut

    class Config:
        from_attributes = True


class CountOut(BaseModel):
    count: int
