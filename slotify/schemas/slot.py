from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from uuid import UUID

from slotify.models.parking_slot import SLOT_CODE_PATTERN, SlotType


class SlotCreate(BaseModel):
    slot_code: str = Field(pattern=SLOT_CODE_PATTERN, description="One uppercase letter + 4 digits, e.g. M1001")
    level: int = Field(ge=1)
    type: SlotType


class SlotUpdate(BaseModel):
    slot_code: Optional[str] = Field(default=None, pattern=SLOT_CODE_PATTERN)
    level: Optional[int] = Field(default=None, ge=1)
    type: Optional[SlotType] = None


class SlotOut(BaseModel):
    id: UUID
    slot_code: str
    level: int
    type: SlotType
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
