# slotify/models/parking_slot.py
"""
Parking slot registry.
Slots are never hard-deleted: deletion sets is_active=False, and creating a
slot with the code of a soft-deleted one reactivates that same row.
"""

import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, Uuid

from slotify.database import Base
from slotify.utils.clock import utcnow

SLOT_CODE_PATTERN = r"^[A-Z]\d{4}$"   # e.g. M1001


class SlotType(str, enum.Enum):
    TWO_WHEELER = "TWO_WHEELER"
    FOUR_WHEELER = "FOUR_WHEELER"


class ParkingSlot(Base):
    __tablename__ = "parking_slots"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slot_code = Column(String(5), unique=True, nullable=False, index=True)
    level = Column(Integer, nullable=False)
    type = Column(Enum(SlotType, name="slot_type"), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<ParkingSlot {self.slot_code} level={self.level} active={self.is_active}>"
