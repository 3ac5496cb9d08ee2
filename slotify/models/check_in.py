# slotify/models/check_in.py
"""
Occupancy ledger.
One row per check-in; checked_out_at stays NULL while the slot is occupied.
The two partial unique indexes keep at most one open row per slot and per user.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import relationship

from slotify.database import Base
from slotify.utils.clock import utcnow

_OPEN = text("checked_out_at IS NULL")


class CheckIn(Base):
    __tablename__ = "check_ins"
    __table_args__ = (
        Index("uq_check_ins_open_slot", "slot_id", unique=True,
              postgresql_where=_OPEN, sqlite_where=_OPEN),
        Index("uq_check_ins_open_user", "user_id", unique=True,
              postgresql_where=_OPEN, sqlite_where=_OPEN),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    slot_id = Column(Uuid, ForeignKey("parking_slots.id"), nullable=False, index=True)
    vehicle_id = Column(String(50), nullable=False)   # copied from the employee profile
    checked_in_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    checked_out_at = Column(DateTime)

    slot = relationship("ParkingSlot", lazy="joined")

    def __repr__(self):
        return f"<CheckIn {self.id} slot={self.slot_id} out={self.checked_out_at}>"
