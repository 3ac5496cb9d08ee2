# slotify/models/slot_flag.py
"""
Flag ledger: vehicles reported by security in a slot with no registered check-in.
resolved_at / resolved_by_id are set once by an admin and never cleared.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from slotify.database import Base
from slotify.utils.clock import utcnow


class SlotFlag(Base):
    __tablename__ = "slot_flags"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slot_id = Column(Uuid, ForeignKey("parking_slots.id"), nullable=False, index=True)
    vehicle_id = Column(String(50), nullable=False)
    reported_by_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    reported_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    resolved_at = Column(DateTime)
    resolved_by_id = Column(Uuid, ForeignKey("users.id"))

    slot = relationship("ParkingSlot", lazy="joined")
    reported_by = relationship("User", foreign_keys=[reported_by_id], lazy="joined")
    resolved_by = relationship("User", foreign_keys=[resolved_by_id], lazy="joined")

    def __repr__(self):
        return f"<SlotFlag {self.id} vehicle={self.vehicle_id} resolved={self.resolved_at is not None}>"
