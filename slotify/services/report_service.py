# slotify/services/report_service.py
"""
Daily occupancy report, derived on every call from the check-in ledger
and the slot registry. Nothing is stored.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from slotify.config import settings
from slotify.models.check_in import CheckIn
from slotify.models.parking_slot import ParkingSlot
from slotify.utils.clock import start_of_local_day, utcnow


def daily_report(db: Session, now: Optional[datetime] = None) -> dict:
    now = now or utcnow()
    since = start_of_local_day(now, settings.REPORT_TIMEZONE)

    open_today = (
        db.query(CheckIn)
        .filter(CheckIn.checked_in_at >= since, CheckIn.checked_out_at.is_(None))
        .order_by(CheckIn.checked_in_at.asc())
        .all()
    )
    total_slots = db.query(func.count(ParkingSlot.id)).filter(ParkingSlot.is_active.is_(True)).scalar() or 0
    used_slots = len(open_today)

    return {
        "generated_at": now,
        "total_slots": total_slots,
        "used_slots": used_slots,
        "empty_slots": total_slots - used_slots,
        "occupied_slots": [
            {"slot_code": c.slot.slot_code, "vehicle_id": c.vehicle_id} for c in open_today
        ],
    }
