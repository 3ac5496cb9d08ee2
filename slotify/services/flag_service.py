# slotify/services/flag_service.py
"""
Security flags: a vehicle observed in a slot that has no registered check-in.
Slots with an open check-in are not flaggable; mismatches against a registered
check-in show up in the daily report instead. Resolution is one-way.
"""

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from slotify.database import atomic
from slotify.models.slot_flag import SlotFlag
from slotify.services.slot_service import get_active_slot, open_check_in_for_slot
from slotify.utils.clock import utcnow
from slotify.utils.errors import BadRequestError, NotFoundError
from slotify.utils.logger import get_logger

logger = get_logger(__name__)


def create_flag(db: Session, reported_by_id: uuid.UUID, slot_id: uuid.UUID, vehicle_id: str) -> SlotFlag:
    slot = get_active_slot(db, slot_id, for_update=True)
    if open_check_in_for_slot(db, slot.id):
        raise BadRequestError(
            "Slot has an active registered check-in. "
            "Use the daily report to identify unauthorised vehicles."
        )

    flag = SlotFlag(slot_id=slot.id, vehicle_id=vehicle_id, reported_by_id=reported_by_id, reported_at=utcnow())
    with atomic(db):
        db.add(flag)

    db.refresh(flag)
    logger.warning(f"[FLAG] Vehicle {vehicle_id} reported in slot {slot.slot_code} by {reported_by_id}")
    return flag


def list_flags(db: Session, resolved: Optional[bool] = None) -> list[SlotFlag]:
    """All flags, newest first. resolved=True/False narrows to resolved/unresolved."""
    q = db.query(SlotFlag)
    if resolved is True:
        q = q.filter(SlotFlag.resolved_at.is_not(None))
    elif resolved is False:
        q = q.filter(SlotFlag.resolved_at.is_(None))
    return q.order_by(SlotFlag.reported_at.desc()).all()


def resolve_flag(db: Session, flag_id: uuid.UUID, resolved_by_id: uuid.UUID) -> SlotFlag:
    flag = db.get(SlotFlag, flag_id)
    if not flag:
        raise NotFoundError("Flag not found")
    if flag.resolved_at is not None:
        raise BadRequestError("Flag is already resolved")

    with atomic(db):
        resolved = (
            db.query(SlotFlag)
            .filter(SlotFlag.id == flag_id, SlotFlag.resolved_at.is_(None))
            .update(
                {SlotFlag.resolved_at: utcnow(), SlotFlag.resolved_by_id: resolved_by_id},
                synchronize_session=False,
            )
        )
        if resolved == 0:
            raise BadRequestError("Flag is already resolved")

    db.refresh(flag)
    logger.info(f"Flag {flag.id} resolved by {resolved_by_id}")
    return flag
