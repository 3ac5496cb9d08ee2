# slotify/services/slot_service.py
"""
Slot registry administration: list, create (or reactivate), update, soft delete.
"""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotify.database import atomic
from slotify.models.check_in import CheckIn
from slotify.models.parking_slot import ParkingSlot
from slotify.schemas.slot import SlotCreate, SlotUpdate
from slotify.utils.errors import BadRequestError, ConflictError, NotFoundError
from slotify.utils.logger import get_logger

logger = get_logger(__name__)


def get_active_slot(db: Session, slot_id: uuid.UUID, for_update: bool = False) -> ParkingSlot:
    """Active slot by id, or NOT_FOUND. `for_update` row-locks it where the store supports it."""
    q = db.query(ParkingSlot).filter(ParkingSlot.id == slot_id)
    if for_update:
        q = q.with_for_update()
    slot = q.first()
    if not slot or not slot.is_active:
        raise NotFoundError("Slot not found")
    return slot


def open_check_in_for_slot(db: Session, slot_id: uuid.UUID):
    return db.query(CheckIn).filter(CheckIn.slot_id == slot_id, CheckIn.checked_out_at.is_(None)).first()


def list_slots(db: Session) -> list[ParkingSlot]:
    return (
        db.query(ParkingSlot)
        .filter(ParkingSlot.is_active.is_(True))
        .order_by(ParkingSlot.level.asc(), ParkingSlot.slot_code.asc())
        .all()
    )


def create_slot(db: Session, body: SlotCreate) -> ParkingSlot:
    existing = db.query(ParkingSlot).filter(ParkingSlot.slot_code == body.slot_code).first()

    if existing:
        if existing.is_active:
            raise ConflictError(f"Slot code {body.slot_code} already exists")
        # Soft-deleted code: reactivate the same row with the supplied values
        with atomic(db):
            existing.is_active = True
            existing.level = body.level
            existing.type = body.type
        db.refresh(existing)
        logger.info(f"Slot {existing.slot_code} reactivated (level={existing.level}, {existing.type.value})")
        return existing

    slot = ParkingSlot(slot_code=body.slot_code, level=body.level, type=body.type, is_active=True)
    try:
        with atomic(db):
            db.add(slot)
    except IntegrityError:
        raise ConflictError(f"Slot code {body.slot_code} already exists")
    db.refresh(slot)
    logger.info(f"Slot {slot.slot_code} created (level={slot.level}, {slot.type.value})")
    return slot


def update_slot(db: Session, slot_id: uuid.UUID, body: SlotUpdate) -> ParkingSlot:
    slot = get_active_slot(db, slot_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    new_code = changes.get("slot_code")
    if new_code and new_code != slot.slot_code:
        # Soft-deleted codes count too: they stay reserved for reactivation
        if db.query(ParkingSlot).filter(ParkingSlot.slot_code == new_code).first():
            raise ConflictError(f"Slot code {new_code} already exists")

    try:
        with atomic(db):
            for field, value in changes.items():
                setattr(slot, field, value)
    except IntegrityError:
        raise ConflictError(f"Slot code {new_code} already exists")
    db.refresh(slot)
    logger.info(f"Slot {slot.slot_code} updated: {sorted(changes)}")
    return slot


def delete_slot(db: Session, slot_id: uuid.UUID) -> None:
    slot = get_active_slot(db, slot_id, for_update=True)
    if open_check_in_for_slot(db, slot.id):
        raise BadRequestError("Cannot delete slot with an active check-in")

    with atomic(db):
        slot.is_active = False
    logger.info(f"Slot {slot.slot_code} deactivated")
