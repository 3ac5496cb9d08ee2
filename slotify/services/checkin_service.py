# slotify/services/checkin_service.py
"""
Occupancy ledger: check-in, check-out, history, and the admin force-checkout.

Invariants:
  - at most one open check-in (checked_out_at IS NULL) per slot
  - at most one open check-in per user
Both are pre-checked here and backed by partial unique indexes, so a concurrent
request that slips past the pre-checks fails at commit and is reported as CONFLICT.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotify.database import atomic
from slotify.models.check_in import CheckIn
from slotify.models.parking_slot import ParkingSlot
from slotify.models.user import EmployeeProfile
from slotify.services.auth_service import reauthenticate
from slotify.services.slot_service import get_active_slot, open_check_in_for_slot
from slotify.utils.clock import utcnow
from slotify.utils.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from slotify.utils.logger import get_logger

logger = get_logger(__name__)

SLOT_OCCUPIED = "Slot is already occupied"
ALREADY_CHECKED_IN = "You are already checked in to another slot"


def open_check_in_for_user(db: Session, user_id: uuid.UUID):
    return db.query(CheckIn).filter(CheckIn.user_id == user_id, CheckIn.checked_out_at.is_(None)).first()


def list_available(db: Session) -> list[ParkingSlot]:
    """Active slots without an open check-in, by level then code."""
    occupied = select(CheckIn.slot_id).where(CheckIn.checked_out_at.is_(None))
    return (
        db.query(ParkingSlot)
        .filter(ParkingSlot.is_active.is_(True), ParkingSlot.id.not_in(occupied))
        .order_by(ParkingSlot.level.asc(), ParkingSlot.slot_code.asc())
        .all()
    )


def check_in(db: Session, user_id: uuid.UUID, slot_id: uuid.UUID) -> CheckIn:
    slot = get_active_slot(db, slot_id, for_update=True)

    if open_check_in_for_slot(db, slot.id):
        raise ConflictError(SLOT_OCCUPIED)
    if open_check_in_for_user(db, user_id):
        raise ConflictError(ALREADY_CHECKED_IN)

    profile = db.query(EmployeeProfile).filter(EmployeeProfile.user_id == user_id).first()
    if not profile:
        raise BadRequestError("Employee profile not found")

    record = CheckIn(user_id=user_id, slot_id=slot.id, vehicle_id=profile.vehicle_id, checked_in_at=utcnow())
    try:
        with atomic(db):
            db.add(record)
    except IntegrityError:
        # A concurrent check-in won; report which invariant it took
        if open_check_in_for_slot(db, slot.id):
            raise ConflictError(SLOT_OCCUPIED)
        raise ConflictError(ALREADY_CHECKED_IN)

    db.refresh(record)
    logger.info(f"Check-in: slot {slot.slot_code} vehicle {record.vehicle_id} user {user_id}")
    return record


def check_out(db: Session, user_id: uuid.UUID, check_in_id: uuid.UUID) -> CheckIn:
    record = db.get(CheckIn, check_in_id)
    if not record:
        raise NotFoundError("Check-in record not found")
    if record.user_id != user_id:
        raise ForbiddenError("Not your check-in")
    if record.checked_out_at is not None:
        raise BadRequestError("Already checked out")

    with atomic(db):
        # Conditional close: of two racing checkouts only one matches
        closed = (
            db.query(CheckIn)
            .filter(CheckIn.id == check_in_id, CheckIn.checked_out_at.is_(None))
            .update({CheckIn.checked_out_at: utcnow()}, synchronize_session=False)
        )
        if closed == 0:
            raise BadRequestError("Already checked out")

    db.refresh(record)
    logger.info(f"Check-out: slot {record.slot.slot_code} vehicle {record.vehicle_id} user {user_id}")
    return record


def list_mine(db: Session, user_id: uuid.UUID) -> list[CheckIn]:
    return (
        db.query(CheckIn)
        .filter(CheckIn.user_id == user_id)
        .order_by(CheckIn.checked_in_at.desc())
        .all()
    )


def force_checkout_all(db: Session, admin_user_id: uuid.UUID, password: str) -> dict:
    """Emergency release: close every open check-in after re-entering the admin password."""
    admin = reauthenticate(db, admin_user_id, password)

    with atomic(db):
        count = (
            db.query(CheckIn)
            .filter(CheckIn.checked_out_at.is_(None))
            .update({CheckIn.checked_out_at: utcnow()}, synchronize_session=False)
        )

    logger.warning(f"Force checkout by {admin.email}: {count} open check-ins closed")
    return {"count": count}
