# slotify/services/seed_service.py
"""
Default accounts and sample slots for a fresh install.
Idempotent: rows that already exist (by email / slot code) are left untouched.
"""

from sqlalchemy.orm import Session

from slotify.database import atomic
from slotify.models.parking_slot import ParkingSlot, SlotType
from slotify.models.user import Role, User
from slotify.utils.logger import get_logger
from slotify.utils.security import hash_password

logger = get_logger(__name__)

DEFAULT_USERS = [
    ("admin@slotify.com", "Admin@1234", Role.ADMIN),
    ("security@slotify.com", "Security@1234", Role.SECURITY),
]

# Format: one uppercase letter + 4 digits
SAMPLE_SLOTS = (
    [(f"M100{i}", 1, SlotType.TWO_WHEELER) for i in range(1, 6)]
    + [(f"C200{i}", 2, SlotType.FOUR_WHEELER) for i in range(1, 6)]
)


def seed_defaults(db: Session) -> dict:
    """Returns how many users and slots were created."""
    created = {"users": 0, "slots": 0}

    with atomic(db):
        for email, password, role in DEFAULT_USERS:
            if db.query(User).filter(User.email == email).first():
                continue
            db.add(User(email=email, password_hash=hash_password(password), role=role))
            created["users"] += 1
            logger.info(f"Created {role.value.lower()}: {email}")

        for code, level, slot_type in SAMPLE_SLOTS:
            if db.query(ParkingSlot).filter(ParkingSlot.slot_code == code).first():
                continue
            db.add(ParkingSlot(slot_code=code, level=level, type=slot_type, is_active=True))
            created["slots"] += 1

    logger.info(f"Seed complete: {created['users']} users, {created['slots']} slots created")
    return created
