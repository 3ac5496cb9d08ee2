# slotify/services/user_service.py
"""
User administration: listing, and the password-gated employee purge.
"""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotify.database import atomic
from slotify.models.check_in import CheckIn
from slotify.models.password_reset_token import PasswordResetToken
from slotify.models.slot_flag import SlotFlag
from slotify.models.user import EmployeeProfile, Role, User
from slotify.services.auth_service import reauthenticate
from slotify.utils.errors import ConflictError
from slotify.utils.logger import get_logger

logger = get_logger(__name__)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.role.asc(), User.created_at.asc()).all()


def clear_employees(db: Session, admin_user_id: uuid.UUID, password: str) -> dict:
    """
    Delete every EMPLOYEE user together with their flags, check-ins,
    reset tokens and profiles, in one transaction. No dry-run, no undo.
    """
    admin = reauthenticate(db, admin_user_id, password)

    employee_ids = [row.id for row in db.query(User.id).filter(User.role == Role.EMPLOYEE).all()]
    if not employee_ids:
        return {"count": 0}

    try:
        with atomic(db):
            db.query(SlotFlag).filter(SlotFlag.reported_by_id.in_(employee_ids)).delete(synchronize_session=False)
            db.query(CheckIn).filter(CheckIn.user_id.in_(employee_ids)).delete(synchronize_session=False)
            db.query(PasswordResetToken).filter(
                PasswordResetToken.user_id.in_(employee_ids)
            ).delete(synchronize_session=False)
            db.query(EmployeeProfile).filter(
                EmployeeProfile.user_id.in_(employee_ids)
            ).delete(synchronize_session=False)
            db.query(User).filter(User.id.in_(employee_ids)).delete(synchronize_session=False)
    except IntegrityError:
        # A check-in or flag for one of these employees was committed mid-purge
        raise ConflictError("Employee records changed during the purge, try again")

    db.expire_all()
    logger.warning(f"Employee purge by {admin.email}: {len(employee_ids)} employees removed")
    return {"count": len(employee_ids)}
