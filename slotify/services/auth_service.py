# slotify/services/auth_service.py
"""
Login, employee registration, password reset, and admin re-authentication.
forgot_password never reveals whether an email is registered.
"""

import uuid
from datetime import timedelta
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slotify.config import settings
from slotify.database import atomic
from slotify.models.password_reset_token import PasswordResetToken
from slotify.models.user import EmployeeProfile, Role, User
from slotify.schemas.auth import RegisterRequest
from slotify.utils.clock import utcnow
from slotify.utils.errors import BadRequestError, ConflictError, ForbiddenError, UnauthorizedError
from slotify.utils.logger import get_logger
from slotify.utils.security import (
    create_access_token,
    generate_reset_token,
    hash_password,
    verify_password,
)

logger = get_logger(__name__)

RESET_REQUESTED_MESSAGE = "If that email exists, a reset link has been sent."


def _issue_token(user: User) -> dict:
    return {
        "token": create_access_token(user.id, user.role.value),
        "role": user.role,
        "user_id": user.id,
    }


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_profile_by_employee_id(db: Session, employee_id: str) -> Optional[EmployeeProfile]:
    return db.query(EmployeeProfile).filter(EmployeeProfile.employee_id == employee_id).first()


def login(db: Session, email: str, password: str, allowed_roles: Iterable[Role]) -> dict:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    if user.role not in set(allowed_roles):
        raise ForbiddenError("This login endpoint is not available for your account type")

    logger.info(f"Login: {user.email} ({user.role.value})")
    return _issue_token(user)


def register_employee(db: Session, body: RegisterRequest) -> dict:
    if get_user_by_email(db, body.email):
        raise ConflictError("Email is already registered")
    if get_profile_by_employee_id(db, body.employee_id):
        raise ConflictError("Employee ID is already registered")

    user = User(email=body.email, password_hash=hash_password(body.password), role=Role.EMPLOYEE)
    try:
        with atomic(db):
            db.add(user)
            db.flush()
            db.add(EmployeeProfile(
                user_id=user.id,
                employee_id=body.employee_id,
                vehicle_id=body.vehicle_id,
                phone_number=body.phone_number,
            ))
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email / employee id
        raise ConflictError("Email or employee ID is already registered")

    db.refresh(user)
    logger.info(f"Registered employee {body.employee_id} ({user.email})")
    return _issue_token(user)


def forgot_password(db: Session, email: str) -> dict:
    response = {"message": RESET_REQUESTED_MESSAGE}

    user = get_user_by_email(db, email)
    if not user:
        return response

    token = generate_reset_token()
    with atomic(db):
        db.add(PasswordResetToken(
            user_id=user.id,
            token=token,
            expires_at=utcnow() + timedelta(minutes=settings.RESET_TOKEN_TTL_MINUTES),
        ))

    if settings.is_production:
        # No mail transport yet; operators pick the token up from the log
        logger.warning(f"[PASSWORD RESET] token for {email}: {token}")
    else:
        response["reset_token"] = token
    return response


def reset_password(db: Session, token: str, new_password: str) -> None:
    reset = db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()
    if not reset:
        raise BadRequestError("Invalid or expired reset token")
    if reset.used_at is not None:
        raise BadRequestError("Reset token has already been used")
    if reset.expires_at < utcnow():
        raise BadRequestError("Reset token has expired")

    password_hash = hash_password(new_password)
    with atomic(db):
        claimed = (
            db.query(PasswordResetToken)
            .filter(PasswordResetToken.id == reset.id, PasswordResetToken.used_at.is_(None))
            .update({PasswordResetToken.used_at: utcnow()}, synchronize_session=False)
        )
        if claimed == 0:
            raise BadRequestError("Reset token has already been used")
        db.query(User).filter(User.id == reset.user_id).update(
            {User.password_hash: password_hash, User.updated_at: utcnow()},
            synchronize_session=False,
        )
    logger.info(f"Password reset for user {reset.user_id}")


def reauthenticate(db: Session, user_id: uuid.UUID, password: str) -> User:
    """Second-factor check before destructive admin operations."""
    user = db.get(User, user_id)
    if not user:
        logger.warning(f"Re-authentication failed: user {user_id} not found")
        raise UnauthorizedError("User not found")
    if not verify_password(password, user.password_hash):
        logger.warning(f"Re-authentication failed: wrong password for {user.email}")
        raise UnauthorizedError("Incorrect password")
    return user
