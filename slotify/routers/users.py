# slotify/routers/users.py
"""User administration (admin only)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from slotify.database import get_db
from slotify.dependencies import Principal, require_role
from slotify.models.user import Role
from slotify.schemas.auth import PasswordConfirmation
from slotify.schemas.check_in import CountOut
from slotify.schemas.user import UserListItem
from slotify.services import user_service

router = APIRouter()

admin_only = require_role(Role.ADMIN)


@router.get("/users", response_model=list[UserListItem], summary="All users with employee profiles",
            dependencies=[Depends(admin_only)])
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.delete("/users/employees", response_model=CountOut, summary="Delete every employee account")
def clear_employees(
    body: PasswordConfirmation,
    principal: Principal = Depends(admin_only),
    db: Session = Depends(get_db),
):
    """Removes all employees with their check-ins and flags. Requires the admin password."""
    return user_service.clear_employees(db, principal.user_id, body.password)
