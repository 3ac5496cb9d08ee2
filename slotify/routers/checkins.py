# slotify/routers/checkins.py
"""Check-in / check-out endpoints for employees, plus the admin force-checkout."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from slotify.database import get_db
from slotify.dependencies import Principal, require_role
from slotify.models.user import Role
from slotify.schemas.auth import PasswordConfirmation
from slotify.schemas.check_in import CheckInCreate, CheckInOut, CountOut
from slotify.services import checkin_service

router = APIRouter()

employee_only = require_role(Role.EMPLOYEE)


@router.post("/checkins/force-checkout", response_model=CountOut, summary="Check out every open check-in")
def force_checkout(
    body: PasswordConfirmation,
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    """Emergency release. Requires the admin to re-enter their password."""
    return checkin_service.force_checkout_all(db, principal.user_id, body.password)


@router.post("/checkins", response_model=CheckInOut, status_code=status.HTTP_201_CREATED,
             summary="Check in to a slot")
def check_in(body: CheckInCreate, principal: Principal = Depends(employee_only), db: Session = Depends(get_db)):
    return checkin_service.check_in(db, principal.user_id, body.slot_id)


@router.patch("/checkins/{check_in_id}/checkout", response_model=CheckInOut, summary="Check out")
def check_out(check_in_id: UUID, principal: Principal = Depends(employee_only), db: Session = Depends(get_db)):
    return checkin_service.check_out(db, principal.user_id, check_in_id)


@router.get("/checkins/mine", response_model=list[CheckInOut], summary="My check-ins, newest first")
def my_check_ins(principal: Principal = Depends(employee_only), db: Session = Depends(get_db)):
    return checkin_service.list_mine(db, principal.user_id)
