# slotify/routers/flags.py
"""Security flags: create (security), list (admin + security), resolve (admin)."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from slotify.database import get_db
from slotify.dependencies import Principal, require_role
from slotify.models.user import Role
from slotify.schemas.flag import FlagCreate, FlagOut
from slotify.services import flag_service

router = APIRouter()


@router.post("/flags", response_model=FlagOut, status_code=status.HTTP_201_CREATED,
             summary="Flag an unregistered vehicle in an empty slot")
def create_flag(
    body: FlagCreate,
    principal: Principal = Depends(require_role(Role.SECURITY)),
    db: Session = Depends(get_db),
):
    return flag_service.create_flag(db, principal.user_id, body.slot_id, body.vehicle_id)


@router.get("/flags", response_model=list[FlagOut], summary="List flags, filterable by resolved",
            dependencies=[Depends(require_role(Role.ADMIN, Role.SECURITY))])
def list_flags(resolved: Optional[bool] = None, db: Session = Depends(get_db)):
    """Newest first. resolved=true / resolved=false narrows the list."""
    return flag_service.list_flags(db, resolved)


@router.patch("/flags/{flag_id}/resolve", response_model=FlagOut, summary="Resolve a flag")
def resolve_flag(
    flag_id: UUID,
    principal: Principal = Depends(require_role(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    return flag_service.resolve_flag(db, flag_id, principal.user_id)
