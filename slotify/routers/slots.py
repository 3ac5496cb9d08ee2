# slotify/routers/slots.py
"""Slot registry endpoints. /slots/available is declared before /slots/{slot_id}."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slotify.database import get_db
from slotify.dependencies import require_role
from slotify.models.user import Role
from slotify.schemas.slot import SlotCreate, SlotOut, SlotUpdate
from slotify.services import checkin_service, slot_service

router = APIRouter()

employee_only = require_role(Role.EMPLOYEE)
admin_only = require_role(Role.ADMIN)


@router.get("/slots/available", response_model=list[SlotOut], summary="Free slots for check-in",
            dependencies=[Depends(employee_only)])
def list_available_slots(db: Session = Depends(get_db)):
    """Active slots with no open check-in, ordered by level then code."""
    return checkin_service.list_available(db)


@router.get("/slots", response_model=list[SlotOut], summary="All active slots",
            dependencies=[Depends(require_role(Role.ADMIN, Role.SECURITY))])
def list_slots(db: Session = Depends(get_db)):
    return slot_service.list_slots(db)


@router.post("/slots", response_model=SlotOut, status_code=status.HTTP_201_CREATED,
             summary="Create (or reactivate) a slot", dependencies=[Depends(admin_only)])
def create_slot(body: SlotCreate, db: Session = Depends(get_db)):
    """A soft-deleted code is reactivated in place with the new level and type."""
    return slot_service.create_slot(db, body)


@router.put("/slots/{slot_id}", response_model=SlotOut, summary="Update a slot",
            dependencies=[Depends(admin_only)])
def update_slot(slot_id: UUID, body: SlotUpdate, db: Session = Depends(get_db)):
    return slot_service.update_slot(db, slot_id, body)


@router.delete("/slots/{slot_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Soft-delete a slot",
               dependencies=[Depends(admin_only)])
def delete_slot(slot_id: UUID, db: Session = Depends(get_db)):
    slot_service.delete_slot(db, slot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
