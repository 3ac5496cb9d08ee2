# tests/test_checkin_service.py
"""Occupancy ledger: check-in / check-out invariants against a real session."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import uuid

import pytest
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from slotify.models.check_in import CheckIn
from slotify.models.parking_slot import ParkingSlot, SlotType
from slotify.models.user import Role, User
from slotify.services import checkin_service, slot_service
from slotify.utils.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from slotify.utils.security import hash_password
from conftest import ADMIN_PASSWORD, make_employee


def open_count(db, **filters):
    q = db.query(func.count(CheckIn.id)).filter(CheckIn.checked_out_at.is_(None))
    for column, value in filters.items():
        q = q.filter(getattr(CheckIn, column) == value)
    return q.scalar()


class TestListAvailable:
    def test_all_active_slots_free_ordered_by_level_then_code(self, db, seeded):
        db.add(ParkingSlot(slot_code="A1002", level=1, type=SlotType.TWO_WHEELER))
        db.commit()

        codes = [s.slot_code for s in checkin_service.list_available(db)]
        assert codes == ["A1002", "M1001", "C2001"]

    def test_occupied_and_inactive_slots_excluded(self, db, seeded):
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        seeded.slot2.is_active = False
        db.commit()

        assert checkin_service.list_available(db) == []


class TestCheckIn:
    def test_creates_open_record_with_profile_vehicle(self, db, seeded):
        record = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

        assert record.checked_out_at is None
        assert record.vehicle_id == "KA01AB1234"
        assert record.slot.slot_code == "M1001"

    def test_unknown_slot_not_found(self, db, seeded):
        with pytest.raises(NotFoundError):
            checkin_service.check_in(db, seeded.employee.id, uuid.uuid4())

    def test_inactive_slot_not_found(self, db, seeded):
        seeded.slot1.is_active = False
        db.commit()
        with pytest.raises(NotFoundError):
            checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

    def test_occupied_slot_conflict_keeps_single_open_record(self, db, seeded):
        first = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        other = make_employee(db, "emp2@test.com", "EMP002", "DL01")

        with pytest.raises(ConflictError) as exc:
            checkin_service.check_in(db, other.id, seeded.slot1.id)
        assert exc.value.message == checkin_service.SLOT_OCCUPIED

        db.rollback()
        assert open_count(db, slot_id=seeded.slot1.id) == 1
        assert checkin_service.open_check_in_for_slot(db, seeded.slot1.id).id == first.id

    def test_repeat_check_in_same_slot_is_conflict_not_noop(self, db, seeded):
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        with pytest.raises(ConflictError):
            checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

    def test_second_slot_while_checked_in_conflict(self, db, seeded):
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

        with pytest.raises(ConflictError) as exc:
            checkin_service.check_in(db, seeded.employee.id, seeded.slot2.id)
        assert exc.value.message == checkin_service.ALREADY_CHECKED_IN

        db.rollback()
        assert open_count(db, user_id=seeded.employee.id) == 1

    def test_missing_profile_bad_request(self, db, seeded):
        bare = User(email="bare@test.com", password_hash=hash_password("x" * 8), role=Role.EMPLOYEE)
        db.add(bare)
        db.commit()

        with pytest.raises(BadRequestError):
            checkin_service.check_in(db, bare.id, seeded.slot1.id)
        db.rollback()
        assert open_count(db) == 0

    def test_concurrent_loser_gets_conflict_from_store(self, db, seeded, monkeypatch):
        """A request that passed the pre-checks before the winner committed."""
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        other = make_employee(db, "emp2@test.com", "EMP002", "DL01")

        monkeypatch.setattr(checkin_service, "open_check_in_for_slot", lambda *_: None)
        with pytest.raises(ConflictError):
            checkin_service.check_in(db, other.id, seeded.slot1.id)

        assert open_count(db, slot_id=seeded.slot1.id) == 1

    def test_concurrent_second_slot_for_same_user_conflict_from_store(self, db, seeded, monkeypatch):
        """Same employee racing into two slots: the open-per-user index decides."""
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

        monkeypatch.setattr(checkin_service, "open_check_in_for_user", lambda *_: None)
        with pytest.raises(ConflictError) as exc:
            checkin_service.check_in(db, seeded.employee.id, seeded.slot2.id)
        assert exc.value.message == checkin_service.ALREADY_CHECKED_IN

        assert open_count(db, user_id=seeded.employee.id) == 1
        assert open_count(db, slot_id=seeded.slot2.id) == 0

    def test_open_slot_index_rejects_second_open_row(self, db, seeded):
        other = make_employee(db, "emp2@test.com", "EMP002", "DL01")
        db.add(CheckIn(user_id=seeded.employee.id, slot_id=seeded.slot1.id, vehicle_id="A"))
        db.commit()

        db.add(CheckIn(user_id=other.id, slot_id=seeded.slot1.id, vehicle_id="B"))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_closed_rows_do_not_block_new_check_in(self, db, seeded):
        record = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        checkin_service.check_out(db, seeded.employee.id, record.id)

        again = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        assert again.id != record.id
        assert open_count(db, slot_id=seeded.slot1.id) == 1


class TestCheckOut:
    def test_round_trip_then_second_checkout_fails(self, db, seeded):
        record = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

        closed = checkin_service.check_out(db, seeded.employee.id, record.id)
        assert closed.checked_out_at is not None
        stamped = closed.checked_out_at

        with pytest.raises(BadRequestError):
            checkin_service.check_out(db, seeded.employee.id, record.id)
        db.expire_all()
        assert db.get(CheckIn, record.id).checked_out_at == stamped

    def test_unknown_record_not_found(self, db, seeded):
        with pytest.raises(NotFoundError):
            checkin_service.check_out(db, seeded.employee.id, uuid.uuid4())

    def test_someone_elses_record_forbidden(self, db, seeded):
        record = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        other = make_employee(db, "emp2@test.com", "EMP002", "DL01")

        with pytest.raises(ForbiddenError):
            checkin_service.check_out(db, other.id, record.id)
        assert db.get(CheckIn, record.id).checked_out_at is None

    def test_slot_available_again_after_checkout(self, db, seeded):
        record = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        assert "M1001" not in [s.slot_code for s in checkin_service.list_available(db)]

        checkin_service.check_out(db, seeded.employee.id, record.id)
        assert "M1001" in [s.slot_code for s in checkin_service.list_available(db)]


class TestListMine:
    def test_newest_first_and_only_own(self, db, seeded):
        first = checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        checkin_service.check_out(db, seeded.employee.id, first.id)
        second = checkin_service.check_in(db, seeded.employee.id, seeded.slot2.id)

        other = make_employee(db, "emp2@test.com", "EMP002", "DL01")
        checkin_service.check_in(db, other.id, seeded.slot1.id)

        mine = checkin_service.list_mine(db, seeded.employee.id)
        assert [c.id for c in mine] == [second.id, first.id]


class TestForceCheckoutAll:
    def test_wrong_password_mutates_nothing(self, db, seeded):
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)

        with pytest.raises(UnauthorizedError):
            checkin_service.force_checkout_all(db, seeded.admin.id, "wrong-password")
        assert open_count(db) == 1

    def test_unknown_admin_unauthorized(self, db, seeded):
        with pytest.raises(UnauthorizedError):
            checkin_service.force_checkout_all(db, uuid.uuid4(), ADMIN_PASSWORD)

    def test_closes_every_open_check_in(self, db, seeded):
        checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
        other = make_employee(db, "emp2@test.com", "EMP002", "DL01")
        checkin_service.check_in(db, other.id, seeded.slot2.id)

        result = checkin_service.force_checkout_all(db, seeded.admin.id, ADMIN_PASSWORD)

        assert result == {"count": 2}
        assert open_count(db) == 0
        assert len(checkin_service.list_available(db)) == 2

    def test_nothing_open_returns_zero(self, db, seeded):
        assert checkin_service.force_checkout_all(db, seeded.admin.id, ADMIN_PASSWORD) == {"count": 0}


def test_delete_slot_with_open_check_in_is_bad_request(db, seeded):
    checkin_service.check_in(db, seeded.employee.id, seeded.slot1.id)
    with pytest.raises(BadRequestError):
        slot_service.delete_slot(db, seeded.slot1.id)
