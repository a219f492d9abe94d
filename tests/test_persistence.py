"""
Tests for the JSON-file reservation repository.
"""

from __future__ import annotations

import json
import tempfile
from dataclasses import replace
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from storefront.application.exceptions import NotFoundError, SlotConflictError
from storefront.application.use_cases.booking import BookingUseCase
from storefront.domain.entities.reservation import (
    Customer,
    Reservation,
    ReservationStatus,
    ServiceRef,
)
from storefront.infrastructure.store.json_store import JsonReservationRepository
from storefront.infrastructure.store.memory_store import MemoryReservationRepository
from storefront.infrastructure.store.seed import DEMO_RESERVATIONS, seed_demo_reservations


def make_reservation(reservation_id: str, time: str = "10:00 AM", status=ReservationStatus.pending) -> Reservation:
    now = datetime(2024, 1, 9, 22, 0, tzinfo=timezone.utc)
    return Reservation(
        id=reservation_id,
        service=ServiceRef(id="sew-in-special", name="Sew In Special", price="$249.99"),
        date=date(2024, 1, 15),
        time=time,
        customer=Customer(name="Sarah Johnson", email="sarah.j@email.com", notes="First time client"),
        status=status,
        created_at=now,
        updated_at=now,
    )


def test_json_repository_persists_across_instances():
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonReservationRepository(data_dir=tmpdir)
        original = make_reservation("r1")
        repository.insert(original)
        repository.update("r1", lambda r: replace(r, status=ReservationStatus.confirmed, deposit_paid=True))

        reopened = JsonReservationRepository(data_dir=tmpdir)
        stored = reopened.find("r1")

        assert stored == replace(original, status=ReservationStatus.confirmed, deposit_paid=True)
        assert stored.created_at.tzinfo is not None


def test_json_repository_enforces_slot_uniqueness():
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonReservationRepository(data_dir=tmpdir)
        repository.insert(make_reservation("r1"))

        with pytest.raises(SlotConflictError):
            repository.insert(make_reservation("r2"))

        repository.insert(make_reservation("r3", status=ReservationStatus.cancelled))
        assert [r.id for r in repository.query()] == ["r1", "r3"]


def test_json_repository_delete_and_missing_ids():
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonReservationRepository(data_dir=tmpdir)
        repository.insert(make_reservation("r1"))
        repository.insert(make_reservation("r2", time="11:00 AM"))

        assert repository.delete("r1").id == "r1"
        assert [r.id for r in repository.query()] == ["r2"]
        with pytest.raises(NotFoundError):
            repository.delete("r1")
        with pytest.raises(NotFoundError):
            repository.update("ghost", lambda r: r)


def test_json_repository_corrupt_file_reads_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "reservations.json").write_text("[[[", encoding="utf-8")

        repository = JsonReservationRepository(data_dir=tmpdir)

        assert repository.query() == []
        assert not (Path(tmpdir) / "reservations.json.tmp").exists()


def test_booking_use_case_over_json_store():
    with tempfile.TemporaryDirectory() as tmpdir:
        uc = BookingUseCase(repository=JsonReservationRepository(data_dir=tmpdir))
        uc.create_reservation(
            ServiceRef(id="makeup-special", name="Makeup Special"),
            "2024-01-15",
            "10:00 AM",
            Customer(name="Maria Garcia", email="maria.g@email.com"),
        )

        fresh = BookingUseCase(repository=JsonReservationRepository(data_dir=tmpdir))

        assert "10:00 AM" not in fresh.get_available_slots("2024-01-15")
        assert fresh.list_reservations().total == 1


def test_seed_is_idempotent():
    repository = MemoryReservationRepository()

    assert seed_demo_reservations(repository) == len(DEMO_RESERVATIONS)
    assert seed_demo_reservations(repository) == 0
    assert len(repository.query()) == len(DEMO_RESERVATIONS)


def test_json_repository_skips_unreadable_rows():
    """Rows that cannot be read are left out of results but kept in the file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonReservationRepository(data_dir=tmpdir)
        repository.insert(make_reservation("r1"))

        path = Path(tmpdir) / "reservations.json"
        document = json.loads(path.read_text(encoding="utf-8"))
        document["reservations"].append(
            {"id": "legacy", "date": "2024-01-15", "time": "11:00 AM", "status": "no_show"}
        )
        document["reservations"].append({"id": "undated", "time": "1:00 PM"})
        path.write_text(json.dumps(document), encoding="utf-8")

        uc = BookingUseCase(repository=JsonReservationRepository(data_dir=tmpdir))

        assert "10:00 AM" not in uc.get_available_slots("2024-01-15")
        assert [r.id for r in uc.list_reservations().items] == ["r1"]
        assert uc.update_status("r1", "confirmed").status == ReservationStatus.confirmed

        stored = json.loads(path.read_text(encoding="utf-8"))["reservations"]
        assert [row["id"] for row in stored] == ["r1", "legacy", "undated"]
        assert stored[0]["status"] == "confirmed"
        assert stored[1]["status"] == "no_show"


def test_json_repository_wrongly_shaped_document_reads_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "reservations.json").write_text(
            json.dumps({"reservations": {"r1": "oops"}}), encoding="utf-8"
        )

        repository = JsonReservationRepository(data_dir=tmpdir)

        assert repository.query() == []
        repository.insert(make_reservation("r1"))
        assert [r.id for r in repository.query()] == ["r1"]


def test_seed_leaves_deleted_demo_bookings_deleted():
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonReservationRepository(data_dir=tmpdir)
        assert seed_demo_reservations(repository) == len(DEMO_RESERVATIONS)
        repository.delete("1767999000001")

        reopened = JsonReservationRepository(data_dir=tmpdir)

        assert seed_demo_reservations(reopened) == 0
        assert reopened.find("1767999000001") is None


def test_seed_after_demo_slot_rebooked():
    """A demo slot taken by a real booking does not break seeding on restart."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonReservationRepository(data_dir=tmpdir)
        seed_demo_reservations(repository)
        repository.delete("1767999000001")
        repository.insert(make_reservation("r1"))

        reopened = JsonReservationRepository(data_dir=tmpdir)

        assert seed_demo_reservations(reopened) == 0
        assert [r.id for r in reopened.query()] == ["1767999000002", "r1"]


def test_seed_skips_demo_rows_whose_slot_is_held():
    class HiddenRowRepository(MemoryReservationRepository):
        # reports empty but already holds the demo 10:00 AM slot
        def query(self, predicate=None):
            return []

    repository = HiddenRowRepository([make_reservation("r1")])

    assert seed_demo_reservations(repository) == len(DEMO_RESERVATIONS) - 1
    assert repository.find("1767999000001") is None
    assert repository.find("1767999000002") is not None
