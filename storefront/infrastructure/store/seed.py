from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from storefront.application.exceptions import SlotConflictError
from storefront.application.ports.reservation_repository import ReservationRepositoryPort
from storefront.domain.entities.reservation import (
    Customer,
    Reservation,
    ReservationStatus,
    ServiceRef,
)

logger = logging.getLogger(__name__)

DEMO_RESERVATIONS: tuple[Reservation, ...] = (
    Reservation(
        id="1767999000001",
        service=ServiceRef(
            id="sew-in-special",
            name="FALL IN LOVE WITH HAIR *SEW IN* SPECIAL",
            duration="4 hours",
            price="$249.99",
        ),
        date=date(2024, 1, 15),
        time="10:00 AM",
        customer=Customer(
            name="Sarah Johnson",
            email="sarah.j@email.com",
            phone="(555) 123-4567",
            notes="First time client",
        ),
        status=ReservationStatus.confirmed,
        deposit_paid=True,
        created_at=datetime(2024, 1, 9, 22, 0, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 9, 22, 0, tzinfo=timezone.utc),
    ),
    Reservation(
        id="1767999000002",
        service=ServiceRef(
            id="makeup-special",
            name="FALL IN LOVE WITH HAIR *MAKEUP *SPECIAL",
            duration="1 hour",
            price="$75.00",
        ),
        date=date(2024, 1, 16),
        time="2:00 PM",
        customer=Customer(
            name="Maria Garcia",
            email="maria.g@email.com",
            phone="(555) 987-6543",
            notes="Wedding makeup trial",
        ),
        status=ReservationStatus.pending,
        deposit_paid=False,
        created_at=datetime(2024, 1, 9, 22, 30, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 9, 22, 30, tzinfo=timezone.utc),
    ),
)


def seed_demo_reservations(repository: ReservationRepositoryPort) -> int:
    """
    Insert the demo bookings into an empty store. Returns how many were added.
    A store that already holds bookings is left alone, so deleted demo rows stay deleted.
    """
    if repository.query():
        return 0
    added = 0
    for reservation in DEMO_RESERVATIONS:
        try:
            repository.insert(reservation)
        except SlotConflictError:
            logger.warning(
                "Demo booking skipped",
                extra={"reservation_id": reservation.id, "reason": "slot taken"},
            )
            continue
        added += 1
    return added
