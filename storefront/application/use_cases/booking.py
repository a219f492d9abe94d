from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Callable

from storefront.application.dto.notifications import BOOKING_CONFIRMATION, BookingConfirmationDTO
from storefront.application.dto.payments import PaymentConfirmation
from storefront.application.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PaymentNotConfirmedError,
    ValidationError,
)
from storefront.application.ports.notifier import NotificationPort
from storefront.application.ports.reservation_repository import ReservationRepositoryPort
from storefront.application.utils.slots import (
    DEFAULT_SLOT_CATALOG,
    parse_booking_date,
    resolve_slot,
    slot_position,
)
from storefront.application.utils.status import can_transition, parse_status
from storefront.domain.entities.reservation import (
    Customer,
    Reservation,
    ReservationStatus,
    ServiceRef,
)

STATUS_COLORS = {
    ReservationStatus.confirmed: "#10b981",
    ReservationStatus.pending: "#f59e0b",
    ReservationStatus.cancelled: "#ef4444",
}
DEFAULT_STATUS_COLOR = "#6b7280"


@dataclass(frozen=True)
class ReservationFilters:
    status: ReservationStatus | str | None = None
    date: date | str | None = None
    search: str | None = None
    offset: int = 0
    limit: int | None = None


@dataclass(frozen=True)
class ReservationPage:
    items: list[Reservation]
    total: int
    start: int
    end: int


@dataclass(frozen=True)
class ReservationChanges:
    """Partial admin edit. None means leave the field as it is."""

    service: ServiceRef | None = None
    date: date | str | None = None
    time: str | None = None
    customer: Customer | None = None
    status: ReservationStatus | str | None = None


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    title: str
    start: str
    background_color: str
    reservation: Reservation


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class BookingUseCase:
    def __init__(
        self,
        repository: ReservationRepositoryPort,
        notifier: NotificationPort | None = None,
        slot_catalog: tuple[str, ...] | list[str] = DEFAULT_SLOT_CATALOG,
        enforce_transitions: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._catalog = tuple(slot_catalog)
        self._enforce_transitions = enforce_transitions
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    @property
    def slot_catalog(self) -> tuple[str, ...]:
        return self._catalog

    def get_available_slots(self, day: date | str | None) -> list[str]:
        """Catalog slots on day that no live reservation holds, in catalog order."""
        parsed = parse_booking_date(day)
        if parsed is None:
            raise ValidationError(f"Invalid date: {day!r}")

        booked = {r.time for r in self._repository.query(lambda r: r.is_live and r.date == parsed)}
        return [slot for slot in self._catalog if slot not in booked]

    def create_reservation(
        self,
        service: ServiceRef | None,
        day: date | str | None,
        time: str | None,
        customer: Customer | None,
    ) -> Reservation:
        if (
            service is None
            or (_blank(service.id) and _blank(service.name))
            or (not isinstance(day, date) and _blank(day))
            or _blank(time)
            or customer is None
            or _blank(customer.name)
            or _blank(customer.email)
        ):
            self._logger.warning("Booking rejected", extra={"reason": "missing_fields"})
            raise ValidationError("Service, date, time, and customer information are required")

        parsed_date = parse_booking_date(day)
        if parsed_date is None:
            raise ValidationError(f"Invalid date: {day!r}")
        slot = resolve_slot(time, self._catalog)
        if slot is None:
            raise ValidationError(f"Invalid time slot: {time!r}")

        now = self._clock()
        reservation = Reservation(
            id=uuid.uuid4().hex,
            service=service,
            date=parsed_date,
            time=slot,
            customer=customer,
            status=ReservationStatus.pending,
            deposit_paid=False,
            created_at=now,
            updated_at=now,
        )
        # raises SlotConflictError when the slot is taken
        stored = self._repository.insert(reservation)
        self._logger.info(
            "Reservation created",
            extra={"reservation_id": stored.id, "date": stored.date.isoformat(), "time": stored.time},
        )
        self._send_confirmation(stored)
        return stored

    def get_reservation(self, reservation_id: str) -> Reservation:
        reservation = self._repository.find(reservation_id)
        if reservation is None:
            raise NotFoundError("Booking not found")
        return reservation

    def update_status(self, reservation_id: str, new_status: ReservationStatus | str) -> Reservation:
        status = parse_status(new_status)

        def apply(current: Reservation) -> Reservation:
            self._check_transition(current, status)
            return replace(current, status=status, updated_at=self._clock())

        updated = self._repository.update(reservation_id, apply)
        self._logger.info(
            "Reservation status updated",
            extra={"reservation_id": updated.id, "status": updated.status.value},
        )
        return updated

    def update_reservation(self, reservation_id: str, changes: ReservationChanges) -> Reservation:
        self.get_reservation(reservation_id)
        fields: dict[str, object] = {}

        if changes.service is not None:
            if _blank(changes.service.id) and _blank(changes.service.name):
                raise ValidationError("Service is required")
            fields["service"] = changes.service
        if changes.date is not None:
            parsed_date = parse_booking_date(changes.date)
            if parsed_date is None:
                raise ValidationError(f"Invalid date: {changes.date!r}")
            fields["date"] = parsed_date
        if changes.time is not None:
            slot = resolve_slot(changes.time, self._catalog)
            if slot is None:
                raise ValidationError(f"Invalid time slot: {changes.time!r}")
            fields["time"] = slot
        if changes.customer is not None:
            if _blank(changes.customer.name) or _blank(changes.customer.email):
                raise ValidationError("Customer name and email are required")
            fields["customer"] = changes.customer

        status = parse_status(changes.status) if changes.status is not None else None

        def apply(current: Reservation) -> Reservation:
            if status is None:
                return replace(current, updated_at=self._clock(), **fields)
            self._check_transition(current, status)
            return replace(current, status=status, updated_at=self._clock(), **fields)

        updated = self._repository.update(reservation_id, apply)
        self._logger.info("Reservation updated", extra={"reservation_id": updated.id})
        return updated

    def delete_reservation(self, reservation_id: str) -> Reservation:
        deleted = self._repository.delete(reservation_id)
        self._logger.info("Reservation deleted", extra={"reservation_id": deleted.id})
        return deleted

    def list_reservations(self, filters: ReservationFilters | None = None) -> ReservationPage:
        filters = filters or ReservationFilters()

        status = parse_status(filters.status) if filters.status not in (None, "") else None
        day = None
        if filters.date not in (None, ""):
            day = parse_booking_date(filters.date)
            if day is None:
                raise ValidationError(f"Invalid date: {filters.date!r}")
        query = (filters.search or "").strip().lower()

        def matches(r: Reservation) -> bool:
            if status is not None and r.status != status:
                return False
            if day is not None and r.date != day:
                return False
            if query and not (
                query in r.customer.name.lower()
                or query in r.customer.email.lower()
                or query in r.service.name.lower()
            ):
                return False
            return True

        matched = self._repository.query(matches)
        start = max(0, filters.offset or 0)
        stop = start + max(0, filters.limit) if filters.limit is not None else len(matched)
        items = matched[start:stop]
        return ReservationPage(items=items, total=len(matched), start=start, end=start + len(items))

    def get_calendar(
        self,
        start: date | str | None = None,
        end: date | str | None = None,
    ) -> list[CalendarEvent]:
        start_date = parse_booking_date(start)
        end_date = parse_booking_date(end)

        def in_range(r: Reservation) -> bool:
            if start_date is None or end_date is None:
                return True
            return start_date <= r.date <= end_date

        reservations = sorted(
            self._repository.query(in_range),
            key=lambda r: (r.date, slot_position(r.time, self._catalog)),
        )
        return [
            CalendarEvent(
                id=r.id,
                title=f"{r.customer.name} - {r.service.name}",
                start=f"{r.date.isoformat()}T{r.time}",
                background_color=STATUS_COLORS.get(r.status, DEFAULT_STATUS_COLOR),
                reservation=r,
            )
            for r in reservations
        ]

    def record_deposit_payment(self, reservation_id: str, confirmation: PaymentConfirmation) -> Reservation:
        """Mark the deposit paid. Only a succeeded provider confirmation may do this."""
        self.get_reservation(reservation_id)
        if not confirmation.succeeded:
            self._logger.warning(
                "Deposit not confirmed",
                extra={"reservation_id": reservation_id, "reason": confirmation.status},
            )
            raise PaymentNotConfirmedError(
                f"Payment {confirmation.payment_intent_id!r} has status {confirmation.status!r}"
            )

        def apply(current: Reservation) -> Reservation:
            return replace(
                current,
                deposit_paid=True,
                payment_reference=confirmation.payment_intent_id,
                updated_at=self._clock(),
            )

        updated = self._repository.update(reservation_id, apply)
        self._logger.info("Deposit recorded", extra={"reservation_id": updated.id})
        return updated

    def _check_transition(self, reservation: Reservation, target: ReservationStatus) -> None:
        if self._enforce_transitions and not can_transition(reservation.status, target):
            raise InvalidTransitionError(
                f"Cannot move booking from {reservation.status.value} to {target.value}"
            )

    def _send_confirmation(self, reservation: Reservation) -> None:
        if self._notifier is None:
            return
        payload = BookingConfirmationDTO.from_reservation(reservation).to_payload()
        try:
            self._notifier.send(BOOKING_CONFIRMATION, reservation.customer.email, payload)
        except Exception as e:
            self._logger.exception(
                "Booking confirmation not sent",
                extra={"reservation_id": reservation.id, "reason": str(e)},
            )
