from __future__ import annotations

from storefront.application.exceptions import InvalidStatusError
from storefront.domain.entities.reservation import ReservationStatus

# cancelled and completed are terminal
ALLOWED_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.pending: frozenset(
        {ReservationStatus.confirmed, ReservationStatus.cancelled, ReservationStatus.completed}
    ),
    ReservationStatus.confirmed: frozenset(
        {ReservationStatus.pending, ReservationStatus.cancelled, ReservationStatus.completed}
    ),
    ReservationStatus.cancelled: frozenset(),
    ReservationStatus.completed: frozenset(),
}


def parse_status(value: ReservationStatus | str | None) -> ReservationStatus:
    if isinstance(value, ReservationStatus):
        return value
    try:
        return ReservationStatus(str(value).strip().lower())
    except ValueError:
        raise InvalidStatusError(f"Invalid status: {value!r}")


def can_transition(current: ReservationStatus, target: ReservationStatus) -> bool:
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS[current]
