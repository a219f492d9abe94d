from __future__ import annotations

import threading
from typing import Callable, Iterable

from storefront.application.exceptions import NotFoundError, SlotConflictError
from storefront.application.ports.cart_storage import CartStoragePort
from storefront.application.ports.reservation_repository import ReservationRepositoryPort
from storefront.domain.entities.cart import CartState
from storefront.domain.entities.reservation import Reservation


def ensure_slot_free(reservations: Iterable[Reservation], candidate: Reservation) -> None:
    """Raise SlotConflictError if another live reservation holds the candidate's slot."""
    if not candidate.is_live:
        return
    for existing in reservations:
        if existing.id != candidate.id and existing.occupies(candidate.date, candidate.time):
            raise SlotConflictError(candidate.date.isoformat(), candidate.time)


class MemoryReservationRepository(ReservationRepositoryPort):
    def __init__(self, reservations: Iterable[Reservation] | None = None) -> None:
        # dicts keep insertion order
        self._reservations: dict[str, Reservation] = {}
        self._lock = threading.Lock()
        for reservation in reservations or []:
            self.insert(reservation)

    def find(self, reservation_id: str) -> Reservation | None:
        with self._lock:
            return self._reservations.get(reservation_id)

    def insert(self, reservation: Reservation) -> Reservation:
        with self._lock:
            ensure_slot_free(self._reservations.values(), reservation)
            self._reservations[reservation.id] = reservation
            return reservation

    def update(self, reservation_id: str, change: Callable[[Reservation], Reservation]) -> Reservation:
        with self._lock:
            current = self._reservations.get(reservation_id)
            if current is None:
                raise NotFoundError("Booking not found")
            updated = change(current)
            ensure_slot_free(self._reservations.values(), updated)
            self._reservations[reservation_id] = updated
            return updated

    def delete(self, reservation_id: str) -> Reservation:
        with self._lock:
            if reservation_id not in self._reservations:
                raise NotFoundError("Booking not found")
            return self._reservations.pop(reservation_id)

    def query(self, predicate: Callable[[Reservation], bool] | None = None) -> list[Reservation]:
        with self._lock:
            snapshot = list(self._reservations.values())
        if predicate is None:
            return snapshot
        return [r for r in snapshot if predicate(r)]


class MemoryCartStorage(CartStoragePort):
    def __init__(self, state: CartState | None = None) -> None:
        self._state = state or CartState()

    def load(self) -> CartState:
        return self._state

    def save(self, state: CartState) -> None:
        self._state = state
