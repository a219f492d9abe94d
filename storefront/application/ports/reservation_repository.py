from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.entities.reservation import Reservation


class ReservationRepositoryPort(ABC):
    @abstractmethod
    def find(self, reservation_id: str) -> Reservation | None:
        raise NotImplementedError

    @abstractmethod
    def insert(self, reservation: Reservation) -> Reservation:
        """
        Store a new reservation.
        The slot check and the insert are one atomic step: raises SlotConflictError
        if a live reservation already holds (date, time).
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, reservation_id: str, change: Callable[[Reservation], Reservation]) -> Reservation:
        """
        Read the current reservation, apply change to it and store the result, as one atomic step.
        change must not call back into the repository; errors it raises abort the update.
        Raises NotFoundError if absent, SlotConflictError if the new version is live
        and another live reservation holds its (date, time).
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, reservation_id: str) -> Reservation:
        """Remove and return the reservation. Raises NotFoundError if absent."""
        raise NotImplementedError

    @abstractmethod
    def query(self, predicate: Callable[[Reservation], bool] | None = None) -> list[Reservation]:
        """Return matching reservations in insertion order."""
        raise NotImplementedError
