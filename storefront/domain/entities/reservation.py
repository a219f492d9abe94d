from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ReservationStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


@dataclass(frozen=True)
class ServiceRef:
    id: str
    name: str
    duration: str | None = None  # display string, e.g. "4 hours"
    price: str | None = None  # display string, e.g. "$249.99"


@dataclass(frozen=True)
class Customer:
    name: str
    email: str
    phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class Reservation:
    id: str
    service: ServiceRef
    date: date
    time: str  # slot label, e.g. "10:00 AM"
    customer: Customer
    status: ReservationStatus = ReservationStatus.pending
    deposit_paid: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    payment_reference: str | None = None

    @property
    def is_live(self) -> bool:
        """A live reservation occupies its slot."""
        return self.status != ReservationStatus.cancelled

    def occupies(self, day: date, time: str) -> bool:
        return self.is_live and self.date == day and self.time == time
