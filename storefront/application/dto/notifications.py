from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.entities.reservation import Reservation

BOOKING_CONFIRMATION = "booking_confirmation"


class BookingConfirmationDTO(BaseModel):
    """Template data for the booking confirmation email."""

    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(alias="customerName")
    customer_email: str = Field(alias="customerEmail")
    service_name: str = Field(alias="serviceName")
    date: str
    time: str
    price: str = ""
    deposit: str | None = None

    @classmethod
    def from_reservation(cls, reservation: Reservation, deposit: str | None = None) -> "BookingConfirmationDTO":
        return cls(
            customer_name=reservation.customer.name,
            customer_email=reservation.customer.email,
            service_name=reservation.service.name,
            date=reservation.date.isoformat(),
            time=reservation.time,
            price=reservation.service.price or "",
            deposit=deposit,
        )

    def to_payload(self) -> dict[str, str | None]:
        return self.model_dump(by_alias=True)
