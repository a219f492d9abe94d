from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from storefront.application.use_cases.booking import CalendarEvent
from storefront.domain.entities.reservation import Customer, Reservation, ServiceRef


class ServiceSchema(BaseModel):
    id: str = ""
    name: str = ""
    duration: str | None = None
    price: str | None = None

    def to_entity(self) -> ServiceRef:
        return ServiceRef(id=self.id, name=self.name, duration=self.duration, price=self.price)


class CustomerSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str | None = None
    notes: str | None = None

    def to_entity(self) -> Customer:
        return Customer(name=self.name, email=self.email, phone=self.phone, notes=self.notes)


class BookingCreateSchema(BaseModel):
    # required fields are checked by the booking use case so failures map to 400
    service: ServiceSchema | None = None
    date: str | None = None
    time: str | None = None
    customer: CustomerSchema | None = None


class BookingUpdateSchema(BaseModel):
    service: ServiceSchema | None = None
    date: str | None = None
    time: str | None = None
    customer: CustomerSchema | None = None
    status: str | None = None


class StatusUpdateSchema(BaseModel):
    status: str | None = None


class DepositPaymentSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_intent_id: str = Field(alias="paymentIntentId")
    status: str
    amount_cents: int | None = Field(default=None, alias="amountCents")


class BookingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    service: ServiceSchema
    date: str
    time: str
    customer: CustomerSchema
    status: str
    deposit_paid: bool = Field(alias="depositPaid")
    payment_reference: str | None = Field(default=None, alias="paymentReference")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_entity(cls, reservation: Reservation) -> "BookingSchema":
        return cls(
            id=reservation.id,
            service=ServiceSchema(
                id=reservation.service.id,
                name=reservation.service.name,
                duration=reservation.service.duration,
                price=reservation.service.price,
            ),
            date=reservation.date.isoformat(),
            time=reservation.time,
            customer=CustomerSchema(
                name=reservation.customer.name,
                email=reservation.customer.email,
                phone=reservation.customer.phone,
                notes=reservation.customer.notes,
            ),
            status=reservation.status.value,
            deposit_paid=reservation.deposit_paid,
            payment_reference=reservation.payment_reference,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class BookingListSchema(BaseModel):
    data: list[BookingSchema]
    total: int
    start: int
    end: int


class BookingDeletedSchema(BaseModel):
    message: str
    booking: BookingSchema


class CalendarEventSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start: str
    background_color: str = Field(alias="backgroundColor")
    extended_props: dict[str, Any] = Field(default_factory=dict, alias="extendedProps")

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "CalendarEventSchema":
        booking = BookingSchema.from_entity(event.reservation)
        return cls(
            id=event.id,
            title=event.title,
            start=event.start,
            background_color=event.background_color,
            extended_props={"booking": booking.model_dump(mode="json", by_alias=True)},
        )
