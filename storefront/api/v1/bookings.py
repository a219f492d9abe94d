from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.v1.schemas import (
    BookingCreateSchema,
    BookingDeletedSchema,
    BookingListSchema,
    BookingSchema,
    BookingUpdateSchema,
    CalendarEventSchema,
    DepositPaymentSchema,
    StatusUpdateSchema,
)
from storefront.application.dto.payments import PaymentConfirmation
from storefront.application.exceptions import (
    InvalidStatusError,
    NotFoundError,
    PaymentNotConfirmedError,
    SlotConflictError,
    StorefrontError,
    ValidationError,
)
from storefront.application.use_cases.booking import (
    BookingUseCase,
    ReservationChanges,
    ReservationFilters,
)
from storefront.wiring.dependencies import get_booking_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(e: StorefrontError) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, SlotConflictError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, (ValidationError, InvalidStatusError, PaymentNotConfirmedError)):
        return HTTPException(status_code=400, detail=str(e))
    logger.error("Unmapped booking error", extra={"reason": str(e)})
    return HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=BookingListSchema)
def list_bookings(
    status: str | None = Query(None),
    date: str | None = Query(None),
    search: str | None = Query(None),
    limit: int | None = Query(None, ge=0),
    offset: int = Query(0, ge=0),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        page = uc.list_reservations(
            ReservationFilters(status=status, date=date, search=search, offset=offset, limit=limit)
        )
    except StorefrontError as e:
        raise _http_error(e)
    return BookingListSchema(
        data=[BookingSchema.from_entity(r) for r in page.items],
        total=page.total,
        start=page.start,
        end=page.end,
    )


@router.get("/slots", response_model=list[str])
def available_slots(
    date: str | None = Query(None),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        return uc.get_available_slots(date)
    except StorefrontError as e:
        raise _http_error(e)


@router.get("/calendar", response_model=list[CalendarEventSchema])
def calendar(
    start: str | None = Query(None),
    end: str | None = Query(None),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    return [CalendarEventSchema.from_event(event) for event in uc.get_calendar(start, end)]


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(booking_id: str, uc: BookingUseCase = Depends(get_booking_use_case)):
    try:
        return BookingSchema.from_entity(uc.get_reservation(booking_id))
    except StorefrontError as e:
        raise _http_error(e)


@router.post("", response_model=BookingSchema, status_code=201)
def create_booking(req: BookingCreateSchema, uc: BookingUseCase = Depends(get_booking_use_case)):
    try:
        reservation = uc.create_reservation(
            service=req.service.to_entity() if req.service else None,
            day=req.date,
            time=req.time,
            customer=req.customer.to_entity() if req.customer else None,
        )
    except StorefrontError as e:
        raise _http_error(e)
    return BookingSchema.from_entity(reservation)


@router.patch("/{booking_id}", response_model=BookingSchema)
def update_booking(
    booking_id: str,
    req: BookingUpdateSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    changes = ReservationChanges(
        service=req.service.to_entity() if req.service else None,
        date=req.date,
        time=req.time,
        customer=req.customer.to_entity() if req.customer else None,
        status=req.status,
    )
    try:
        return BookingSchema.from_entity(uc.update_reservation(booking_id, changes))
    except StorefrontError as e:
        raise _http_error(e)


@router.patch("/{booking_id}/status", response_model=BookingSchema)
def update_booking_status(
    booking_id: str,
    req: StatusUpdateSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        return BookingSchema.from_entity(uc.update_status(booking_id, req.status))
    except StorefrontError as e:
        raise _http_error(e)


@router.post("/{booking_id}/deposit", response_model=BookingSchema)
def record_deposit(
    booking_id: str,
    req: DepositPaymentSchema,
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    confirmation = PaymentConfirmation(
        payment_intent_id=req.payment_intent_id,
        status=req.status,
        amount_cents=req.amount_cents,
    )
    try:
        return BookingSchema.from_entity(uc.record_deposit_payment(booking_id, confirmation))
    except StorefrontError as e:
        raise _http_error(e)


@router.delete("/{booking_id}", response_model=BookingDeletedSchema)
def delete_booking(booking_id: str, uc: BookingUseCase = Depends(get_booking_use_case)):
    try:
        deleted = uc.delete_reservation(booking_id)
    except StorefrontError as e:
        raise _http_error(e)
    return BookingDeletedSchema(message="Booking deleted successfully", booking=BookingSchema.from_entity(deleted))
