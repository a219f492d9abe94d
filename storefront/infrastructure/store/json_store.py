from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable

from storefront.application.exceptions import NotFoundError
from storefront.application.ports.cart_storage import CartStoragePort
from storefront.application.ports.reservation_repository import ReservationRepositoryPort
from storefront.domain.entities.cart import CartLine, CartState
from storefront.domain.entities.reservation import (
    Customer,
    Reservation,
    ReservationStatus,
    ServiceRef,
)
from storefront.infrastructure.store.memory_store import ensure_slot_free

STORE_VERSION = 1

logger = logging.getLogger(__name__)


def _write_json_atomic(file_path: Path, data: dict[str, Any]) -> None:
    """Write to a temp file next to the target, then rename over it."""
    temp_path = file_path.with_suffix(".json.tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        temp_path.replace(file_path)
    except Exception:
        if temp_path.exists():
            temp_path.unlink(missing_ok=True)
        raise


def _read_json(file_path: Path) -> dict[str, Any] | None:
    if not file_path.exists():
        return None
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning("Unreadable store file", extra={"path": str(file_path), "reason": str(e)})
        return None
    return data if isinstance(data, dict) else None


def _parse_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None


class JsonReservationRepository(ReservationRepositoryPort):
    """All reservations in one JSON document; every write replaces the file atomically."""

    def __init__(self, data_dir: str = "./data", file_name: str = "reservations.json") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / file_name
        self._lock = threading.Lock()

    def _load(self) -> tuple[list[Reservation], list[Any]]:
        """Return the readable reservations and the raw rows that could not be read."""
        data = _read_json(self._file_path) or {}
        rows = data.get("reservations")
        if not isinstance(rows, list):
            rows = []
        reservations: list[Reservation] = []
        unreadable: list[Any] = []
        for row in rows:
            try:
                reservations.append(self._deserialize(row))
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning(
                    "Unreadable reservation row",
                    extra={"path": str(self._file_path), "reason": repr(e)},
                )
                unreadable.append(row)
        return reservations, unreadable

    def _save(self, reservations: list[Reservation], unreadable: list[Any]) -> None:
        # unreadable rows are written back untouched so nothing is lost
        _write_json_atomic(
            self._file_path,
            {
                "reservations": [self._serialize(r) for r in reservations] + unreadable,
                "version": STORE_VERSION,
            },
        )

    def _serialize(self, reservation: Reservation) -> dict[str, Any]:
        return {
            "id": reservation.id,
            "service": {
                "id": reservation.service.id,
                "name": reservation.service.name,
                "duration": reservation.service.duration,
                "price": reservation.service.price,
            },
            "date": reservation.date.isoformat(),
            "time": reservation.time,
            "customer": {
                "name": reservation.customer.name,
                "email": reservation.customer.email,
                "phone": reservation.customer.phone,
                "notes": reservation.customer.notes,
            },
            "status": reservation.status.value,
            "deposit_paid": reservation.deposit_paid,
            "payment_reference": reservation.payment_reference,
            "created_at": reservation.created_at.isoformat() if reservation.created_at else None,
            "updated_at": reservation.updated_at.isoformat() if reservation.updated_at else None,
        }

    def _deserialize(self, data: dict[str, Any]) -> Reservation:
        service = data.get("service") or {}
        customer = data.get("customer") or {}
        return Reservation(
            id=str(data["id"]),
            service=ServiceRef(
                id=service.get("id", ""),
                name=service.get("name", ""),
                duration=service.get("duration"),
                price=service.get("price"),
            ),
            date=date.fromisoformat(data["date"]),
            time=data["time"],
            customer=Customer(
                name=customer.get("name", ""),
                email=customer.get("email", ""),
                phone=customer.get("phone"),
                notes=customer.get("notes"),
            ),
            status=ReservationStatus(data.get("status", ReservationStatus.pending.value)),
            deposit_paid=bool(data.get("deposit_paid", False)),
            payment_reference=data.get("payment_reference"),
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
        )

    def find(self, reservation_id: str) -> Reservation | None:
        with self._lock:
            reservations, _ = self._load()
        for reservation in reservations:
            if reservation.id == reservation_id:
                return reservation
        return None

    def insert(self, reservation: Reservation) -> Reservation:
        with self._lock:
            reservations, unreadable = self._load()
            ensure_slot_free(reservations, reservation)
            reservations.append(reservation)
            self._save(reservations, unreadable)
        return reservation

    def update(self, reservation_id: str, change: Callable[[Reservation], Reservation]) -> Reservation:
        with self._lock:
            reservations, unreadable = self._load()
            index = next((i for i, r in enumerate(reservations) if r.id == reservation_id), None)
            if index is None:
                raise NotFoundError("Booking not found")
            updated = change(reservations[index])
            ensure_slot_free(reservations, updated)
            reservations[index] = updated
            self._save(reservations, unreadable)
        return updated

    def delete(self, reservation_id: str) -> Reservation:
        with self._lock:
            reservations, unreadable = self._load()
            index = next((i for i, r in enumerate(reservations) if r.id == reservation_id), None)
            if index is None:
                raise NotFoundError("Booking not found")
            deleted = reservations.pop(index)
            self._save(reservations, unreadable)
        return deleted

    def query(self, predicate: Callable[[Reservation], bool] | None = None) -> list[Reservation]:
        with self._lock:
            reservations, _ = self._load()
        if predicate is None:
            return reservations
        return [r for r in reservations if predicate(r)]


class JsonCartStorage(CartStoragePort):
    """One document per storage key: {"state": {"items": [...]}, "version": 1}."""

    def __init__(self, data_dir: str = "./data", storage_key: str = "storefront-cart") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / f"{storage_key}.json"

    def load(self) -> CartState:
        data = _read_json(self._file_path)
        if data is None:
            return CartState()
        state = data.get("state")
        items = state.get("items") if isinstance(state, dict) else None
        if not isinstance(items, list):
            return CartState()

        lines: list[CartLine] = []
        seen: set[str] = set()
        for item in items:
            line = self._deserialize_line(item)
            # drop unusable, zero-quantity and duplicate rows
            if line is None or line.quantity < 1 or line.product_id in seen:
                continue
            seen.add(line.product_id)
            lines.append(line)
        return CartState(items=tuple(lines))

    def save(self, state: CartState) -> None:
        _write_json_atomic(
            self._file_path,
            {
                "state": {"items": [self._serialize_line(line) for line in state.items]},
                "version": STORE_VERSION,
            },
        )

    def _serialize_line(self, line: CartLine) -> dict[str, Any]:
        return {
            "id": line.product_id,
            "name": line.name,
            "slug": line.slug,
            "priceCents": line.unit_price_cents,
            "quantity": line.quantity,
            "imageUrl": line.image_url,
        }

    def _deserialize_line(self, data: Any) -> CartLine | None:
        if not isinstance(data, dict) or not data.get("id"):
            return None
        try:
            return CartLine(
                product_id=str(data["id"]),
                name=str(data.get("name", "")),
                slug=str(data.get("slug", "")),
                unit_price_cents=int(data.get("priceCents", 0)),
                quantity=int(data.get("quantity", 0)),
                image_url=data.get("imageUrl"),
            )
        except (TypeError, ValueError):
            return None
