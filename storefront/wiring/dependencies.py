import logging

from storefront.application.ports.notifier import NotificationPort
from storefront.application.ports.reservation_repository import ReservationRepositoryPort
from storefront.application.use_cases.booking import BookingUseCase
from storefront.application.use_cases.cart import CartStore
from storefront.core.config import settings
from storefront.infrastructure.notifications.mock_notifier import MockNotifier
from storefront.infrastructure.store.json_store import JsonCartStorage, JsonReservationRepository
from storefront.infrastructure.store.memory_store import MemoryCartStorage, MemoryReservationRepository
from storefront.infrastructure.store.seed import seed_demo_reservations

logger = logging.getLogger(__name__)

_reservation_repository: ReservationRepositoryPort | None = None
_notifier: NotificationPort | None = None


def get_reservation_repository() -> ReservationRepositoryPort:
    global _reservation_repository
    if _reservation_repository is None:
        if settings.STORE_PROVIDER.lower() == "json":
            _reservation_repository = JsonReservationRepository(data_dir=settings.DATA_DIR)
        else:
            _reservation_repository = MemoryReservationRepository()
        logger.info("Reservation store ready", extra={"provider": settings.STORE_PROVIDER})
        if settings.SEED_DEMO_DATA:
            added = seed_demo_reservations(_reservation_repository)
            logger.info("Demo bookings seeded", extra={"count": added})
    return _reservation_repository


def get_notifier() -> NotificationPort | None:
    global _notifier
    if not settings.NOTIFICATIONS_ENABLED:
        return None
    if _notifier is None:
        _notifier = MockNotifier()
    return _notifier


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        repository=get_reservation_repository(),
        notifier=get_notifier(),
        slot_catalog=settings.SLOT_CATALOG,
        enforce_transitions=settings.ENFORCE_STATUS_TRANSITIONS,
    )


def get_cart_store(storage_key: str | None = None) -> CartStore:
    """Cart container for a single client; file-backed when the JSON store is selected."""
    if settings.STORE_PROVIDER.lower() == "json":
        storage = JsonCartStorage(
            data_dir=settings.DATA_DIR,
            storage_key=storage_key or settings.CART_STORAGE_KEY,
        )
    else:
        storage = MemoryCartStorage()
    return CartStore(storage)


def reset_container() -> None:
    global _reservation_repository, _notifier
    _reservation_repository = None
    _notifier = None
