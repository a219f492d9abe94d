from __future__ import annotations

import tempfile

import pytest

from storefront.core.config import settings
from storefront.domain.entities.cart import CartItem
from storefront.infrastructure.store.json_store import JsonReservationRepository
from storefront.infrastructure.store.memory_store import MemoryReservationRepository
from storefront.wiring import dependencies


@pytest.fixture(autouse=True)
def fresh_container():
    dependencies.reset_container()
    yield
    dependencies.reset_container()


def test_memory_provider_is_seeded(monkeypatch):
    monkeypatch.setattr(settings, "STORE_PROVIDER", "memory")
    monkeypatch.setattr(settings, "SEED_DEMO_DATA", True)

    repository = dependencies.get_reservation_repository()

    assert isinstance(repository, MemoryReservationRepository)
    assert repository is dependencies.get_reservation_repository()
    assert "10:00 AM" not in dependencies.get_booking_use_case().get_available_slots("2024-01-15")


def test_json_provider_and_cart_store(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "STORE_PROVIDER", "json")
        monkeypatch.setattr(settings, "DATA_DIR", tmpdir)
        monkeypatch.setattr(settings, "SEED_DEMO_DATA", False)

        assert isinstance(dependencies.get_reservation_repository(), JsonReservationRepository)
        assert dependencies.get_booking_use_case().list_reservations().total == 0

        cart = dependencies.get_cart_store("shopper")
        cart.add_item(CartItem(product_id="p1", name="Serum", slug="serum", unit_price_cents=2499))

        assert dependencies.get_cart_store("shopper").get_total_cents() == 2499


def test_notifications_can_be_disabled(monkeypatch):
    monkeypatch.setattr(settings, "NOTIFICATIONS_ENABLED", False)

    assert dependencies.get_notifier() is None
