from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from storefront.application.ports.cart_storage import CartStoragePort
from storefront.domain.entities.cart import CartItem, CartLine, CartState


def _normalize_quantity(value: Any) -> int:
    """Clamp to >= 0. Values that are not numbers count as 0."""
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, quantity)


def add_item(state: CartState, item: CartItem) -> CartState:
    """Merge by product id: an existing line gains one unit, its other fields are kept."""
    if state.find(item.product_id) is not None:
        return CartState(
            items=tuple(
                replace(line, quantity=line.quantity + 1) if line.product_id == item.product_id else line
                for line in state.items
            )
        )
    line = CartLine(
        product_id=item.product_id,
        name=item.name,
        slug=item.slug,
        unit_price_cents=item.unit_price_cents,
        quantity=1,
        image_url=item.image_url,
    )
    return CartState(items=state.items + (line,))


def remove_item(state: CartState, product_id: str) -> CartState:
    return CartState(items=tuple(line for line in state.items if line.product_id != product_id))


def update_quantity(state: CartState, product_id: str, quantity: Any) -> CartState:
    quantity = _normalize_quantity(quantity)
    lines = (
        replace(line, quantity=quantity) if line.product_id == product_id else line
        for line in state.items
    )
    return CartState(items=tuple(line for line in lines if line.quantity > 0))


def clear_cart(state: CartState) -> CartState:
    return CartState()


def total_cents(state: CartState) -> int:
    return sum(line.unit_price_cents * line.quantity for line in state.items)


class CartStore:
    """
    Client-held cart container.
    Loads from the storage adapter once and writes back after every mutation.
    """

    def __init__(self, storage: CartStoragePort) -> None:
        self._storage = storage
        self._logger = logging.getLogger(__name__)
        self._state = storage.load()

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> tuple[CartLine, ...]:
        return self._state.items

    def add_item(self, item: CartItem) -> CartState:
        return self._apply(add_item(self._state, item))

    def remove_item(self, product_id: str) -> CartState:
        return self._apply(remove_item(self._state, product_id))

    def update_quantity(self, product_id: str, quantity: Any) -> CartState:
        return self._apply(update_quantity(self._state, product_id, quantity))

    def clear_cart(self) -> CartState:
        return self._apply(clear_cart(self._state))

    def get_total_cents(self) -> int:
        return total_cents(self._state)

    def _apply(self, new_state: CartState) -> CartState:
        self._state = new_state
        try:
            self._storage.save(new_state)
        except OSError as e:
            # the in-memory cart stays authoritative for this session
            self._logger.warning("Cart not persisted", extra={"reason": str(e)})
        return new_state
