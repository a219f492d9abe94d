from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItem:
    """Product data handed to the cart by the storefront pages."""

    product_id: str
    name: str
    slug: str
    unit_price_cents: int
    image_url: str | None = None


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name: str
    slug: str
    unit_price_cents: int
    quantity: int = 1
    image_url: str | None = None

    @property
    def subtotal_cents(self) -> int:
        return self.unit_price_cents * self.quantity


@dataclass(frozen=True)
class CartState:
    items: tuple[CartLine, ...] = ()

    def find(self, product_id: str) -> CartLine | None:
        for line in self.items:
            if line.product_id == product_id:
                return line
        return None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)
