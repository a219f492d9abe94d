#!/usr/bin/env python3
"""
Interactive local cart harness (no HTTP).

Usage:
  python3 scripts/cart_local.py [--data-dir ./data] [--key storefront-cart]

Commands:
  add <id> <name> <price_cents>   add one unit (merges by id)
  qty <id> <quantity>             set quantity, 0 removes the line
  rm <id>                         remove the line
  clear                           empty the cart
  show                            print lines and total
  quit
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.application.use_cases.cart import CartStore  # noqa: E402
from storefront.domain.entities.cart import CartItem  # noqa: E402
from storefront.infrastructure.store.json_store import JsonCartStorage  # noqa: E402


def _format_cents(cents: int) -> str:
    return f"${cents / 100:.2f}"


def _print_cart(store: CartStore) -> None:
    if not store.items:
        print("(cart is empty)")
        return
    for line in store.items:
        print(f"  {line.product_id:<12} {line.name:<24} x{line.quantity:<3} {_format_cents(line.subtotal_cents)}")
    print(f"  total: {_format_cents(store.get_total_cents())}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Local cart harness")
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--key", default="storefront-cart")
    args = parser.parse_args()

    store = CartStore(JsonCartStorage(data_dir=args.data_dir, storage_key=args.key))
    print(__doc__)
    _print_cart(store)

    while True:
        try:
            raw = input("cart> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw:
            continue
        cmd, *rest = raw.split()

        if cmd in {"quit", "exit", "/quit"}:
            break
        if cmd == "add" and len(rest) >= 3:
            name = " ".join(rest[1:-1])
            try:
                price = int(rest[-1])
            except ValueError:
                print("price must be an integer number of cents")
                continue
            store.add_item(CartItem(product_id=rest[0], name=name, slug=name.lower().replace(" ", "-"), unit_price_cents=price))
        elif cmd == "qty" and len(rest) == 2:
            store.update_quantity(rest[0], rest[1])
        elif cmd == "rm" and len(rest) == 1:
            store.remove_item(rest[0])
        elif cmd == "clear":
            store.clear_cart()
        elif cmd != "show":
            print("unknown command; see usage above")
            continue
        _print_cart(store)


if __name__ == "__main__":
    main()
