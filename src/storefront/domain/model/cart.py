"""Cart — a client-local, observable collection of products to buy.

The cart is keyed by product id: adding a product that is already in the
cart bumps its quantity instead of creating a second line.  Prices in the
cart are the *currently known* catalog prices; the authoritative snapshot
is taken by the checkout workflow.

Observers registered through ``subscribe()`` are called synchronously
after every mutation that actually changes the cart.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, replace

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service import pricing

CartListener = Callable[["Cart"], None]


@dataclass(frozen=True)
class CartItem:
    product_id: str
    product_name: str
    unit_price: Money
    quantity: int

    @property
    def line_total(self) -> Money:
        return pricing.line_total(self.unit_price, self.quantity)


class Cart(Mapping[str, CartItem]):

    def __init__(self) -> None:
        self._lines: dict[str, CartItem] = {}
        self._listeners: list[CartListener] = []

    # --- Mapping interface ----------------------------------------------------

    def __getitem__(self, product_id: str) -> CartItem:
        return self._lines[product_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    # --- Observers ------------------------------------------------------------

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, qty: int = 1) -> None:
        """Add *qty* units of *product*, merging with an existing line."""
        if qty <= 0:
            return
        existing = self._lines.get(product.id)
        quantity = qty + (existing.quantity if existing else 0)
        self._lines[product.id] = CartItem(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=quantity,
        )
        self._notify()

    def set_quantity(self, product_id: str, qty: int) -> None:
        """Set an absolute quantity; zero or less removes the line."""
        existing = self._lines.get(product_id)
        if existing is None:
            return
        if qty <= 0:
            self.remove(product_id)
            return
        if existing.quantity == qty:
            return
        self._lines[product_id] = replace(existing, quantity=qty)
        self._notify()

    def remove(self, product_id: str) -> None:
        if self._lines.pop(product_id, None) is not None:
            self._notify()

    def clear(self) -> None:
        if self._lines:
            self._lines.clear()
            self._notify()

    def reprice(self, products: Mapping[str, Product]) -> None:
        """Refresh known names/prices from the catalog.

        Lines whose product no longer exists are dropped.
        """
        refreshed: dict[str, CartItem] = {}
        for product_id, line in self._lines.items():
            product = products.get(product_id)
            if product is None:
                continue
            refreshed[product_id] = replace(
                line, product_name=product.name, unit_price=product.price
            )
        if refreshed != self._lines:
            self._lines = refreshed
            self._notify()

    # --- Queries --------------------------------------------------------------

    def lines(self) -> list[CartItem]:
        return list(self._lines.values())

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def total_price(self) -> Money:
        return pricing.cart_total(
            (line.unit_price, line.quantity) for line in self._lines.values()
        )
