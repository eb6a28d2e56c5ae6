"""Abstract repository for Order aggregate.

Transitions on an existing order must be written with ``save_if`` so that
the order a transition was checked against and the write that follows
cannot be separated by another writer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, in creation order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new order (assigning its ID) or overwrite an existing one."""

    @abstractmethod
    def save_if(self, order: Order, **expected: Enum | str | int | None) -> bool:
        """Atomically overwrite *order* if the stored copy still matches.

        Each keyword names an Order attribute and the value it must still
        hold in the store, e.g. ``save_if(order, version=loaded_version)``.
        Returns False, writing nothing, when the order is missing or any
        expectation no longer holds.
        """
