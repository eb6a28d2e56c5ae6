"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingDetails,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=[])

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._file.load())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()

            if order.id is None:
                order.id = self._next_id(orders)

            # Upsert: replace if exists, otherwise append
            index = self._index_of(orders, order.id)
            if index is None:
                orders.append(self._to_raw(order))
            else:
                orders[index] = self._to_raw(order)

            self._file.persist(orders)

    def save_if(self, order: Order, **expected: Enum | str | int | None) -> bool:
        with self._file.locked():
            orders = self._file.load()
            index = self._index_of(orders, order.id)
            if index is None:
                return False

            stored = orders[index]
            for name, value in expected.items():
                wanted = value.value if isinstance(value, Enum) else value
                if stored.get(name) != wanted:
                    return False

            orders[index] = self._to_raw(order)
            self._file.persist(orders)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        shipping = order.shipping
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "shipping": {
                "name": shipping.name,
                "phone": shipping.phone,
                "email": shipping.email,
                "address": shipping.address,
                "city": shipping.city,
                "state": shipping.state,
                "pincode": shipping.pincode,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": item.unit_price.amount,
                }
                for item in order.items
            ],
            "total_price": order.total_price.amount,
            "payment_method": order.payment_method.value,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_receipt_ref": order.payment_receipt_ref,
            "tracking_number": order.tracking_number,
            "notes": order.notes,
            "cancellation_reason": order.cancellation_reason,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat() if order.updated_at else None,
            "version": order.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(i["unit_price"]),
            )
            for i in raw["items"]
        ]
        updated_at = raw.get("updated_at")
        return Order(
            id=raw["id"],
            customer_id=raw.get("customer_id"),
            shipping=ShippingDetails(**raw["shipping"]),
            items=items,
            total_price=Money(raw["total_price"]),
            payment_method=PaymentMethod(raw.get("payment_method", "upi")),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            payment_receipt_ref=raw.get("payment_receipt_ref"),
            tracking_number=raw.get("tracking_number"),
            notes=raw.get("notes", ""),
            cancellation_reason=raw.get("cancellation_reason"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            version=raw.get("version", 0),
        )

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    @staticmethod
    def _index_of(orders: list[dict], order_id: int | None) -> int | None:
        for i, raw in enumerate(orders):
            if raw["id"] == order_id:
                return i
        return None
