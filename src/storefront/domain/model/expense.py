"""Expense ledger entries.

Amounts are signed whole rupees: a positive amount is money spent, a
negative amount is manually recorded income.  Income therefore nets
against expenses, not against order revenue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from storefront.domain.exceptions import ValidationError


@dataclass
class Expense:

    id: int | None
    category: str
    amount: int
    description: str
    payment_date: date
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        category: str,
        amount: int,
        description: str,
        payment_date: date,
    ) -> Expense:
        if not category or not category.strip():
            raise ValidationError("Expense category is required", fields=["category"])
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError("Expense amount must be whole rupees", fields=["amount"])
        if amount == 0:
            raise ValidationError("Expense amount cannot be zero", fields=["amount"])
        return Expense(
            id=None,
            category=category.strip().lower(),
            amount=amount,
            description=description.strip(),
            payment_date=payment_date,
        )

    @property
    def is_income(self) -> bool:
        return self.amount < 0
