"""Where customers send money: the store's UPI id and bank details."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import CURRENCY, Money


@dataclass(frozen=True)
class PaymentSettings:

    upi_id: str = ""
    payee_name: str = ""
    bank_details: str = ""

    def validate(self) -> None:
        if self.upi_id and "@" not in self.upi_id:
            raise ValidationError(
                f"Invalid UPI id {self.upi_id!r} (expected name@bank)",
                fields=["upi_id"],
            )

    def upi_payment_uri(self, amount: Money) -> str | None:
        """Deep link that UPI apps (and QR codes) understand, or None if unset."""
        if not self.upi_id:
            return None
        query = urlencode(
            {
                "pa": self.upi_id,
                "pn": self.payee_name,
                "am": str(amount.amount),
                "cu": CURRENCY,
            }
        )
        return f"upi://pay?{query}"
