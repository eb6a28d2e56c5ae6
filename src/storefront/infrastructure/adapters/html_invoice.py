"""Invoice generator that renders a simple HTML payment receipt to disk."""

from __future__ import annotations

import html
from pathlib import Path

from storefront.domain.collaborators import InvoiceGenerator
from storefront.domain.model.order import Order

_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Invoice {number}</title></head>
<body>
  <h1>{store}</h1>
  <h2>PAYMENT RECEIPT</h2>
  <p><b>Invoice No:</b> {number}</p>
  <p><b>Date:</b> {date}</p>
  <p><b>Customer:</b> {customer}<br>{phone}<br>{address}</p>
  <table border="1" cellpadding="6" cellspacing="0">
    <tr><th>Item</th><th>Qty</th><th>Price</th><th>Amount</th></tr>
{rows}
    <tr><td colspan="3"><b>Total</b></td><td><b>{total}</b></td></tr>
  </table>
  <p>Payment method: {method} (verified)</p>
  <p><small>This is a computer-generated invoice and does not require a signature.</small></p>
</body>
</html>
"""

_ROW = "    <tr><td>{name}</td><td>{qty}</td><td>{price}</td><td>{amount}</td></tr>"


def invoice_number(order: Order) -> str:
    return f"#{order.id:08d}"


class HtmlInvoiceGenerator(InvoiceGenerator):

    def __init__(self, directory: Path, store_name: str) -> None:
        self._directory = directory
        self._store_name = store_name

    def render(self, order: Order) -> str:
        shipping = order.shipping
        rows = "\n".join(
            _ROW.format(
                name=html.escape(item.product_name),
                qty=item.quantity.value,
                price=item.unit_price,
                amount=item.line_total,
            )
            for item in order.items
        )
        return _TEMPLATE.format(
            store=html.escape(self._store_name),
            number=invoice_number(order),
            date=order.created_at.strftime("%d %b %Y"),
            customer=html.escape(shipping.name),
            phone=html.escape(shipping.phone),
            address=html.escape(
                f"{shipping.address}, {shipping.city}, {shipping.state} - {shipping.pincode}"
            ),
            rows=rows,
            total=order.total_price,
            method=order.payment_method.value.upper(),
        )

    def generate_invoice(self, order: Order) -> str:
        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._directory / f"INV-{order.id:08d}.html"
        target.write_text(self.render(order), encoding="utf-8")
        return str(target)
