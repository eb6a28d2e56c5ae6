"""Role checks shared by the use-case handlers.

Authentication happens before a handler is called; here we only look at
the principal the caller hands us.
"""

from __future__ import annotations

from storefront.domain.exceptions import Unauthorized
from storefront.domain.model.order import Order
from storefront.domain.model.principal import Principal


def require_admin(principal: Principal | None) -> Principal:
    if principal is None or not principal.is_admin:
        raise Unauthorized("Admin login required")
    return principal


def require_owner_or_admin(principal: Principal | None, order: Order) -> Principal:
    if principal is None:
        raise Unauthorized("Login required")
    if principal.is_admin or order.belongs_to(principal.id):
        return principal
    raise Unauthorized(f"Order #{order.id} does not belong to you")
