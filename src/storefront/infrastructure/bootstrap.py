"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.application.side_effects import (
    BackgroundSideEffects,
    InlineSideEffects,
    SideEffects,
)
from storefront.infrastructure.adapters.html_invoice import HtmlInvoiceGenerator
from storefront.infrastructure.adapters.json_identity_provider import JsonIdentityProvider
from storefront.infrastructure.adapters.local_upload import LocalUploadService
from storefront.infrastructure.adapters.sms_notifier import LoggingSmsNotifier
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.persistence.json_expense_repository import (
    JsonExpenseRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_review_repository import (
    JsonReviewRepository,
)
from storefront.infrastructure.persistence.json_settings_repository import (
    JsonSettingsRepository,
)
from storefront.infrastructure.session_store import SessionStore


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def expense_repository() -> JsonExpenseRepository:
    return JsonExpenseRepository(settings().data_dir / "expenses.json")


def review_repository() -> JsonReviewRepository:
    return JsonReviewRepository(settings().data_dir / "reviews.json")


def settings_repository() -> JsonSettingsRepository:
    return JsonSettingsRepository(settings().data_dir / "site_settings.json")


def identity_provider() -> JsonIdentityProvider:
    return JsonIdentityProvider(settings().data_dir / "accounts.json")


def session_store() -> SessionStore:
    return SessionStore(settings().data_dir / "session.json")


def upload_service() -> LocalUploadService:
    return LocalUploadService(settings().data_dir / "receipts")


def notifier() -> LoggingSmsNotifier:
    return LoggingSmsNotifier()


def invoice_generator() -> HtmlInvoiceGenerator:
    return HtmlInvoiceGenerator(settings().data_dir / "invoices", settings().store_name)


def side_effects() -> SideEffects:
    if settings().background_side_effects:
        return BackgroundSideEffects()
    return InlineSideEffects()
