"""Interfaces of the services the store relies on but does not own.

Uploads, SMS delivery, invoice rendering and account storage all sit
behind these abstractions; concrete adapters live in
``storefront.infrastructure.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from storefront.domain.model.order import Order
from storefront.domain.model.principal import Principal, Role


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""


class UploadService(ABC):

    @abstractmethod
    def upload(self, file: UploadedFile) -> str:
        """Store *file* and return a stable URL for it.

        Raises UploadFailed if the file could not be stored.
        """


class NotificationKind(Enum):
    ORDER_PLACED = "order_placed"
    PAYMENT_VERIFIED = "payment_verified"
    PAYMENT_REJECTED = "payment_rejected"
    ORDER_SHIPPED = "order_shipped"
    ORDER_CANCELLED = "order_cancelled"


class Notifier(ABC):

    @abstractmethod
    def notify(self, destination: str, message: str, kind: NotificationKind) -> None:
        """Send a best-effort SMS-style message.  May raise on failure."""


class InvoiceGenerator(ABC):

    @abstractmethod
    def generate_invoice(self, order: Order) -> str:
        """Render an invoice for *order* and return a reference to it."""


@dataclass(frozen=True)
class Credentials:
    phone: str
    password: str
    display_name: str = ""
    role: Role = Role.CUSTOMER


class IdentityProvider(ABC):

    @abstractmethod
    def register(self, credentials: Credentials) -> Principal:
        """Create an account.  Raises DuplicateAccount or ValidationError."""

    @abstractmethod
    def login(self, credentials: Credentials) -> Principal:
        """Authenticate.  Raises Unauthorized on bad credentials."""

    @abstractmethod
    def has_admin(self) -> bool:
        """True once at least one admin account exists."""
