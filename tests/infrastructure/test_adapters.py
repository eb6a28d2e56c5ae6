"""Tests for the concrete upload, SMS, invoice and identity adapters."""

from dataclasses import replace

import pytest

from storefront.domain.collaborators import Credentials, NotificationKind, UploadedFile
from storefront.domain.exceptions import (
    DuplicateAccount,
    Unauthorized,
    UploadFailed,
    ValidationError,
)
from storefront.domain.model.principal import Role
from storefront.infrastructure.adapters.html_invoice import HtmlInvoiceGenerator, invoice_number
from storefront.infrastructure.adapters.json_identity_provider import JsonIdentityProvider
from storefront.infrastructure.adapters.local_upload import LocalUploadService
from storefront.infrastructure.adapters.sms_notifier import LoggingSmsNotifier
from tests.fakes import make_order


class TestLocalUploadService:

    def test_stores_file_and_returns_uri(self, tmp_path):
        ref = LocalUploadService(tmp_path / "receipts").upload(UploadedFile("Paid.PNG", b"png"))
        assert ref.startswith("file://")
        assert ref.endswith(".png")
        assert len(list((tmp_path / "receipts").iterdir())) == 1

    def test_rejects_unknown_extension(self, tmp_path):
        with pytest.raises(ValidationError, match="Receipt must be one of"):
            LocalUploadService(tmp_path).upload(UploadedFile("paid.exe", b"MZ"))

    def test_rejects_empty_file(self, tmp_path):
        with pytest.raises(ValidationError, match="empty"):
            LocalUploadService(tmp_path).upload(UploadedFile("paid.png", b""))

    def test_storage_error_is_upload_failed(self, tmp_path):
        blocker = tmp_path / "receipts"
        blocker.write_text("not a directory")
        with pytest.raises(UploadFailed, match="please retry"):
            LocalUploadService(blocker).upload(UploadedFile("paid.png", b"png"))


class TestLoggingSmsNotifier:

    def test_normalizes_number(self):
        notifier = LoggingSmsNotifier()
        notifier.notify("+91 98765 43210", "hello", NotificationKind.ORDER_PLACED)
        assert notifier.sent == [("9876543210", "hello", NotificationKind.ORDER_PLACED)]

    def test_invalid_number(self):
        with pytest.raises(ValueError, match="Invalid phone"):
            LoggingSmsNotifier().notify("12345", "hello", NotificationKind.ORDER_PLACED)


class TestHtmlInvoiceGenerator:

    def test_writes_escaped_invoice(self, tmp_path):
        order = make_order()
        order.id = 7
        order.shipping = replace(order.shipping, name="A & B")

        path = HtmlInvoiceGenerator(tmp_path, "Sikkolu Specials").generate_invoice(order)

        content = (tmp_path / "INV-00000007.html").read_text(encoding="utf-8")
        assert path.endswith("INV-00000007.html")
        assert invoice_number(order) == "#00000007"
        assert "A &amp; B" in content
        assert "₹250" in content


class TestJsonIdentityProvider:

    def test_register_then_login(self, tmp_path):
        provider = JsonIdentityProvider(tmp_path / "accounts.json")
        created = provider.register(Credentials("98765 43210", "secret1", "Lakshmi"))
        assert created.id == "customer-1"

        principal = provider.login(Credentials("+919876543210", "secret1"))
        assert principal == created
        assert "secret1" not in (tmp_path / "accounts.json").read_text(encoding="utf-8")

    def test_wrong_password(self, tmp_path):
        provider = JsonIdentityProvider(tmp_path / "accounts.json")
        provider.register(Credentials("9876543210", "secret1", "Lakshmi"))
        with pytest.raises(Unauthorized, match="Invalid phone or password"):
            provider.login(Credentials("9876543210", "wrong!!"))

    def test_duplicate_phone(self, tmp_path):
        provider = JsonIdentityProvider(tmp_path / "accounts.json")
        provider.register(Credentials("9876543210", "secret1", "Lakshmi"))
        with pytest.raises(DuplicateAccount):
            provider.register(Credentials("9876543210", "secret2", "Someone", Role.ADMIN))

    def test_invalid_registration_lists_fields(self, tmp_path):
        provider = JsonIdentityProvider(tmp_path / "accounts.json")
        with pytest.raises(ValidationError) as exc_info:
            provider.register(Credentials("123", "abc", ""))
        assert exc_info.value.fields == ["phone", "password", "display_name"]
