"""JSON-file-backed implementation of SettingsRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.payment_settings import PaymentSettings
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonSettingsRepository(SettingsRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default={})

    def get_payment_settings(self) -> PaymentSettings:
        raw = self._file.load().get("payment", {})
        return PaymentSettings(
            upi_id=raw.get("upi_id", ""),
            payee_name=raw.get("payee_name", ""),
            bank_details=raw.get("bank_details", ""),
        )

    def save_payment_settings(self, settings: PaymentSettings) -> None:
        with self._file.locked():
            data = self._file.load()
            data["payment"] = {
                "upi_id": settings.upi_id,
                "payee_name": settings.payee_name,
                "bank_details": settings.bank_details,
            }
            self._file.persist(data)
