"""Application service: the store's payment instructions (UPI / bank)."""

from __future__ import annotations

import logging
from dataclasses import replace

from storefront.application.authorization import require_admin
from storefront.domain.model.payment_settings import PaymentSettings
from storefront.domain.model.principal import Principal
from storefront.domain.repository.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class UpdatePaymentSettingsHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(
        self,
        principal: Principal | None,
        upi_id: str | None = None,
        payee_name: str | None = None,
        bank_details: str | None = None,
    ) -> PaymentSettings:
        """Change only the fields that were given."""
        require_admin(principal)
        current = self._settings_repo.get_payment_settings()
        changes = {
            key: value.strip()
            for key, value in (
                ("upi_id", upi_id),
                ("payee_name", payee_name),
                ("bank_details", bank_details),
            )
            if value is not None
        }
        updated = replace(current, **changes)
        updated.validate()
        self._settings_repo.save_payment_settings(updated)
        logger.info("Payment settings updated: %s", ", ".join(sorted(changes)) or "nothing")
        return updated


class ShowPaymentSettingsHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(self) -> PaymentSettings:
        return self._settings_repo.get_payment_settings()
