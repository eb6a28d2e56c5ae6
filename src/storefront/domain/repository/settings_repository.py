"""Abstract repository for the store's payment settings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.payment_settings import PaymentSettings


class SettingsRepository(ABC):

    @abstractmethod
    def get_payment_settings(self) -> PaymentSettings:
        """Return the current settings (empty defaults if never saved)."""

    @abstractmethod
    def save_payment_settings(self, settings: PaymentSettings) -> None:
        """Replace the stored settings."""
