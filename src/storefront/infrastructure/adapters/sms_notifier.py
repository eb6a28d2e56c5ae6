"""Notifier that writes outgoing SMS messages to the application log.

Stands in for the SMS gateway: numbers are normalised to the 10-digit
form the gateway expects, and anything else is refused.
"""

from __future__ import annotations

import logging

from storefront.domain.collaborators import NotificationKind, Notifier
from storefront.domain.model.order import normalize_phone

logger = logging.getLogger(__name__)


class LoggingSmsNotifier(Notifier):

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, NotificationKind]] = []

    def notify(self, destination: str, message: str, kind: NotificationKind) -> None:
        phone = normalize_phone(destination)
        if not (phone.isdigit() and len(phone) == 10):
            raise ValueError(f"Invalid phone number format: {destination!r}")
        self.sent.append((phone, message, kind))
        logger.info("SMS to %s (type: %s): %s", phone, kind.value, message)
