"""Application service: account registration and login."""

from __future__ import annotations

import logging

from storefront.application.authorization import require_admin
from storefront.domain.collaborators import Credentials, IdentityProvider
from storefront.domain.model.principal import Principal, Role

logger = logging.getLogger(__name__)


class RegisterAccountHandler:

    def __init__(self, identity: IdentityProvider) -> None:
        self._identity = identity

    def handle(self, principal: Principal | None, credentials: Credentials) -> Principal:
        """Create a customer account, or a staff account when *principal* is an admin.

        The first admin account may be created by anyone; after that only
        an admin can add staff.
        """
        if credentials.role == Role.ADMIN and self._identity.has_admin():
            require_admin(principal)
        created = self._identity.register(credentials)
        logger.info("Registered %s account %s", created.role.value, created.id)
        return created


class LoginHandler:

    def __init__(self, identity: IdentityProvider) -> None:
        self._identity = identity

    def handle(self, credentials: Credentials) -> Principal:
        principal = self._identity.login(credentials)
        logger.info("%s logged in", principal.id)
        return principal
