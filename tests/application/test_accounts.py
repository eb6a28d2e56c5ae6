"""Integration tests for account registration and login."""

import pytest

from storefront.application.register_account import LoginHandler, RegisterAccountHandler
from storefront.domain.collaborators import Credentials
from storefront.domain.exceptions import Unauthorized
from storefront.domain.model.principal import Role
from tests.fakes import CUSTOMER, FakeIdentityProvider


def test_first_admin_bootstraps_the_store():
    identity = FakeIdentityProvider()
    admin = RegisterAccountHandler(identity).handle(
        None, Credentials("9000000001", "secret1", "Owner", Role.ADMIN)
    )
    assert admin.is_admin


def test_further_admins_need_an_admin():
    identity = FakeIdentityProvider()
    handler = RegisterAccountHandler(identity)
    owner = handler.handle(None, Credentials("9000000001", "secret1", "Owner", Role.ADMIN))

    with pytest.raises(Unauthorized):
        handler.handle(CUSTOMER, Credentials("9000000002", "secret2", "Helper", Role.ADMIN))

    helper = handler.handle(owner, Credentials("9000000002", "secret2", "Helper", Role.ADMIN))
    assert helper.is_admin


def test_customer_registration_and_login():
    identity = FakeIdentityProvider()
    created = RegisterAccountHandler(identity).handle(
        None, Credentials("9876543210", "secret1", "Lakshmi")
    )
    assert LoginHandler(identity).handle(Credentials("9876543210", "secret1")) == created
    with pytest.raises(Unauthorized):
        LoginHandler(identity).handle(Credentials("9876543210", "nope"))
