"""Account store for customers and staff, kept in a JSON file.

Passwords are stored as salted PBKDF2-SHA256 digests, never in clear.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.collaborators import Credentials, IdentityProvider
from storefront.domain.exceptions import DuplicateAccount, Unauthorized, ValidationError
from storefront.domain.model.order import normalize_phone
from storefront.domain.model.principal import Principal, Role
from storefront.infrastructure.persistence.json_file import JsonFile

MIN_PASSWORD_LENGTH = 6
_ITERATIONS = 100_000


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), _ITERATIONS)
    return digest.hex()


class JsonIdentityProvider(IdentityProvider):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=[])

    def register(self, credentials: Credentials) -> Principal:
        phone = normalize_phone(credentials.phone)
        invalid: list[str] = []
        if not (phone.isdigit() and len(phone) == 10):
            invalid.append("phone")
        if len(credentials.password) < MIN_PASSWORD_LENGTH:
            invalid.append("password")
        if not credentials.display_name.strip():
            invalid.append("display_name")
        if invalid:
            raise ValidationError(f"Invalid registration details: {', '.join(invalid)}", fields=invalid)

        with self._file.locked():
            accounts = self._file.load()
            if any(a["phone"] == phone for a in accounts):
                raise DuplicateAccount("Phone number already registered")

            salt = secrets.token_hex(16)
            account = {
                "id": f"{credentials.role.value}-{len(accounts) + 1}",
                "phone": phone,
                "display_name": credentials.display_name.strip(),
                "role": credentials.role.value,
                "salt": salt,
                "password_hash": _hash_password(credentials.password, salt),
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
            accounts.append(account)
            self._file.persist(accounts)
        return self._to_principal(account)

    def login(self, credentials: Credentials) -> Principal:
        phone = normalize_phone(credentials.phone)
        for account in self._file.load():
            if account["phone"] != phone:
                continue
            expected = account["password_hash"]
            actual = _hash_password(credentials.password, account["salt"])
            if hmac.compare_digest(expected, actual):
                return self._to_principal(account)
            break
        raise Unauthorized("Invalid phone or password")

    def has_admin(self) -> bool:
        return any(a["role"] == Role.ADMIN.value for a in self._file.load())

    @staticmethod
    def _to_principal(account: dict) -> Principal:
        return Principal(
            id=account["id"],
            display_name=account["display_name"],
            role=Role(account["role"]),
        )
