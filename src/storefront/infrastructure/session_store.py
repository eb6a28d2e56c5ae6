"""Remembers who is logged in to the CLI between invocations."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.principal import Principal, Role
from storefront.infrastructure.persistence.json_file import JsonFile


class SessionStore:

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default={})

    def current_principal(self) -> Principal | None:
        raw = self._file.load().get("principal")
        if not raw:
            return None
        return Principal(id=raw["id"], display_name=raw["display_name"], role=Role(raw["role"]))

    def login(self, principal: Principal) -> None:
        self._file.persist(
            {
                "principal": {
                    "id": principal.id,
                    "display_name": principal.display_name,
                    "role": principal.role.value,
                }
            }
        )

    def logout(self) -> None:
        self._file.persist({})
