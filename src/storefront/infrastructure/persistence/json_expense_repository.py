"""JSON-file-backed implementation of ExpenseRepository."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from storefront.domain.model.expense import Expense
from storefront.domain.repository.expense_repository import ExpenseRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonExpenseRepository(ExpenseRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default=[])

    def list_all(self) -> list[Expense]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, expense: Expense) -> None:
        with self._file.locked():
            records = self._file.load()
            expense.id = max((r["id"] for r in records), default=0) + 1
            records.append(self._to_raw(expense))
            self._file.persist(records)

    @staticmethod
    def _to_raw(expense: Expense) -> dict:
        return {
            "id": expense.id,
            "category": expense.category,
            "amount": expense.amount,
            "description": expense.description,
            "payment_date": expense.payment_date.isoformat(),
            "created_at": expense.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Expense:
        return Expense(
            id=raw["id"],
            category=raw["category"],
            amount=raw["amount"],
            description=raw.get("description", ""),
            payment_date=date.fromisoformat(raw["payment_date"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
