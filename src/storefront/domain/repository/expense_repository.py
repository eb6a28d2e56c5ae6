"""Abstract repository for expense ledger entries."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.expense import Expense


class ExpenseRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Expense]:
        """Return every ledger entry."""

    @abstractmethod
    def add(self, expense: Expense) -> None:
        """Append a new entry, assigning its ID."""
