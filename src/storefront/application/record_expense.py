"""Application service: Expense Ledger use cases.

Income is recorded as a negative expense so that it nets against
spending in the profit calculation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from storefront.application.authorization import require_admin
from storefront.domain.model.expense import Expense
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import format_amount
from storefront.domain.repository.expense_repository import ExpenseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpenseDTO:
    id: int
    category: str
    amount: int
    display_amount: str
    description: str
    payment_date: str
    kind: str  # "expense" or "income"


def _to_dto(expense: Expense) -> ExpenseDTO:
    return ExpenseDTO(
        id=expense.id,  # type: ignore[arg-type]
        category=expense.category,
        amount=expense.amount,
        display_amount=format_amount(expense.amount),
        description=expense.description,
        payment_date=expense.payment_date.isoformat(),
        kind="income" if expense.is_income else "expense",
    )


class RecordExpenseHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(
        self,
        principal: Principal | None,
        category: str,
        amount: int,
        description: str = "",
        payment_date: date | None = None,
    ) -> ExpenseDTO:
        """Record money spent.  ``amount`` is signed; pass a negative value for income."""
        require_admin(principal)
        expense = Expense.create(
            category=category,
            amount=amount,
            description=description,
            payment_date=payment_date or date.today(),
        )
        self._expense_repo.add(expense)
        logger.info("Ledger entry #%s: %s %s", expense.id, expense.category, expense.amount)
        return _to_dto(expense)

    def record_income(
        self,
        principal: Principal | None,
        category: str,
        amount: int,
        description: str = "",
        payment_date: date | None = None,
    ) -> ExpenseDTO:
        """Record income received outside of orders (stored negated)."""
        return self.handle(principal, category, -abs(amount), description, payment_date)


class ListExpensesHandler:

    def __init__(self, expense_repo: ExpenseRepository) -> None:
        self._expense_repo = expense_repo

    def handle(self, principal: Principal | None) -> list[ExpenseDTO]:
        require_admin(principal)
        expenses = sorted(
            self._expense_repo.list_all(),
            key=lambda e: (e.payment_date, e.created_at),
            reverse=True,
        )
        return [_to_dto(e) for e in expenses]
