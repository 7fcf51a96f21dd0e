"""
Abstract base class defining the payments data access contract.

The payments API keeps one account per user plus that user's ledger of
transactions, expenses and income. Mutating calls return nothing useful
for the lists; callers refetch whatever the mutation invalidated.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from company_console.models.finance import (
    Account,
    CreditRequest,
    Expense,
    ExpenseRequest,
    Income,
    IncomeRequest,
    Transaction,
)


class PaymentService(ABC):
    """Abstract base class for account, expense and income access."""

    @abstractmethod
    async def get_account_balance(self, token: str | None = None) -> Account:
        """Return the caller's account."""

    @abstractmethod
    async def list_transactions(
        self, token: str | None = None, page: int = 1, limit: int = 20
    ) -> list[Transaction]:
        """Return one page of account transactions."""

    @abstractmethod
    async def credit_account(
        self, request: CreditRequest, token: str | None = None
    ) -> Account | None:
        """Add funds to the account."""

    @abstractmethod
    async def list_expenses(self, token: str | None = None) -> list[Expense]:
        """Return the caller's expenses."""

    @abstractmethod
    async def create_expense(
        self, request: ExpenseRequest, token: str | None = None
    ) -> Expense:
        """Record a new expense."""

    @abstractmethod
    async def update_expense(
        self, expense_id: str, changes: Mapping[str, Any], token: str | None = None
    ) -> Expense | None:
        """Apply a partial update to an expense."""

    @abstractmethod
    async def pay_expense(self, expense_id: str, token: str | None = None) -> None:
        """Pay an expense from the account balance."""

    @abstractmethod
    async def list_income(self, token: str | None = None) -> list[Income]:
        """Return the caller's income records."""

    @abstractmethod
    async def create_income(
        self, request: IncomeRequest, token: str | None = None
    ) -> Income:
        """Record new income."""

    @abstractmethod
    async def update_income(
        self, income_id: str, changes: Mapping[str, Any], token: str | None = None
    ) -> Income | None:
        """Apply a partial update to an income record."""

    @abstractmethod
    async def add_income_to_account(
        self, income_id: str, token: str | None = None
    ) -> None:
        """Credit an income record's amount to the account."""
