"""
Financial ledger models for the per-user payments API.

The hierarchy is flat:

    Account       single balance record per user
    Transaction   ledger entry (credit, debit, payment, ...)
    Expense       bill to be paid from the account
    Income        money received, optionally recurring

Request dataclasses describe the bodies sent to the create/credit
endpoints. Amounts are floats, matching what the API returns.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from company_console.lib.objects import from_payload, to_payload


class TransactionType(str, Enum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    PAYMENT = "PAYMENT"
    ACCOUNT_CREDIT = "ACCOUNT_CREDIT"
    ACCOUNT_DEBIT = "ACCOUNT_DEBIT"


class IncomeFrequency(str, Enum):
    ONE_TIME = "one-time"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass
class Account:
    """Account balance; refetched after every mutation, never edited locally."""

    user_id: str = ""
    balance: float = 0.0
    currency: str = "USD"
    last_updated: str = ""
    version: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Account":
        values = from_payload(data)
        return cls(
            user_id=str(values.get("user_id", "")),
            balance=float(values.get("balance") or 0),
            currency=values.get("currency") or "USD",
            last_updated=values.get("last_updated") or "",
            version=int(values.get("version") or 0),
        )


@dataclass
class Transaction:
    id: str = ""
    user_id: str = ""
    type: str = TransactionType.PAYMENT.value
    amount: float = 0.0
    description: str = ""
    category: str | None = None
    created_at: str = ""
    related_id: str | None = None

    @property
    def is_credit(self) -> bool:
        """True for entries that increase the balance."""
        return self.type in (TransactionType.INCOME, TransactionType.ACCOUNT_CREDIT)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Transaction":
        values = from_payload(data)
        return cls(
            id=str(values.get("id", "")),
            user_id=str(values.get("user_id", "")),
            type=values.get("type") or TransactionType.PAYMENT.value,
            amount=float(values.get("amount") or 0),
            description=values.get("description") or "",
            category=values.get("category"),
            created_at=values.get("created_at") or "",
            related_id=values.get("related_id"),
        )


@dataclass
class Expense:
    id: str = ""
    user_id: str = ""
    description: str = ""
    amount: float = 0.0
    category: str = ""
    expense_date: str = ""
    is_paid: bool = False
    related_bill_id: str | None = None
    due_date: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Expense":
        values = from_payload(data)
        return cls(
            id=str(values.get("id", "")),
            user_id=str(values.get("user_id", "")),
            description=values.get("description") or "",
            amount=float(values.get("amount") or 0),
            category=values.get("category") or "",
            expense_date=values.get("expense_date") or "",
            is_paid=bool(values.get("is_paid", False)),
            related_bill_id=values.get("related_bill_id"),
            due_date=values.get("due_date"),
        )


@dataclass
class Income:
    id: str = ""
    user_id: str = ""
    source: str = ""
    amount: float = 0.0
    frequency: str = IncomeFrequency.ONE_TIME.value
    received_at: str = ""
    category: str | None = None
    is_recurring: bool = False
    next_due_date: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Income":
        values = from_payload(data)
        return cls(
            id=str(values.get("id", "")),
            user_id=str(values.get("user_id", "")),
            source=values.get("source") or "",
            amount=float(values.get("amount") or 0),
            frequency=values.get("frequency") or IncomeFrequency.ONE_TIME.value,
            received_at=values.get("received_at") or "",
            category=values.get("category"),
            is_recurring=bool(values.get("is_recurring", False)),
            next_due_date=values.get("next_due_date"),
        )


@dataclass
class ExpenseRequest:
    """Body of POST /payments/expenses."""

    description: str
    amount: float
    category: str
    expense_date: str | None = None
    due_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return to_payload(self)


@dataclass
class IncomeRequest:
    """Body of POST /payments/income."""

    source: str
    amount: float
    frequency: str = IncomeFrequency.ONE_TIME.value
    is_recurring: bool = False
    received_at: str | None = None
    category: str | None = None
    next_due_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return to_payload(self)


@dataclass
class CreditRequest:
    """Body of POST /payments/account/credit."""

    amount: float
    description: str = "Account credit"

    def to_dict(self) -> dict[str, Any]:
        return to_payload(self)


@dataclass
class DashboardSnapshot:
    """Everything the financial dashboard shows, fetched together."""

    account: Account | None = None
    transactions: list[Transaction] | None = None
    expenses: list[Expense] | None = None
    income: list[Income] | None = None
