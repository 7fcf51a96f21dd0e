"""
Data models for the Company Console.

This package provides:
- Company models (Company, CompanyDraft, CompanyStatus)
- Membership models (Member, Invitation, InvitationReceipt)
- Ledger models (Account, Transaction, Expense, Income and request bodies)
- Session models (User, AuthGrant)

All models are dataclasses with from_dict/to_dict helpers translating the
API's camelCase payloads.
"""

from company_console.models.auth import AuthGrant, User
from company_console.models.company import Company, CompanyDraft, CompanyStatus
from company_console.models.finance import (
    Account,
    CreditRequest,
    DashboardSnapshot,
    Expense,
    ExpenseRequest,
    Income,
    IncomeFrequency,
    IncomeRequest,
    Transaction,
    TransactionType,
)
from company_console.models.member import (
    Invitation,
    InvitationReceipt,
    InvitationStatus,
    Member,
)

__all__ = [
    "Account",
    "AuthGrant",
    "Company",
    "CompanyDraft",
    "CompanyStatus",
    "CreditRequest",
    "DashboardSnapshot",
    "Expense",
    "ExpenseRequest",
    "Income",
    "IncomeFrequency",
    "IncomeRequest",
    "Invitation",
    "InvitationReceipt",
    "InvitationStatus",
    "Member",
    "Transaction",
    "TransactionType",
    "User",
]
