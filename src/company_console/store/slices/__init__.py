"""Store slices, one per feature area."""

from company_console.store.slices.auth import auth_slice
from company_console.store.slices.companies import company_slice
from company_console.store.slices.finance import finance_slice
from company_console.store.slices.members import member_slice

ALL_SLICES = (auth_slice, company_slice, member_slice, finance_slice)

__all__ = [
    "ALL_SLICES",
    "auth_slice",
    "company_slice",
    "finance_slice",
    "member_slice",
]
