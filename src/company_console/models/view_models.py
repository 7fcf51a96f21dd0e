"""
Display rows for the Reflex views.

Rows are flat dataclasses of preformatted strings and flags so they can
be iterated with rx.foreach without further formatting in the browser.
Permission flags are computed here against the acting role, keeping
the components free of policy logic.
"""

from dataclasses import dataclass, field

from company_console.models.company import Company
from company_console.models.finance import Expense, Income, Transaction
from company_console.models.member import Invitation, Member
from company_console.rbac import (
    can_modify_user_role,
    can_remove_user,
    get_assignable_roles,
    get_role_info,
)
from company_console.utils import format_currency, format_date


@dataclass
class CompanyRow:
    id: str = ""
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    status: str = ""
    is_active: bool = True


@dataclass
class MemberRow:
    """A member with the acting user's allowed operations on them."""

    user_id: str = ""
    role: str = ""
    role_name: str = ""
    role_color: str = "gray"
    status: str = ""
    joined_at: str = ""
    is_current_user: bool = False
    can_modify: bool = False
    can_remove: bool = False
    assignable_roles: list[str] = field(default_factory=list)


@dataclass
class InvitationRow:
    id: str = ""
    email: str = ""
    role: str = ""
    role_color: str = "gray"
    status: str = ""
    status_color: str = "gray"
    invited_at: str = ""
    expires_at: str = ""
    is_pending: bool = False


@dataclass
class TransactionRow:
    id: str = ""
    description: str = ""
    type: str = ""
    amount: str = ""
    is_credit: bool = False
    created_at: str = ""


@dataclass
class ExpenseRow:
    id: str = ""
    description: str = ""
    category: str = ""
    amount: str = ""
    due_date: str = ""
    is_paid: bool = False


@dataclass
class IncomeRow:
    id: str = ""
    source: str = ""
    frequency: str = ""
    amount: str = ""
    received_at: str = ""
    is_recurring: bool = False


_INVITATION_STATUS_COLORS = {
    "PENDING": "amber",
    "ACCEPTED": "green",
    "DECLINED": "red",
    "EXPIRED": "gray",
}


def company_row(company: Company) -> CompanyRow:
    return CompanyRow(
        id=company.id,
        name=company.name,
        address=company.address,
        phone=company.phone,
        email=company.email or "",
        website=company.website or "",
        status=company.status,
        is_active=company.is_active,
    )


def member_row(member: Member, actor_role: str | None, current_user_id: str | None) -> MemberRow:
    """
    Build a member row for the acting user.

    Args:
        member: The member to display.
        actor_role: Role of the signed-in user.
        current_user_id: Id of the signed-in user; the user never gets
            role or removal controls on their own row.

    Returns:
        MemberRow with badge info and permission flags.
    """
    info = get_role_info(member.role)
    is_self = bool(current_user_id) and member.user_id == current_user_id
    can_modify = not is_self and can_modify_user_role(actor_role, member.role)
    return MemberRow(
        user_id=member.user_id,
        role=member.role,
        role_name=info.name,
        role_color=info.color,
        status=member.status,
        joined_at=format_date(member.joined_at),
        is_current_user=is_self,
        can_modify=can_modify,
        can_remove=not is_self and can_remove_user(actor_role, member.role),
        assignable_roles=[role.value for role in get_assignable_roles(actor_role)]
        if can_modify
        else [],
    )


def invitation_row(invitation: Invitation) -> InvitationRow:
    return InvitationRow(
        id=invitation.id,
        email=invitation.email,
        role=invitation.role,
        role_color=get_role_info(invitation.role).color,
        status=invitation.status,
        status_color=_INVITATION_STATUS_COLORS.get(invitation.status, "gray"),
        invited_at=format_date(invitation.invited_at),
        expires_at=format_date(invitation.expires_at),
        is_pending=invitation.is_pending,
    )


def transaction_row(transaction: Transaction, currency: str = "USD") -> TransactionRow:
    sign = "+" if transaction.is_credit else "-"
    return TransactionRow(
        id=transaction.id,
        description=transaction.description,
        type=transaction.type,
        amount=f"{sign}{format_currency(abs(transaction.amount), currency)}",
        is_credit=transaction.is_credit,
        created_at=format_date(transaction.created_at, with_time=True),
    )


def expense_row(expense: Expense, currency: str = "USD") -> ExpenseRow:
    return ExpenseRow(
        id=expense.id,
        description=expense.description,
        category=expense.category,
        amount=format_currency(expense.amount, currency),
        due_date=format_date(expense.due_date or expense.expense_date),
        is_paid=expense.is_paid,
    )


def income_row(income: Income, currency: str = "USD") -> IncomeRow:
    return IncomeRow(
        id=income.id,
        source=income.source,
        frequency=income.frequency,
        amount=format_currency(income.amount, currency),
        received_at=format_date(income.received_at),
        is_recurring=income.is_recurring,
    )
