"""
Reflex state management for the Company Console.

AuthState holds the session and the permission flags derived from the
active role. CompanyState, MemberState and FinanceState are substates
that mirror one store slice each: every event handler builds a Store
from the current var values, streams a thunk through it and copies the
resulting slice state back into the vars after each phase, so the page
renders the loading state before the request settles.
"""

import copy
from dataclasses import fields
from typing import Any, AsyncIterator

import reflex as rx

from company_console import bridge
from company_console.config import get_settings
from company_console.lib import logs
from company_console.models.auth import User
from company_console.models.company import Company, CompanyDraft, CompanyStatus
from company_console.models.finance import Account, Expense, Income, IncomeFrequency, Transaction
from company_console.models.member import Invitation, Member
from company_console.models.view_models import (
    CompanyRow,
    ExpenseRow,
    IncomeRow,
    InvitationRow,
    MemberRow,
    TransactionRow,
    company_row,
    expense_row,
    income_row,
    invitation_row,
    member_row,
    transaction_row,
)
from company_console.rbac import (
    Permission,
    Role,
    get_assignable_roles,
    get_permissions,
    get_role_info,
    has_permission,
)
from company_console.store import Action, AsyncThunk, Store, create_store
from company_console.store.slices import auth, finance
from company_console.store.slices import companies as company_ops
from company_console.store.slices import members as member_ops
from company_console.utils import filter_companies, format_currency, validate_company_draft

LOG = logs.logger(__file__)

RECENT_TRANSACTIONS = 10


def _notify(action: Action, success: str | None = None) -> Any:
    """Toast for a settled action; None for pending actions and silent successes."""
    if action.is_rejected:
        return rx.toast.error(action.error or "Request failed")
    if success and action.is_fulfilled:
        return rx.toast.success(success)
    return None


class AuthState(rx.State):
    """
    Session state shared by every page section.

    Credentials are injected by the host frame (see bridge) or entered in
    the sign-in form.
    """

    user: User | None = None
    access_token: str = ""
    active_company: Company | None = None
    role: str = get_settings().default_role
    grant_role: str | None = None
    is_authenticating: bool = False
    auth_error: str | None = None

    sign_in_company_id: str = ""
    sign_in_email: str = ""
    sign_in_password: str = ""

    @rx.var
    def is_authenticated(self) -> bool:
        return bool(self.user and self.access_token)

    @rx.var
    def user_label(self) -> str:
        if not self.user:
            return "Not signed in"
        return self.user.name or self.user.email or self.user.id

    @rx.var
    def active_company_id(self) -> str:
        return self.active_company.id if self.active_company else ""

    @rx.var
    def active_company_name(self) -> str:
        return self.active_company.name if self.active_company else "No company selected"

    @rx.var
    def role_name(self) -> str:
        return get_role_info(self.role).name

    @rx.var
    def role_color(self) -> str:
        return get_role_info(self.role).color

    @rx.var
    def role_description(self) -> str:
        return get_role_info(self.role).description

    @rx.var
    def permissions(self) -> list[str]:
        """Permission names granted to the active role, used by the guards."""
        return sorted(permission.value for permission in get_permissions(self.role))

    @rx.var
    def can_update_company(self) -> bool:
        return has_permission(self.role, Permission.COMPANY_UPDATE)

    @rx.var
    def can_delete_company(self) -> bool:
        return has_permission(self.role, Permission.COMPANY_DELETE)

    @rx.var
    def can_read_members(self) -> bool:
        return has_permission(self.role, Permission.MEMBER_READ)

    @rx.var
    def can_invite_members(self) -> bool:
        return has_permission(self.role, Permission.MEMBER_INVITE)

    @rx.var
    def can_transfer_ownership(self) -> bool:
        return has_permission(self.role, Permission.COMPANY_TRANSFER_OWNERSHIP)

    @rx.var
    def is_demo(self) -> bool:
        return get_settings().service_kind == "demo"

    def _slice_types(self) -> dict[str, type]:
        return {"auth": auth.AuthSliceState}

    def _store(self) -> Store:
        preloaded = {}
        for name, state_type in self._slice_types().items():
            values = {
                f.name: copy.deepcopy(getattr(self, f.name)) for f in fields(state_type)
            }
            preloaded[name] = state_type(**values)
        return create_store(state=preloaded)

    def _sync(self, store: Store) -> None:
        for name in self._slice_types():
            slice_state = store.select(name)
            for f in fields(slice_state):
                setattr(self, f.name, getattr(slice_state, f.name))

    async def _run(
        self, thunk: AsyncThunk, *args: Any, **kwargs: Any
    ) -> AsyncIterator[Action]:
        store = self._store()
        async for action in store.stream(thunk, *args, **kwargs):
            self._sync(store)
            yield action

    def _apply(self, action: Action) -> None:
        store = self._store()
        store.dispatch(action)
        self._sync(store)

    @rx.event
    def listen_for_host(self):
        """Arm the browser listener for host auth messages."""
        return rx.call_script(
            bridge.HOST_LISTENER_SCRIPT, callback=AuthState.receive_host_message
        )

    @rx.event
    def receive_host_message(self, message: dict):
        """
        Handle a message forwarded by the host listener.

        Args:
            message: {"origin": ..., "data": ...} as posted by the host.
        """
        grant = bridge.receive(message, get_settings().trusted_origins)
        events = [AuthState.listen_for_host]
        if grant is None:
            return events
        LOG.info("Received credentials for user %s", grant.user.id)
        self._apply(auth.set_auth(grant))
        events.append(CompanyState.load_companies)
        if grant.company is not None:
            events.append(MemberState.load_members)
        return events

    @rx.event
    def set_sign_in_company_id(self, value: str):
        self.sign_in_company_id = value

    @rx.event
    def set_sign_in_email(self, value: str):
        self.sign_in_email = value

    @rx.event
    def set_sign_in_password(self, value: str):
        self.sign_in_password = value

    @rx.event
    async def sign_in(self):
        """Authenticate against the selected company with email and password."""
        if not (self.sign_in_company_id and self.sign_in_email and self.sign_in_password):
            yield rx.toast.error("Please fill in all required fields")
            return
        async for action in self._run(
            auth.authenticate_company,
            self.sign_in_company_id,
            self.sign_in_email,
            self.sign_in_password,
        ):
            yield _notify(action, "Signed in")
        if self.user and self.access_token:
            self.sign_in_password = ""
            yield CompanyState.load_companies
            yield MemberState.load_members

    @rx.event
    def sign_out(self):
        self._apply(auth.clear_auth())
        return rx.toast.info("Signed out")

    @rx.event
    def switch_role(self, role: str):
        """Preview the console as another role (demo service only)."""
        if get_settings().service_kind != "demo":
            return
        self._apply(auth.set_role(role))


class CompanyState(AuthState):
    """Company list, search and the create/edit/delete dialogs."""

    companies: list[Company] = []
    selected_company: Company | None = None
    loading: bool = False
    error: str | None = None

    search_query: str = ""
    show_mine: bool = False

    form_open: bool = False
    form_name: str = ""
    form_address: str = ""
    form_phone: str = ""
    form_email: str = ""
    form_website: str = ""
    form_status: str = CompanyStatus.ACTIVE.value
    form_errors: dict[str, str] = {}

    delete_target_id: str = ""
    delete_target_name: str = ""

    @rx.var
    def company_rows(self) -> list[CompanyRow]:
        return [company_row(c) for c in filter_companies(self.companies, self.search_query)]

    @rx.var
    def result_summary(self) -> str:
        count = len(filter_companies(self.companies, self.search_query))
        noun = "company" if count == 1 else "companies"
        base = f"{count} {noun}"
        if self.search_query.strip():
            return f'{base} matching "{self.search_query.strip()}"'
        return base

    @rx.var
    def is_empty(self) -> bool:
        return not self.loading and not filter_companies(self.companies, self.search_query)

    @rx.var
    def is_editing(self) -> bool:
        return self.selected_company is not None

    @rx.var
    def form_title(self) -> str:
        return "Edit Company" if self.selected_company is not None else "Add Company"

    @rx.var
    def delete_dialog_open(self) -> bool:
        return bool(self.delete_target_id)

    def _slice_types(self) -> dict[str, type]:
        return {**super()._slice_types(), "company": company_ops.CompanySliceState}

    def _find(self, company_id: str) -> Company | None:
        for company in self.companies:
            if company.id == company_id:
                return copy.deepcopy(company)
        return None

    def _draft(self) -> CompanyDraft:
        return CompanyDraft(
            name=self.form_name.strip(),
            address=self.form_address.strip(),
            phone=self.form_phone.strip(),
            email=self.form_email.strip() or None,
            website=self.form_website.strip() or None,
            status=self.form_status,
        )

    def _fill_form(self, draft: CompanyDraft) -> None:
        self.form_name = draft.name
        self.form_address = draft.address
        self.form_phone = draft.phone
        self.form_email = draft.email or ""
        self.form_website = draft.website or ""
        self.form_status = draft.status
        self.form_errors = {}

    @rx.event
    async def load_companies(self):
        thunk = company_ops.fetch_companies
        if self.show_mine:
            thunk = company_ops.fetch_user_companies
        async for action in self._run(thunk):
            yield _notify(action)

    @rx.event
    def set_search_query(self, value: str):
        self.search_query = value

    @rx.event
    def toggle_show_mine(self, value: bool):
        self.show_mine = value
        return CompanyState.load_companies

    @rx.event
    def select_company(self, company_id: str):
        """Make a company the active one and load its members."""
        company = self._find(company_id)
        if company is None:
            return
        self._apply(auth.set_active_company(company))
        return MemberState.load_members

    @rx.event
    def open_create_form(self):
        self._apply(company_ops.set_selected_company(None))
        self._fill_form(CompanyDraft())
        self.form_open = True

    @rx.event
    def open_edit_form(self, company_id: str):
        company = self._find(company_id)
        if company is None:
            return
        self._apply(company_ops.set_selected_company(company))
        self._fill_form(company.to_draft())
        self.form_open = True

    @rx.event
    def set_form_open(self, value: bool):
        self.form_open = value
        if not value:
            self._apply(company_ops.set_selected_company(None))

    @rx.event
    def set_form_name(self, value: str):
        self.form_name = value

    @rx.event
    def set_form_address(self, value: str):
        self.form_address = value

    @rx.event
    def set_form_phone(self, value: str):
        self.form_phone = value

    @rx.event
    def set_form_email(self, value: str):
        self.form_email = value

    @rx.event
    def set_form_website(self, value: str):
        self.form_website = value

    @rx.event
    def set_form_status(self, value: str):
        self.form_status = value

    @rx.event
    async def save_company(self):
        """Validate the form and create or update the company."""
        draft = self._draft()
        self.form_errors = validate_company_draft(draft)
        if self.form_errors:
            return
        if self.selected_company is not None:
            company = copy.deepcopy(self.selected_company).updated(draft)
            thunk, arg = company_ops.update_company, company
            success = "Company updated successfully"
        else:
            thunk, arg = company_ops.create_company, draft
            success = "Company created successfully"
        async for action in self._run(thunk, arg):
            if action.is_fulfilled:
                self.form_open = False
                self._apply(company_ops.set_selected_company(None))
            yield _notify(action, success)

    @rx.event
    def request_delete(self, company_id: str):
        company = self._find(company_id)
        if company is None:
            return
        self.delete_target_id = company.id
        self.delete_target_name = company.name

    @rx.event
    def cancel_delete(self):
        self.delete_target_id = ""
        self.delete_target_name = ""

    @rx.event
    async def confirm_delete(self):
        company_id = self.delete_target_id
        if not company_id:
            return
        async for action in self._run(company_ops.delete_company, company_id):
            if action.is_fulfilled:
                self.delete_target_id = ""
                self.delete_target_name = ""
            yield _notify(action, "Company deleted successfully")


class MemberState(AuthState):
    """Members and invitations of the active company."""

    company_id: str | None = None
    members: list[Member] = []
    invitations: list[Invitation] = []
    loading: bool = False
    error: str | None = None

    invite_open: bool = False
    invite_email: str = ""
    invite_role: str = Role.MEMBER.value
    invite_message: str = ""

    transfer_open: bool = False
    transfer_target: str = ""

    remove_target_id: str = ""
    accept_token: str = ""

    @rx.var
    def member_rows(self) -> list[MemberRow]:
        user_id = self.user.id if self.user else None
        return [member_row(member, self.role, user_id) for member in self.members]

    @rx.var
    def invitation_rows(self) -> list[InvitationRow]:
        return [invitation_row(invitation) for invitation in self.invitations]

    @rx.var
    def pending_invitation_count(self) -> int:
        return sum(1 for invitation in self.invitations if invitation.is_pending)

    @rx.var
    def invite_roles(self) -> list[str]:
        return [role.value for role in get_assignable_roles(self.role)]

    @rx.var
    def transfer_candidates(self) -> list[str]:
        user_id = self.user.id if self.user else None
        return [member.user_id for member in self.members if member.user_id != user_id]

    @rx.var
    def remove_dialog_open(self) -> bool:
        return bool(self.remove_target_id)

    def _slice_types(self) -> dict[str, type]:
        return {**super()._slice_types(), "members": member_ops.MemberSliceState}

    @rx.event
    async def load_members(self):
        if not self.active_company:
            return
        company_id = self.active_company.id
        async for action in self._run(member_ops.fetch_members, company_id):
            yield _notify(action)
        if has_permission(self.role, Permission.MEMBER_INVITE):
            async for action in self._run(member_ops.fetch_invitations, company_id):
                yield _notify(action)

    @rx.event
    async def change_role(self, user_id: str, new_role: str):
        async for action in self._run(
            member_ops.update_member_role, self.active_company_id, user_id, new_role
        ):
            yield _notify(action, "Member role updated")

    @rx.event
    def request_remove(self, user_id: str):
        self.remove_target_id = user_id

    @rx.event
    def cancel_remove(self):
        self.remove_target_id = ""

    @rx.event
    async def confirm_remove(self):
        user_id = self.remove_target_id
        if not user_id:
            return
        self.remove_target_id = ""
        async for action in self._run(
            member_ops.remove_member, self.active_company_id, user_id
        ):
            yield _notify(action, "Member removed")

    @rx.event
    def set_invite_open(self, value: bool):
        self.invite_open = value
        if value:
            self.invite_email = ""
            self.invite_role = Role.MEMBER.value
            self.invite_message = ""

    @rx.event
    def set_invite_email(self, value: str):
        self.invite_email = value

    @rx.event
    def set_invite_role(self, value: str):
        self.invite_role = value

    @rx.event
    def set_invite_message(self, value: str):
        self.invite_message = value

    @rx.event
    async def send_invite(self):
        async for action in self._run(
            member_ops.invite_member,
            self.active_company_id,
            self.invite_email,
            self.invite_role,
            self.invite_message,
        ):
            if action.is_fulfilled:
                self.invite_open = False
            yield _notify(action, f"Invitation sent to {self.invite_email.strip()}")

    @rx.event
    async def resend_invitation(self, invitation_id: str):
        async for action in self._run(
            member_ops.resend_invitation, self.active_company_id, invitation_id
        ):
            yield _notify(action, "Invitation resent")

    @rx.event
    async def cancel_invitation(self, invitation_id: str):
        async for action in self._run(
            member_ops.cancel_invitation, self.active_company_id, invitation_id
        ):
            yield _notify(action, "Invitation cancelled")

    @rx.event
    def set_transfer_open(self, value: bool):
        self.transfer_open = value
        if value:
            self.transfer_target = ""

    @rx.event
    def set_transfer_target(self, value: str):
        self.transfer_target = value

    @rx.event
    async def confirm_transfer(self):
        async for action in self._run(
            member_ops.transfer_ownership, self.active_company_id, self.transfer_target
        ):
            if action.is_fulfilled:
                self.transfer_open = False
            yield _notify(action, "Ownership transferred")

    @rx.event
    def set_accept_token(self, value: str):
        self.accept_token = value

    @rx.event
    async def accept_invitation(self):
        async for action in self._run(member_ops.accept_invitation, self.accept_token):
            if action.is_fulfilled:
                self.accept_token = ""
            yield _notify(action, "Invitation accepted")
        yield CompanyState.load_companies


class FinanceState(AuthState):
    """Financial dashboard for the signed-in user."""

    account: Account | None = None
    transactions: list[Transaction] = []
    expenses: list[Expense] = []
    income: list[Income] = []
    loading: bool = False
    error: str | None = None

    show_balance: bool = True

    credit_open: bool = False
    credit_amount: str = ""
    credit_description: str = ""

    expense_open: bool = False
    expense_description: str = ""
    expense_amount: str = ""
    expense_category: str = ""
    expense_due_date: str = ""

    income_open: bool = False
    income_source: str = ""
    income_amount: str = ""
    income_frequency: str = IncomeFrequency.ONE_TIME.value
    income_recurring: bool = False

    @rx.var
    def currency(self) -> str:
        return self.account.currency if self.account else "USD"

    @rx.var
    def balance_label(self) -> str:
        if not self.show_balance:
            return "••••••"
        balance = self.account.balance if self.account else 0.0
        return format_currency(balance, self.account.currency if self.account else "USD")

    @rx.var
    def total_expenses_label(self) -> str:
        currency = self.account.currency if self.account else "USD"
        return format_currency(sum(expense.amount for expense in self.expenses), currency)

    @rx.var
    def total_income_label(self) -> str:
        currency = self.account.currency if self.account else "USD"
        return format_currency(sum(item.amount for item in self.income), currency)

    @rx.var
    def unpaid_count(self) -> int:
        return sum(1 for expense in self.expenses if not expense.is_paid)

    @rx.var
    def transaction_count(self) -> int:
        return len(self.transactions)

    @rx.var
    def transaction_rows(self) -> list[TransactionRow]:
        currency = self.account.currency if self.account else "USD"
        recent = self.transactions[:RECENT_TRANSACTIONS]
        return [transaction_row(transaction, currency) for transaction in recent]

    @rx.var
    def expense_rows(self) -> list[ExpenseRow]:
        currency = self.account.currency if self.account else "USD"
        return [expense_row(expense, currency) for expense in self.expenses]

    @rx.var
    def income_rows(self) -> list[IncomeRow]:
        currency = self.account.currency if self.account else "USD"
        return [income_row(item, currency) for item in self.income]

    def _slice_types(self) -> dict[str, type]:
        return {**super()._slice_types(), "finance": finance.FinanceSliceState}

    @rx.event
    async def load_dashboard(self):
        async for action in self._run(finance.fetch_dashboard):
            yield _notify(action)

    @rx.event
    def toggle_balance(self):
        self.show_balance = not self.show_balance

    @rx.event
    def set_credit_open(self, value: bool):
        self.credit_open = value
        if value:
            self.credit_amount = ""
            self.credit_description = ""

    @rx.event
    def set_credit_amount(self, value: str):
        self.credit_amount = value

    @rx.event
    def set_credit_description(self, value: str):
        self.credit_description = value

    @rx.event
    async def submit_credit(self):
        async for action in self._run(
            finance.credit_account, self.credit_amount, self.credit_description
        ):
            if action.is_fulfilled:
                self.credit_open = False
            yield _notify(action, "Funds added successfully")

    @rx.event
    def set_expense_open(self, value: bool):
        self.expense_open = value
        if value:
            self.expense_description = ""
            self.expense_amount = ""
            self.expense_category = ""
            self.expense_due_date = ""

    @rx.event
    def set_expense_description(self, value: str):
        self.expense_description = value

    @rx.event
    def set_expense_amount(self, value: str):
        self.expense_amount = value

    @rx.event
    def set_expense_category(self, value: str):
        self.expense_category = value

    @rx.event
    def set_expense_due_date(self, value: str):
        self.expense_due_date = value

    @rx.event
    async def submit_expense(self):
        async for action in self._run(
            finance.create_expense,
            self.expense_description,
            self.expense_amount,
            self.expense_category,
            self.expense_due_date or None,
        ):
            if action.is_fulfilled:
                self.expense_open = False
            yield _notify(action, "Expense created")

    @rx.event
    async def pay_expense(self, expense_id: str):
        async for action in self._run(finance.pay_expense, expense_id):
            yield _notify(action, "Expense paid")

    @rx.event
    def set_income_open(self, value: bool):
        self.income_open = value
        if value:
            self.income_source = ""
            self.income_amount = ""
            self.income_frequency = IncomeFrequency.ONE_TIME.value
            self.income_recurring = False

    @rx.event
    def set_income_source(self, value: str):
        self.income_source = value

    @rx.event
    def set_income_amount(self, value: str):
        self.income_amount = value

    @rx.event
    def set_income_frequency(self, value: str):
        self.income_frequency = value

    @rx.event
    def set_income_recurring(self, value: bool):
        self.income_recurring = value

    @rx.event
    async def submit_income(self):
        async for action in self._run(
            finance.create_income,
            self.income_source,
            self.income_amount,
            self.income_frequency,
            self.income_recurring,
        ):
            if action.is_fulfilled:
                self.income_open = False
            yield _notify(action, "Income recorded")

    @rx.event
    async def add_income_to_account(self, income_id: str):
        async for action in self._run(finance.add_income_to_account, income_id):
            yield _notify(action, "Income added to account")
