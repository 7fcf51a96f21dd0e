import httpx
import pytest

from company_console.data.demo_companies import DEMO_COMPANIES
from company_console.models.member import Member
from company_console.services import Services
from company_console.services.company_service_demo import DEMO_USER_ID, DemoCompanyService
from company_console.services.company_service_impl import CompanyServiceImpl
from company_console.services.payment_service_impl import PaymentServiceImpl
from company_console.store import create_store
from company_console.store.slices import finance, members
from company_console.store.slices.companies import fetch_companies, fetch_user_companies
from company_console.store.slices.members import LAST_OWNER_ERROR, MemberSliceState

PAYMENTS_URL = "http://payments.test/api/payment/v1"


def unreachable_service() -> CompanyServiceImpl:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return CompanyServiceImpl("http://api.test/api", transport=httpx.MockTransport(handler))


# Company list fallback


@pytest.mark.parametrize("thunk", [fetch_companies, fetch_user_companies])
async def test_unreachable_api_falls_back_to_demo_companies(services, thunk):
    store = create_store(
        Services(unreachable_service(), services.payments, fallback=DemoCompanyService())
    )

    action = await store.run(thunk)

    assert action.is_fulfilled
    assert [company.id for company in store.select("company").companies] == [
        company.id for company in DEMO_COMPANIES
    ]


async def test_no_fallback_when_disabled(services):
    store = create_store(Services(unreachable_service(), services.payments))

    action = await store.run(fetch_companies)

    assert action.is_rejected
    assert action.error.startswith("Failed to fetch companies")
    assert store.select("company").companies == []


async def test_api_errors_do_not_fall_back(services):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "Database down"})

    broken = CompanyServiceImpl("http://api.test/api", transport=httpx.MockTransport(handler))
    store = create_store(Services(broken, services.payments, fallback=DemoCompanyService()))

    action = await store.run(fetch_companies)

    assert action.error == "Database down"


# Members


async def test_fetch_members_resolves_role_from_membership(store, login):
    login(role="MEMBER")

    await store.run(members.fetch_members, "1")

    assert store.select("members").company_id == "1"
    assert store.select("members").members[0].user_id == DEMO_USER_ID
    assert store.select("auth").role == "OWNER"


async def test_role_resets_when_user_is_not_a_member(store, services, login):
    login(role=None)
    await store.run(members.fetch_members, "1")
    assert store.select("auth").role == "OWNER"

    await services.companies.manage_member("2", "u2", "ADD", "MEMBER")
    await services.companies.manage_member("2", DEMO_USER_ID, "REMOVE")
    await store.run(members.fetch_members, "2")

    assert store.select("auth").role == "MEMBER"
    denied = await store.run(members.remove_member, "2", "u2")
    assert denied.error == "Cannot remove this user"
    assert [member.user_id for member in store.select("members").members] == ["u2"]


async def test_role_falls_back_to_grant_role(store, services, login):
    login(role="ADMIN")
    await store.run(members.fetch_members, "1")
    assert store.select("auth").role == "OWNER"

    await services.companies.manage_member("2", DEMO_USER_ID, "REMOVE")
    await store.run(members.fetch_members, "2")

    assert store.select("auth").role == "ADMIN"


async def test_invite_refetches_invitations(store, login):
    login()
    await store.run(members.fetch_members, "1")

    action = await store.run(members.invite_member, "1", "new@acme.io", "ADMIN", "Hi")

    assert action.is_fulfilled
    invitations = store.select("members").invitations
    assert [invitation.email for invitation in invitations] == ["new@acme.io"]
    assert invitations[0].role == "ADMIN"


async def test_member_cannot_invite(store, login):
    login(role="MEMBER", user_id="someone-else")

    action = await store.run(members.invite_member, "1", "new@acme.io", "MEMBER")

    assert action.error == "Insufficient permissions to invite members"
    assert store.select("members").invitations == []


async def test_update_role_refetches_members(store, services, login):
    login()
    await services.companies.manage_member("1", "u2", "ADD", "MEMBER")
    await store.run(members.fetch_members, "1")

    action = await store.run(members.update_member_role, "1", "u2", "ADMIN")

    assert action.is_fulfilled
    roles = {member.user_id: member.role for member in store.select("members").members}
    assert roles["u2"] == "ADMIN"


async def test_admin_cannot_demote_owner(store, login):
    login(role="ADMIN", user_id="admin-user")
    store.dispatch(members.fetch_members.fulfilled(("1", [Member(DEMO_USER_ID, "OWNER")])))

    action = await store.run(members.update_member_role, "1", DEMO_USER_ID, "MEMBER")

    assert action.error == "Cannot modify this user's role"


async def test_last_owner_cannot_remove_themselves(store, login):
    login()
    await store.run(members.fetch_members, "1")

    action = await store.run(members.remove_member, "1", DEMO_USER_ID)

    assert action.error == LAST_OWNER_ERROR
    assert len(store.select("members").members) == 1


async def test_remove_member_refetches(store, services, login):
    login()
    await services.companies.manage_member("1", "u2", "ADD", "MEMBER")
    await store.run(members.fetch_members, "1")

    action = await store.run(members.remove_member, "1", "u2")

    assert action.is_fulfilled
    assert [member.user_id for member in store.select("members").members] == [DEMO_USER_ID]


async def test_transfer_ownership_requires_permission_and_target(store, services, login):
    login(role="ADMIN", user_id="admin-user")
    denied = await store.run(members.transfer_ownership, "1", "u2")
    assert denied.error == "Insufficient permissions to transfer ownership"

    login()
    missing = await store.run(members.transfer_ownership, "1", "")
    assert missing.error == "Please select a member"


async def test_transfer_ownership_refetches(store, services, login):
    login()
    await services.companies.manage_member("1", "u2", "ADD", "MEMBER")

    action = await store.run(members.transfer_ownership, "1", "u2")

    assert action.is_fulfilled
    roles = {member.user_id: member.role for member in store.select("members").members}
    assert roles == {DEMO_USER_ID: "ADMIN", "u2": "OWNER"}


async def test_cancel_invitation_refetches(store, login):
    login()
    await store.run(members.invite_member, "1", "a@b.co")
    invitation_id = store.select("members").invitations[0].id

    await store.run(members.cancel_invitation, "1", invitation_id)

    assert store.select("members").invitations == []


async def test_accept_invitation(store, services, login):
    login()
    receipt = await services.companies.invite_member("2", "joiner@b.co")

    action = await store.run(members.accept_invitation, receipt.invitation_token)

    assert action.payload == "2"
    joined = await services.companies.list_members("2")
    assert "joiner@b.co" in [member.user_id for member in joined]


def test_member_slice_initial_state():
    assert MemberSliceState().members == []


# Finance


async def test_fetch_dashboard_loads_everything(store, payments_api, login):
    login()

    action = await store.run(finance.fetch_dashboard)

    state = store.select("finance")
    assert action.is_fulfilled
    assert state.account.balance == 100.0
    assert [expense.id for expense in state.expenses] == ["e1"]
    assert [item.id for item in state.income] == ["i1"]
    assert state.transactions == []
    assert state.loading is False


async def test_dashboard_failure_rejects_whole_snapshot(services, payments_api):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/payments/income"):
            return httpx.Response(503, json={"message": "Income service down"})
        return payments_api.handle(request)

    broken = Services(
        services.companies,
        PaymentServiceImpl(PAYMENTS_URL, transport=httpx.MockTransport(handler)),
    )
    store = create_store(broken)

    action = await store.run(finance.fetch_dashboard)

    assert action.error == "Income service down"
    assert store.select("finance").account is None


@pytest.mark.parametrize("amount", ["", "abc", "0", "-5", "nan", "inf", None])
async def test_credit_rejects_invalid_amounts(store, payments_api, amount):
    action = await store.run(finance.credit_account, amount)
    assert action.error == finance.INVALID_AMOUNT_ERROR
    assert payments_api.calls == []


async def test_credit_refetches_balance_and_transactions(store, payments_api):
    action = await store.run(finance.credit_account, "50", "")

    state = store.select("finance")
    assert action.is_fulfilled
    assert state.account.balance == 150.0
    assert state.transactions[0].description == "Account credit"
    assert payments_api.calls[-2:] == [
        "GET /payments/account/balance",
        "GET /payments/account/transactions",
    ]


async def test_create_expense_requires_fields(store, payments_api):
    action = await store.run(finance.create_expense, "", "10", "food")
    assert action.error == finance.REQUIRED_FIELDS_ERROR
    assert payments_api.calls == []


async def test_create_expense_refetches_expenses(store, payments_api):
    action = await store.run(finance.create_expense, "Laptop", "1200", "hardware", "2024-02-01")

    assert action.is_fulfilled
    assert [expense.description for expense in store.select("finance").expenses] == ["Rent", "Laptop"]
    assert payments_api.expenses[-1]["dueDate"] == "2024-02-01"


async def test_update_expense_refetches_expenses(store, payments_api):
    action = await store.run(finance.update_expense, "e1", {"amount": 55.0, "due_date": "2024-03-01"})

    assert action.payload == "e1"
    assert store.select("finance").expenses[0].amount == 55.0
    assert payments_api.calls[-2:] == ["PUT /payments/expenses/e1", "GET /payments/expenses"]
    assert payments_api.expenses[0]["dueDate"] == "2024-03-01"


async def test_pay_expense_refetches_expenses_balance_and_transactions(store, payments_api):
    await store.run(finance.pay_expense, "e1")

    state = store.select("finance")
    assert state.expenses[0].is_paid
    assert state.account.balance == 60.0
    assert state.transactions[0].type == "PAYMENT"


async def test_create_income_refetches_income(store, payments_api):
    action = await store.run(finance.create_income, "Grant", "300", "monthly", True)

    assert action.is_fulfilled
    assert [item.source for item in store.select("finance").income] == ["Consulting", "Grant"]
    assert payments_api.income[-1]["isRecurring"] is True


async def test_update_income_refetches_income(store, payments_api):
    action = await store.run(finance.update_income, "i1", {"source": "Advisory"})

    assert action.payload == "i1"
    assert [item.source for item in store.select("finance").income] == ["Advisory"]
    assert payments_api.calls[-2:] == ["PUT /payments/income/i1", "GET /payments/income"]


async def test_add_income_to_account_refetches(store, payments_api):
    await store.run(finance.add_income_to_account, "i1")

    state = store.select("finance")
    assert state.account.balance == 125.0
    assert state.transactions[0].type == "INCOME"
    assert [item.id for item in state.income] == ["i1"]
