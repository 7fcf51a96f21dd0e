from dataclasses import replace

import pytest

from company_console.models.auth import AuthGrant, User
from company_console.models.company import Company, CompanyDraft
from company_console.services.errors import ApiError
from company_console.store import Action, Store, ThunkRejected, async_thunk, create_store
from company_console.store.slice import Slice
from company_console.store.slices.auth import (
    AuthSliceState,
    clear_auth,
    set_active_company,
    set_auth,
    set_role,
)
from company_console.store.slices.companies import (
    CompanySliceState,
    clear_company_error,
    create_company,
    delete_company,
    fetch_companies,
    set_selected_company,
    update_company,
)


@async_thunk("test/explode", error="Explosion")
async def explode(ctx):
    raise ApiError("Server exploded", 500)


@async_thunk("test/silent", error="Silent failure")
async def silent(ctx):
    raise ThunkRejected("")


@async_thunk("test/bug", error="Bug")
async def bug(ctx):
    raise KeyError("missing")


counter_slice = Slice("counter", lambda: CompanySliceState())
counter_slice.track(explode, silent, bug)


def test_action_creators():
    action = set_selected_company(Company(id="1"))
    assert action.type == "company/setSelectedCompany"
    assert set_selected_company.match(action)
    assert create_company.pending.type == "company/createCompany/pending"
    assert create_company.rejected(error="x").is_rejected


def test_unwrap_raises_for_rejected_action():
    assert Action("a/fulfilled", payload=1).unwrap() == 1
    with pytest.raises(ThunkRejected, match="nope"):
        Action("a/rejected", error="nope").unwrap()


def test_unknown_action_leaves_state_untouched(store):
    before = store.state
    store.dispatch(Action("nothing/happened"))
    assert store.state == before


def test_subscribe_and_unsubscribe(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.dispatch(clear_company_error())
    unsubscribe()
    store.dispatch(clear_company_error())
    assert [action.type for action in seen] == ["company/clearError"]


def test_preloaded_state():
    preloaded = CompanySliceState(companies=[Company(id="1", name="One")])
    store = create_store(state={"company": preloaded})
    assert store.select("company").companies[0].name == "One"
    assert store.select("auth") == AuthSliceState(role=store.select("auth").role)


def test_auth_reducers(store):
    store.dispatch(set_role("ADMIN"))
    assert store.select("auth").role == "ADMIN"
    store.dispatch(clear_auth())
    assert store.select("auth").role == "MEMBER"


def test_switching_company_drops_back_to_session_role(store):
    store.dispatch(set_auth(AuthGrant(user=User(id="u1"), access_token="t", role="ADMIN")))
    store.dispatch(set_active_company(Company(id="1", name="One")))
    store.dispatch(set_role("OWNER"))

    store.dispatch(set_active_company(Company(id="1", name="One renamed")))
    assert store.select("auth").role == "OWNER"

    store.dispatch(set_active_company(Company(id="2", name="Two")))
    assert store.select("auth").role == "ADMIN"

    store.dispatch(set_role("OWNER"))
    store.dispatch(set_auth(AuthGrant(user=User(id="u1"), access_token="t2", company=Company(id="3"))))
    assert store.select("auth").role == "ADMIN"


def test_switching_company_without_grant_role_uses_default(store):
    store.dispatch(set_auth(AuthGrant(user=User(id="u1"), access_token="t")))
    store.dispatch(set_role("OWNER"))

    store.dispatch(set_active_company(Company(id="2", name="Two")))

    assert store.select("auth").role == "MEMBER"


async def test_create_company_round_trip(store):
    await store.run(fetch_companies)
    before = list(store.select("company").companies)

    action = await store.run(create_company, CompanyDraft(name="Acme", address="1 Rd", phone="555"))

    state = store.select("company")
    assert action.is_fulfilled
    assert len(state.companies) == len(before) + 1
    created = state.companies[-1]
    assert created.name == "Acme"
    assert created.id and created.id not in {company.id for company in before}
    assert state.loading is False
    assert state.error is None


async def test_stream_yields_pending_before_settled(store):
    phases = []
    async for action in store.stream(fetch_companies):
        phases.append((action.type, store.select("company").loading))
    assert phases == [
        ("company/fetchCompanies/pending", True),
        ("company/fetchCompanies/fulfilled", False),
    ]


async def test_update_replaces_by_id(store):
    await store.run(fetch_companies)
    target = store.select("company").companies[1]

    await store.run(update_company, replace(target, name="Renamed"))

    companies = store.select("company").companies
    assert companies[1].name == "Renamed"
    assert companies[1].id == target.id


async def test_update_of_unknown_id_is_a_no_op_on_the_list():
    store = create_store()
    store.dispatch(update_company.fulfilled(Company(id="404", name="Ghost")))
    assert store.select("company").companies == []


async def test_delete_removes_exactly_one_and_is_idempotent(store):
    await store.run(fetch_companies)
    before = list(store.select("company").companies)
    victim = before[0]

    first = await store.run(delete_company, victim.id)
    after_first = list(store.select("company").companies)
    second = await store.run(delete_company, victim.id)

    assert first.is_fulfilled
    assert after_first == before[1:]
    assert second.is_rejected
    assert second.error == "Company not found"
    assert store.select("company").companies == after_first
    assert store.select("company").error == "Company not found"


async def test_service_error_becomes_rejected_action():
    store = Store([counter_slice])
    action = await store.run(explode)
    assert action.is_rejected
    assert action.error == "Server exploded"
    assert store.select("counter").error == "Server exploded"
    assert store.select("counter").loading is False


async def test_empty_rejection_uses_default_message():
    store = Store([counter_slice])
    action = await store.run(silent)
    assert action.error == "Silent failure"


async def test_programming_errors_propagate_after_rejecting():
    store = Store([counter_slice])
    with pytest.raises(KeyError):
        await store.run(bug)
    assert store.select("counter").error == "Bug"
    assert store.select("counter").loading is False


async def test_thunk_without_services_fails_loudly():
    store = Store([counter_slice])
    with pytest.raises(RuntimeError, match="without services"):
        await store.run(fetch_companies)
