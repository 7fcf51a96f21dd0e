"""
Company slice: the cached company list and the company being edited.

Merge rules for fulfilled actions:
- fetch replaces the list
- create appends the server's company
- update replaces the entity with the same id (no-op when absent)
- delete filters the id out (no-op when absent)

When the API is unreachable the list thunks fall back to the demo
dataset so the console stays usable offline. Mutations never fall back.
"""

from dataclasses import dataclass, field, replace

from company_console.lib import logs
from company_console.models.company import Company, CompanyDraft
from company_console.services.errors import NetworkError
from company_console.store.actions import Action, ActionCreator, async_thunk
from company_console.store.slice import Slice

LOG = logs.logger(__file__)


@dataclass
class CompanySliceState:
    companies: list[Company] = field(default_factory=list)
    selected_company: Company | None = None
    loading: bool = False
    error: str | None = None


company_slice: Slice[CompanySliceState] = Slice("company", CompanySliceState)

set_selected_company = ActionCreator("company/setSelectedCompany")
clear_company_error = ActionCreator("company/clearError")


async def _with_fallback(ctx, method: str) -> list[Company]:
    try:
        return await getattr(ctx.services.companies, method)(ctx.token)
    except NetworkError:
        fallback = ctx.services.fallback
        if fallback is None:
            raise
        LOG.warning("API call failed, using demo companies", exc_info=True)
        return await getattr(fallback, method)(ctx.token)


@async_thunk("company/fetchCompanies", error="Failed to fetch companies")
async def fetch_companies(ctx) -> list[Company]:
    return await _with_fallback(ctx, "list_companies")


@async_thunk("company/fetchUserCompanies", error="Failed to fetch user companies")
async def fetch_user_companies(ctx) -> list[Company]:
    return await _with_fallback(ctx, "list_user_companies")


@async_thunk("company/createCompany", error="Failed to create company")
async def create_company(ctx, draft: CompanyDraft) -> Company:
    return await ctx.services.companies.create_company(draft, ctx.token)


@async_thunk("company/updateCompany", error="Failed to update company")
async def update_company(ctx, company: Company) -> Company:
    return await ctx.services.companies.update_company(company, ctx.token)


@async_thunk("company/deleteCompany", error="Failed to delete company")
async def delete_company(ctx, company_id: str) -> str:
    await ctx.services.companies.delete_company(company_id, ctx.token)
    return company_id


company_slice.track(
    fetch_companies,
    fetch_user_companies,
    create_company,
    update_company,
    delete_company,
)


@company_slice.on(fetch_companies.fulfilled, fetch_user_companies.fulfilled)
def _replace_all(state: CompanySliceState, action: Action) -> CompanySliceState:
    return replace(state, loading=False, companies=list(action.payload))


@company_slice.on(create_company.fulfilled)
def _append(state: CompanySliceState, action: Action) -> CompanySliceState:
    return replace(state, loading=False, companies=[*state.companies, action.payload])


@company_slice.on(update_company.fulfilled)
def _replace_one(state: CompanySliceState, action: Action) -> CompanySliceState:
    updated: Company = action.payload
    companies = [updated if company.id == updated.id else company for company in state.companies]
    return replace(state, loading=False, companies=companies)


@company_slice.on(delete_company.fulfilled)
def _remove(state: CompanySliceState, action: Action) -> CompanySliceState:
    companies = [company for company in state.companies if company.id != action.payload]
    return replace(state, loading=False, companies=companies)


@company_slice.on(set_selected_company)
def _select(state: CompanySliceState, action: Action) -> CompanySliceState:
    return replace(state, selected_company=action.payload)


@company_slice.on(clear_company_error)
def _clear_error(state: CompanySliceState, action: Action) -> CompanySliceState:
    return replace(state, error=None)
