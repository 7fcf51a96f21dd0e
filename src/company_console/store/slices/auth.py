"""
Auth slice: the signed-in user, bearer token, active company and role.

Credentials arrive through set_auth (auth bridge) or the
authenticate_company thunk. The active role is resolved from the
session: the grant's role when provided, replaced by the user's
membership role whenever a member list containing the user is loaded.
Switching companies, or loading a member list without the user, drops
back to the session role (the grant's role, else the configured default).
"""

from dataclasses import dataclass, replace

from company_console.config import get_settings
from company_console.models.auth import AuthGrant, User
from company_console.models.company import Company
from company_console.store.actions import Action, ActionCreator, async_thunk
from company_console.store.slice import Slice


@dataclass
class AuthSliceState:
    user: User | None = None
    access_token: str = ""
    active_company: Company | None = None
    role: str = "MEMBER"
    grant_role: str | None = None
    is_authenticating: bool = False
    auth_error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user and self.access_token)


def initial_auth_state() -> AuthSliceState:
    return AuthSliceState(role=get_settings().default_role)


def session_role(state: AuthSliceState) -> str:
    """Role held outside of any loaded membership."""
    return state.grant_role or get_settings().default_role


auth_slice: Slice[AuthSliceState] = Slice("auth", initial_auth_state)

set_auth = ActionCreator("auth/setAuth")
clear_auth = ActionCreator("auth/clearAuth")
set_role = ActionCreator("auth/setRole")
set_active_company = ActionCreator("auth/setActiveCompany")
set_auth_error = ActionCreator("auth/setError")
clear_auth_error = ActionCreator("auth/clearError")


@async_thunk("auth/authenticateCompany", error="Authentication failed")
async def authenticate_company(ctx, company_id: str, email: str, password: str) -> AuthGrant:
    return await ctx.services.companies.authenticate_company(company_id, email, password)


auth_slice.track(authenticate_company, loading="is_authenticating", error="auth_error")


def _switches_company(state: AuthSliceState, company: Company | None) -> bool:
    previous = state.active_company
    return bool(company and previous and company.id != previous.id)


@auth_slice.on(set_auth, authenticate_company.fulfilled)
def _apply_grant(state: AuthSliceState, action: Action) -> AuthSliceState:
    grant: AuthGrant = action.payload
    grant_role = grant.role or state.grant_role
    role = grant.role or state.role
    if not grant.role and _switches_company(state, grant.company):
        role = grant_role or get_settings().default_role
    return replace(
        state,
        user=grant.user,
        access_token=grant.access_token,
        active_company=grant.company or state.active_company,
        role=role,
        grant_role=grant_role,
        is_authenticating=False,
        auth_error=None,
    )


@auth_slice.on(clear_auth)
def _clear(state: AuthSliceState, action: Action) -> AuthSliceState:
    return initial_auth_state()


@auth_slice.on(set_role)
def _set_role(state: AuthSliceState, action: Action) -> AuthSliceState:
    return replace(state, role=action.payload)


@auth_slice.on(set_active_company)
def _set_active_company(state: AuthSliceState, action: Action) -> AuthSliceState:
    company: Company | None = action.payload
    previous = state.active_company
    if company and previous and company.id == previous.id:
        return replace(state, active_company=company)
    return replace(state, active_company=company, role=session_role(state))


@auth_slice.on(set_auth_error)
def _set_error(state: AuthSliceState, action: Action) -> AuthSliceState:
    return replace(state, auth_error=action.payload)


@auth_slice.on(clear_auth_error)
def _clear_error(state: AuthSliceState, action: Action) -> AuthSliceState:
    return replace(state, auth_error=None)
