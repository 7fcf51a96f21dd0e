"""
Member slice: the active company's members and invitations.

Every mutation is checked against the acting user's role before any
request is sent, and refetches the list it changes once the server
accepts it.
"""

from dataclasses import dataclass, field, replace

from company_console.lib import logs
from company_console.models.member import Invitation, InvitationReceipt, Member
from company_console.rbac import (
    MemberAction,
    Permission,
    Role,
    has_permission,
    validate_member_action,
)
from company_console.store.actions import Action, ThunkRejected, async_thunk
from company_console.store.slice import Slice
from company_console.store.slices.auth import session_role, set_role

LOG = logs.logger(__file__)

LAST_OWNER_ERROR = "Cannot remove the last OWNER from company. Transfer ownership first."


@dataclass
class MemberSliceState:
    company_id: str | None = None
    members: list[Member] = field(default_factory=list)
    invitations: list[Invitation] = field(default_factory=list)
    loading: bool = False
    error: str | None = None


member_slice: Slice[MemberSliceState] = Slice("members", MemberSliceState)


def _actor_role(ctx) -> str | None:
    return ctx.state("auth").role if ctx.has_slice("auth") else None


def _current_user_id(ctx) -> str | None:
    if not ctx.has_slice("auth"):
        return None
    user = ctx.state("auth").user
    return user.id if user else None


def _find_member(ctx, user_id: str) -> Member | None:
    for member in ctx.state("members").members:
        if member.user_id == user_id:
            return member
    return None


def _require(ctx, action: MemberAction, target_current=None, target_new=None) -> None:
    result = validate_member_action(_actor_role(ctx), action, target_current, target_new)
    if not result.is_valid:
        raise ThunkRejected(result.error)


def _resolve_role(ctx, company_id: str, members: list[Member]) -> None:
    user_id = _current_user_id(ctx)
    own = next((m for m in members if user_id and m.user_id == user_id and m.role), None)
    if own is not None:
        role = own.role
    else:
        role = session_role(ctx.state("auth"))
        if user_id:
            LOG.info("User %s is not a member of company %s", user_id, company_id)
    if role != _actor_role(ctx):
        LOG.info("Resolved role %s for user %s", role, user_id)
        ctx.dispatch(set_role(role))


@async_thunk("members/fetchMembers", error="Failed to load members")
async def fetch_members(ctx, company_id: str) -> tuple[str, list[Member]]:
    members = await ctx.services.companies.list_members(company_id, ctx.token)
    if ctx.has_slice("auth"):
        _resolve_role(ctx, company_id, members)
    return company_id, members


@async_thunk("members/fetchInvitations", error="Failed to load invitations")
async def fetch_invitations(ctx, company_id: str) -> list[Invitation]:
    return await ctx.services.companies.list_invitations(company_id, ctx.token)


@async_thunk("members/inviteMember", error="Failed to send invitation")
async def invite_member(
    ctx,
    company_id: str,
    email: str,
    role: str = Role.MEMBER.value,
    message: str | None = None,
) -> InvitationReceipt:
    if not email.strip():
        raise ThunkRejected("Email is required")
    _require(ctx, MemberAction.ADD, target_new=role)
    receipt = await ctx.services.companies.invite_member(
        company_id, email.strip(), Role(role), message or None, ctx.token
    )
    await ctx.run(fetch_invitations, company_id)
    return receipt


@async_thunk("members/updateMemberRole", error="Failed to update member role")
async def update_member_role(ctx, company_id: str, user_id: str, new_role: str) -> str:
    member = _find_member(ctx, user_id)
    _require(ctx, MemberAction.UPDATE_ROLE, member.role if member else None, new_role)
    await ctx.services.companies.manage_member(
        company_id, user_id, MemberAction.UPDATE_ROLE, Role(new_role), ctx.token
    )
    await ctx.run(fetch_members, company_id)
    return user_id


@async_thunk("members/removeMember", error="Failed to remove member")
async def remove_member(ctx, company_id: str, user_id: str) -> str:
    member = _find_member(ctx, user_id)
    target_role = member.role if member else None
    _require(ctx, MemberAction.REMOVE, target_role)
    if user_id == _current_user_id(ctx) and target_role == Role.OWNER:
        owners = [m for m in ctx.state("members").members if m.role == Role.OWNER]
        if len(owners) <= 1:
            raise ThunkRejected(LAST_OWNER_ERROR)
    await ctx.services.companies.manage_member(
        company_id, user_id, MemberAction.REMOVE, None, ctx.token
    )
    await ctx.run(fetch_members, company_id)
    return user_id


@async_thunk("members/transferOwnership", error="Failed to transfer ownership")
async def transfer_ownership(ctx, company_id: str, new_owner_id: str) -> str:
    if not has_permission(_actor_role(ctx), Permission.COMPANY_TRANSFER_OWNERSHIP):
        raise ThunkRejected("Insufficient permissions to transfer ownership")
    if not new_owner_id:
        raise ThunkRejected("Please select a member")
    await ctx.services.companies.transfer_ownership(company_id, new_owner_id, ctx.token)
    await ctx.run(fetch_members, company_id)
    return new_owner_id


@async_thunk("members/resendInvitation", error="Failed to resend invitation")
async def resend_invitation(ctx, company_id: str, invitation_id: str) -> str:
    await ctx.services.companies.resend_invitation(company_id, invitation_id, ctx.token)
    await ctx.run(fetch_invitations, company_id)
    return invitation_id


@async_thunk("members/cancelInvitation", error="Failed to cancel invitation")
async def cancel_invitation(ctx, company_id: str, invitation_id: str) -> str:
    await ctx.services.companies.cancel_invitation(company_id, invitation_id, ctx.token)
    await ctx.run(fetch_invitations, company_id)
    return invitation_id


@async_thunk("members/acceptInvitation", error="Failed to accept invitation")
async def accept_invitation(ctx, invitation_token: str) -> str:
    if not invitation_token.strip():
        raise ThunkRejected("Invitation token is required")
    return await ctx.services.companies.accept_invitation(invitation_token.strip(), ctx.token)


member_slice.track(
    fetch_members,
    fetch_invitations,
    invite_member,
    update_member_role,
    remove_member,
    transfer_ownership,
    resend_invitation,
    cancel_invitation,
    accept_invitation,
)


@member_slice.on(fetch_members.fulfilled)
def _members_loaded(state: MemberSliceState, action: Action) -> MemberSliceState:
    company_id, members = action.payload
    return replace(state, loading=False, company_id=company_id, members=list(members))


@member_slice.on(fetch_invitations.fulfilled)
def _invitations_loaded(state: MemberSliceState, action: Action) -> MemberSliceState:
    return replace(state, loading=False, invitations=list(action.payload))
