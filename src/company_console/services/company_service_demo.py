"""
Demo implementation of CompanyService using in-memory data.

This service is useful for:
- Local development without the companies API
- Keeping the company list usable when the API is unreachable
- Exercising the console end to end in tests

State lives on the instance, so every DemoCompanyService starts from the
same seed data.
"""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Sequence

from company_console.data.demo_companies import DEMO_COMPANIES
from company_console.models.auth import AuthGrant, User
from company_console.models.company import Company, CompanyDraft
from company_console.models.member import (
    Invitation,
    InvitationReceipt,
    InvitationStatus,
    Member,
)
from company_console.rbac import MemberAction, Role
from company_console.services.company_service import CompanyService
from company_console.services.errors import NotFoundError

DEMO_USER_ID = "demo-user"
_INVITATION_TTL = timedelta(days=7)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


class DemoCompanyService(CompanyService):
    """
    In-memory company service backed by static demo data.

    Every seeded company has DEMO_USER_ID as its owner. Invitation tokens
    are the invitation ids.
    """

    def __init__(self, companies: Sequence[Company] | None = None) -> None:
        """
        Initialize with company data.

        Args:
            companies: Custom company list, or None to use DEMO_COMPANIES.
        """
        seed = DEMO_COMPANIES if companies is None else companies
        self._companies: list[Company] = [replace(company) for company in seed]
        self._members: dict[str, list[Member]] = {
            company.id: [Member(DEMO_USER_ID, Role.OWNER.value, "ACTIVE", _now())]
            for company in self._companies
        }
        self._invitations: dict[str, list[Invitation]] = {}

    async def list_companies(self, token: str | None = None) -> list[Company]:
        return [replace(company) for company in self._companies]

    async def list_user_companies(self, token: str | None = None) -> list[Company]:
        return await self.list_companies(token)

    async def get_company(self, company_id: str, token: str | None = None) -> Company:
        return replace(self._companies[self._index(company_id)])

    async def create_company(
        self, draft: CompanyDraft, token: str | None = None
    ) -> Company:
        company = draft.with_id(_new_id())
        self._companies.append(company)
        self._members[company.id] = [
            Member(DEMO_USER_ID, Role.OWNER.value, "ACTIVE", _now())
        ]
        return replace(company)

    async def update_company(self, company: Company, token: str | None = None) -> Company:
        self._companies[self._index(company.id)] = replace(company)
        return replace(company)

    async def delete_company(self, company_id: str, token: str | None = None) -> None:
        del self._companies[self._index(company_id)]
        self._members.pop(company_id, None)
        self._invitations.pop(company_id, None)

    async def authenticate_company(
        self, company_id: str, email: str, password: str
    ) -> AuthGrant:
        company = await self.get_company(company_id)
        user = User(id=DEMO_USER_ID, email=email, name=email.split("@")[0])
        return AuthGrant(
            user=user,
            access_token=f"demo-token-{_new_id()}",
            company=company,
            role=Role.OWNER.value,
        )

    async def list_members(self, company_id: str, token: str | None = None) -> list[Member]:
        self._index(company_id)
        return [replace(member) for member in self._members.get(company_id, [])]

    async def manage_member(
        self,
        company_id: str,
        user_id: str,
        action: MemberAction,
        role: Role | None = None,
        token: str | None = None,
    ) -> None:
        self._index(company_id)
        members = self._members.setdefault(company_id, [])
        action = MemberAction(action)
        if action is MemberAction.ADD:
            members.append(
                Member(user_id, Role(role or Role.MEMBER).value, "ACTIVE", _now())
            )
            return
        position = self._member_index(members, user_id)
        if action is MemberAction.UPDATE_ROLE:
            members[position] = replace(members[position], role=Role(role).value)
        else:
            del members[position]

    async def invite_member(
        self,
        company_id: str,
        email: str,
        role: Role = Role.MEMBER,
        message: str | None = None,
        token: str | None = None,
    ) -> InvitationReceipt:
        self._index(company_id)
        now = datetime.now(timezone.utc)
        invitation = Invitation(
            id=_new_id(),
            email=email,
            role=Role(role).value,
            status=InvitationStatus.PENDING.value,
            invited_at=now.isoformat(),
            expires_at=(now + _INVITATION_TTL).isoformat(),
            invited_by=DEMO_USER_ID,
        )
        self._invitations.setdefault(company_id, []).append(invitation)
        return InvitationReceipt(
            invitation_id=invitation.id,
            expires_at=invitation.expires_at,
            invitation_token=invitation.id,
        )

    async def accept_invitation(
        self, invitation_token: str, token: str | None = None
    ) -> str:
        for company_id, invitations in self._invitations.items():
            for position, invitation in enumerate(invitations):
                if invitation.id == invitation_token and invitation.is_pending:
                    invitations[position] = replace(
                        invitation, status=InvitationStatus.ACCEPTED.value
                    )
                    self._members.setdefault(company_id, []).append(
                        Member(invitation.email, invitation.role, "ACTIVE", _now())
                    )
                    return company_id
        raise NotFoundError("Invitation not found")

    async def transfer_ownership(
        self, company_id: str, new_owner_id: str, token: str | None = None
    ) -> None:
        self._index(company_id)
        members = self._members.get(company_id, [])
        target = self._member_index(members, new_owner_id)
        for position, member in enumerate(members):
            if member.role == Role.OWNER:
                members[position] = replace(member, role=Role.ADMIN.value)
        members[target] = replace(members[target], role=Role.OWNER.value)

    async def list_invitations(
        self, company_id: str, token: str | None = None
    ) -> list[Invitation]:
        self._index(company_id)
        return [replace(invitation) for invitation in self._invitations.get(company_id, [])]

    async def resend_invitation(
        self, company_id: str, invitation_id: str, token: str | None = None
    ) -> None:
        invitations = self._invitations.get(company_id, [])
        position = self._invitation_index(invitations, invitation_id)
        now = datetime.now(timezone.utc)
        invitations[position] = replace(
            invitations[position],
            status=InvitationStatus.PENDING.value,
            invited_at=now.isoformat(),
            expires_at=(now + _INVITATION_TTL).isoformat(),
        )

    async def cancel_invitation(
        self, company_id: str, invitation_id: str, token: str | None = None
    ) -> None:
        invitations = self._invitations.get(company_id, [])
        del invitations[self._invitation_index(invitations, invitation_id)]

    def _index(self, company_id: str) -> int:
        for position, company in enumerate(self._companies):
            if company.id == company_id:
                return position
        raise NotFoundError("Company not found")

    @staticmethod
    def _member_index(members: list[Member], user_id: str) -> int:
        for position, member in enumerate(members):
            if member.user_id == user_id:
                return position
        raise NotFoundError("Member not found")

    @staticmethod
    def _invitation_index(invitations: list[Invitation], invitation_id: str) -> int:
        for position, invitation in enumerate(invitations):
            if invitation.id == invitation_id:
                return position
        raise NotFoundError("Invitation not found")
