"""
REST implementation of CompanyService.

Endpoints (relative to COMPANY_CONSOLE_API_URL):

    GET/POST        /companies
    GET             /companies/user
    GET/PUT/DELETE  /companies/{id}
    POST            /companies/auth
    GET/POST        /companies/{id}/members
    POST            /companies/{id}/invite
    POST            /companies/invitations/accept
    POST            /companies/{id}/transfer-ownership
    GET             /companies/{id}/invitations
    POST            /companies/{id}/invitations/{iid}/resend
    POST            /companies/{id}/invitations/{iid}/cancel

List responses may be bare arrays or wrapped ({"companies": [...]}).
"""

import httpx

from company_console.config import get_settings
from company_console.lib import logs
from company_console.models.auth import AuthGrant
from company_console.models.company import Company, CompanyDraft
from company_console.models.member import Invitation, InvitationReceipt, Member
from company_console.rbac import MemberAction, Role
from company_console.services.company_service import CompanyService
from company_console.services.errors import ServiceError
from company_console.services.http import ApiClient, unwrap_list

LOG = logs.logger(__file__)


class CompanyServiceImpl(CompanyService):
    """
    Company service backed by the companies REST API.

    Attributes:
        client: ApiClient bound to the companies API base URL.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, defaults to COMPANY_CONSOLE_API_URL.
            transport: Optional httpx transport override.
        """
        self.client = ApiClient(base_url or get_settings().api_url, transport=transport)
        LOG.info("CompanyServiceImpl - base_url:%s", self.client.base_url)

    async def list_companies(self, token: str | None = None) -> list[Company]:
        data = await self.client.get("/companies", "fetch companies", token)
        return [Company.from_dict(item) for item in unwrap_list(data, "companies")]

    async def list_user_companies(self, token: str | None = None) -> list[Company]:
        data = await self.client.get("/companies/user", "fetch user companies", token)
        return [Company.from_dict(item) for item in unwrap_list(data, "companies")]

    async def get_company(self, company_id: str, token: str | None = None) -> Company:
        data = await self.client.get(f"/companies/{company_id}", "fetch company", token)
        return Company.from_dict(data)

    async def create_company(
        self, draft: CompanyDraft, token: str | None = None
    ) -> Company:
        data = await self.client.post(
            "/companies", "create company", token, body=draft.to_dict()
        )
        return Company.from_dict(data)

    async def update_company(self, company: Company, token: str | None = None) -> Company:
        data = await self.client.put(
            f"/companies/{company.id}", "update company", token, body=company.to_dict()
        )
        # Some deployments answer 204; the submitted company is then authoritative
        return Company.from_dict(data) if data else company

    async def delete_company(self, company_id: str, token: str | None = None) -> None:
        await self.client.delete(f"/companies/{company_id}", "delete company", token)

    async def authenticate_company(
        self, company_id: str, email: str, password: str
    ) -> AuthGrant:
        data = await self.client.post(
            "/companies/auth",
            "authenticate",
            body={"companyId": company_id, "email": email, "password": password},
        )
        if not isinstance(data, dict):
            raise ServiceError("Failed to authenticate: empty response")
        return AuthGrant.from_dict(data)

    async def list_members(self, company_id: str, token: str | None = None) -> list[Member]:
        data = await self.client.get(
            f"/companies/{company_id}/members", "fetch company members", token
        )
        return [Member.from_dict(item) for item in unwrap_list(data, "members")]

    async def manage_member(
        self,
        company_id: str,
        user_id: str,
        action: MemberAction,
        role: Role | None = None,
        token: str | None = None,
    ) -> None:
        action = MemberAction(action)
        body = {"companyId": company_id, "userId": user_id, "action": action.value}
        if role:
            body["role"] = Role(role).value
        await self.client.post(
            f"/companies/{company_id}/members",
            f"{action.value.lower().replace('_', ' ')} member",
            token,
            body=body,
        )

    async def invite_member(
        self,
        company_id: str,
        email: str,
        role: Role = Role.MEMBER,
        message: str | None = None,
        token: str | None = None,
    ) -> InvitationReceipt:
        body = {"companyId": company_id, "email": email, "role": Role(role).value}
        if message:
            body["message"] = message
        data = await self.client.post(
            f"/companies/{company_id}/invite", "invite member", token, body=body
        )
        return InvitationReceipt.from_dict(data)

    async def accept_invitation(
        self, invitation_token: str, token: str | None = None
    ) -> str:
        data = await self.client.post(
            "/companies/invitations/accept",
            "accept invitation",
            token,
            body={"token": invitation_token},
        )
        return str((data or {}).get("companyId", ""))

    async def transfer_ownership(
        self, company_id: str, new_owner_id: str, token: str | None = None
    ) -> None:
        await self.client.post(
            f"/companies/{company_id}/transfer-ownership",
            "transfer ownership",
            token,
            body={"newOwnerId": new_owner_id},
        )

    async def list_invitations(
        self, company_id: str, token: str | None = None
    ) -> list[Invitation]:
        data = await self.client.get(
            f"/companies/{company_id}/invitations", "fetch company invitations", token
        )
        return [Invitation.from_dict(item) for item in unwrap_list(data, "invitations")]

    async def resend_invitation(
        self, company_id: str, invitation_id: str, token: str | None = None
    ) -> None:
        await self.client.post(
            f"/companies/{company_id}/invitations/{invitation_id}/resend",
            "resend invitation",
            token,
        )

    async def cancel_invitation(
        self, company_id: str, invitation_id: str, token: str | None = None
    ) -> None:
        await self.client.post(
            f"/companies/{company_id}/invitations/{invitation_id}/cancel",
            "cancel invitation",
            token,
        )
