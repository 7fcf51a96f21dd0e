"""
Abstract base class defining the company data access contract.

Covers companies, memberships, invitations and ownership transfer.
Every method takes the caller's bearer token (None when signed out) and
raises a ServiceError subclass on failure.

Implementations:
- CompanyServiceImpl: REST API client
- DemoCompanyService: Static in-memory data for development/offline use
"""

from abc import ABC, abstractmethod

from company_console.models.auth import AuthGrant
from company_console.models.company import Company, CompanyDraft
from company_console.models.member import Invitation, InvitationReceipt, Member
from company_console.rbac import MemberAction, Role


class CompanyService(ABC):
    """Abstract base class for company, member and invitation access."""

    @abstractmethod
    async def list_companies(self, token: str | None = None) -> list[Company]:
        """Return every company visible to the caller."""

    @abstractmethod
    async def list_user_companies(self, token: str | None = None) -> list[Company]:
        """Return the companies the caller belongs to."""

    @abstractmethod
    async def get_company(self, company_id: str, token: str | None = None) -> Company:
        """Return one company by id."""

    @abstractmethod
    async def create_company(
        self, draft: CompanyDraft, token: str | None = None
    ) -> Company:
        """Create a company; the server assigns the id."""

    @abstractmethod
    async def update_company(self, company: Company, token: str | None = None) -> Company:
        """Replace a company's fields and return the stored version."""

    @abstractmethod
    async def delete_company(self, company_id: str, token: str | None = None) -> None:
        """Delete a company."""

    @abstractmethod
    async def authenticate_company(
        self, company_id: str, email: str, password: str
    ) -> AuthGrant:
        """Sign in to a company with email and password."""

    @abstractmethod
    async def list_members(self, company_id: str, token: str | None = None) -> list[Member]:
        """Return the company's members."""

    @abstractmethod
    async def manage_member(
        self,
        company_id: str,
        user_id: str,
        action: MemberAction,
        role: Role | None = None,
        token: str | None = None,
    ) -> None:
        """Add a member, change a member's role or remove a member."""

    @abstractmethod
    async def invite_member(
        self,
        company_id: str,
        email: str,
        role: Role = Role.MEMBER,
        message: str | None = None,
        token: str | None = None,
    ) -> InvitationReceipt:
        """Invite an email address to join the company."""

    @abstractmethod
    async def accept_invitation(
        self, invitation_token: str, token: str | None = None
    ) -> str:
        """Accept an invitation and return the joined company id."""

    @abstractmethod
    async def transfer_ownership(
        self, company_id: str, new_owner_id: str, token: str | None = None
    ) -> None:
        """Make another member the company owner."""

    @abstractmethod
    async def list_invitations(
        self, company_id: str, token: str | None = None
    ) -> list[Invitation]:
        """Return the company's invitations."""

    @abstractmethod
    async def resend_invitation(
        self, company_id: str, invitation_id: str, token: str | None = None
    ) -> None:
        """Send an invitation email again."""

    @abstractmethod
    async def cancel_invitation(
        self, company_id: str, invitation_id: str, token: str | None = None
    ) -> None:
        """Cancel a pending invitation."""
