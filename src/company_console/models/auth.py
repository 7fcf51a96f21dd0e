"""Session models: the signed-in user and the credentials granted to the console."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from company_console.lib.objects import from_payload
from company_console.models.company import Company


@dataclass
class User:
    id: str = ""
    groups: list[str] = field(default_factory=list)
    email: str | None = None
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.id

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "User":
        values = from_payload(data)
        return cls(
            id=str(values.get("id", "")),
            groups=list(values.get("groups") or []),
            email=values.get("email"),
            name=values.get("name"),
        )


@dataclass
class AuthGrant:
    """
    Credentials injected into the session.

    Produced by the cross-frame auth bridge or by POST /companies/auth.

    Attributes:
        user: The authenticated user.
        access_token: Bearer token for API calls.
        company: Optional pre-selected company.
        role: Optional role of the user in that company.
    """

    user: User
    access_token: str
    company: Company | None = None
    role: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthGrant":
        """Deserialize an auth response ({token|accessToken, user, company})."""
        company = data.get("company") or data.get("selectedCompany")
        return cls(
            user=User.from_dict(data.get("user")),
            access_token=data.get("accessToken") or data.get("token") or "",
            company=Company.from_dict(company) if company else None,
            role=data.get("role"),
        )
