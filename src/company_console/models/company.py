"""
Company domain models and serialization helpers.

Companies are cached client-side in a list keyed by id. The API uses
camelCase keys; from_dict/to_dict translate to and from the snake_case
dataclass fields.
"""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Mapping

from company_console.lib.objects import from_payload, to_payload


class CompanyStatus(str, Enum):
    """Lifecycle status of a company."""

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


@dataclass
class CompanyDraft:
    """Company fields submitted when creating or editing a company."""

    name: str = ""
    address: str = ""
    phone: str = ""
    email: str | None = None
    website: str | None = None
    status: str = CompanyStatus.ACTIVE.value

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a request body, omitting unset optional fields."""
        return to_payload(self)

    def with_id(self, company_id: str) -> "Company":
        """Return a Company carrying this draft's fields and the given id."""
        return Company(id=company_id, **asdict(self))


@dataclass
class Company:
    """A company as returned by the API."""

    id: str = ""
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str | None = None
    website: str | None = None
    status: str = CompanyStatus.ACTIVE.value
    industry: str | None = None
    description: str | None = None
    logo_url: str | None = None

    @property
    def is_active(self) -> bool:
        """True while the company has not been deleted."""
        return self.status == CompanyStatus.ACTIVE

    def searchable_terms(self) -> list[str]:
        """Return the fields matched by the company search box."""
        return [value for value in (self.name, self.address, self.phone, self.email) if value]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return to_payload(self)

    def to_draft(self) -> CompanyDraft:
        """Return the editable fields of this company."""
        return CompanyDraft(
            name=self.name,
            address=self.address,
            phone=self.phone,
            email=self.email,
            website=self.website,
            status=self.status,
        )

    def updated(self, draft: CompanyDraft) -> "Company":
        """Return a copy with the draft's editable fields applied."""
        return replace(self, **asdict(draft))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Company":
        """Deserialize an API payload."""
        values = from_payload(data)
        return cls(
            id=str(values.get("id", "")),
            name=values.get("name") or "",
            address=values.get("address") or "",
            phone=values.get("phone") or "",
            email=values.get("email") or None,
            website=values.get("website") or None,
            status=values.get("status") or CompanyStatus.ACTIVE.value,
            industry=values.get("industry"),
            description=values.get("description"),
            logo_url=values.get("logo_url"),
        )
