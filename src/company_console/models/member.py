"""Company membership and invitation models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from company_console.lib.objects import from_payload, to_payload


class InvitationStatus(str, Enum):
    """Invitation lifecycle status; transitions happen server-side."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    EXPIRED = "EXPIRED"


@dataclass
class Member:
    """A user's membership in one company."""

    user_id: str = ""
    role: str = ""
    status: str = ""
    joined_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return to_payload(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Member":
        values = from_payload(data)
        return cls(
            user_id=str(values.get("user_id", "")),
            role=values.get("role") or "",
            status=values.get("status") or "",
            joined_at=values.get("joined_at") or "",
        )


@dataclass
class Invitation:
    """An invitation sent to an email address."""

    id: str = ""
    email: str = ""
    role: str = ""
    status: str = InvitationStatus.PENDING.value
    invited_at: str = ""
    expires_at: str = ""
    invited_by: str = ""

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def to_dict(self) -> dict[str, Any]:
        return to_payload(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Invitation":
        values = from_payload(data)
        return cls(
            id=str(values.get("id", "")),
            email=values.get("email") or "",
            role=values.get("role") or "",
            status=values.get("status") or InvitationStatus.PENDING.value,
            invited_at=values.get("invited_at") or "",
            expires_at=values.get("expires_at") or "",
            invited_by=values.get("invited_by") or "",
        )


@dataclass
class InvitationReceipt:
    """Response of a successful invite call."""

    invitation_id: str = ""
    expires_at: str = ""
    invitation_token: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "InvitationReceipt":
        values = from_payload(data)
        return cls(
            invitation_id=str(values.get("invitation_id", "")),
            expires_at=values.get("expires_at") or "",
            invitation_token=values.get("invitation_token") or "",
        )
