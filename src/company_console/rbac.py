"""
Role-based access control for company management.

Permissions are derived from a fixed role assignment that mirrors the
backend defaults. Every function here is a pure lookup over the static
ROLE_PERMISSIONS table, so views can call them on every render.

Roles and permissions are str-valued enums: plain strings coming from
the API ("OWNER", "MEMBER_INVITE") compare equal to the members and are
accepted wherever a Role or Permission is expected. Unknown roles hold
no permissions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Role(str, Enum):
    """Company membership roles, most privileged first."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class Permission(str, Enum):
    """Named capabilities checked before enabling an action."""

    # Company management
    COMPANY_READ = "COMPANY_READ"
    COMPANY_UPDATE = "COMPANY_UPDATE"
    COMPANY_DELETE = "COMPANY_DELETE"
    COMPANY_TRANSFER_OWNERSHIP = "COMPANY_TRANSFER_OWNERSHIP"

    # Member management
    MEMBER_READ = "MEMBER_READ"
    MEMBER_INVITE = "MEMBER_INVITE"
    MEMBER_REMOVE = "MEMBER_REMOVE"
    MEMBER_UPDATE_ROLE = "MEMBER_UPDATE_ROLE"

    # Role management
    ROLE_ASSIGN_ADMIN = "ROLE_ASSIGN_ADMIN"
    ROLE_ASSIGN_MEMBER = "ROLE_ASSIGN_MEMBER"
    ROLE_REMOVE_ADMIN = "ROLE_REMOVE_ADMIN"

    # System operations
    VIEW_AUDIT_LOGS = "VIEW_AUDIT_LOGS"
    MANAGE_COMPANY_SETTINGS = "MANAGE_COMPANY_SETTINGS"


class MemberAction(str, Enum):
    """Actions accepted by the member management endpoint."""

    ADD = "ADD"
    UPDATE_ROLE = "UPDATE_ROLE"
    REMOVE = "REMOVE"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.OWNER: frozenset(Permission),
    Role.ADMIN: frozenset(
        {
            Permission.COMPANY_READ,
            Permission.COMPANY_UPDATE,
            Permission.MEMBER_READ,
            Permission.MEMBER_INVITE,
            Permission.MEMBER_REMOVE,
            Permission.MEMBER_UPDATE_ROLE,
            Permission.ROLE_ASSIGN_MEMBER,
            Permission.MANAGE_COMPANY_SETTINGS,
        }
    ),
    Role.MEMBER: frozenset(
        {
            Permission.COMPANY_READ,
            Permission.MEMBER_READ,
        }
    ),
}


@dataclass(frozen=True)
class RoleInfo:
    """Display information for a role badge."""

    name: str
    color: str
    description: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_member_action."""

    is_valid: bool
    error: str | None = None


_ROLE_INFO: dict[Role, RoleInfo] = {
    Role.OWNER: RoleInfo(
        name="Owner",
        color="red",
        description=(
            "Full access to company management, member management, "
            "and ownership transfer"
        ),
    ),
    Role.ADMIN: RoleInfo(
        name="Admin",
        color="blue",
        description=(
            "Company management and member management "
            "(cannot transfer ownership)"
        ),
    ),
    Role.MEMBER: RoleInfo(
        name="Member",
        color="green",
        description="Read-only access to company information and member list",
    ),
}
_UNKNOWN_ROLE = RoleInfo(name="Unknown", color="gray", description="Unknown role")


def to_role(value: "Role | str | None") -> Role | None:
    """Coerce a raw role value to a Role, or None when unrecognized."""
    if value is None:
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def get_permissions(role: "Role | str | None") -> frozenset[Permission]:
    """Return every permission granted to the role."""
    resolved = to_role(role)
    if resolved is None:
        return frozenset()
    return ROLE_PERMISSIONS[resolved]


def has_permission(role: "Role | str | None", permission: "Permission | str") -> bool:
    """Check whether the role holds the permission."""
    return permission in get_permissions(role)


def has_any_permission(
    role: "Role | str | None", permissions: Iterable["Permission | str"]
) -> bool:
    """Check whether the role holds at least one of the permissions."""
    granted = get_permissions(role)
    return any(permission in granted for permission in permissions)


def can_assign_role(actor: "Role | str | None", target: "Role | str | None") -> bool:
    """
    Check whether the actor may grant the target role.

    OWNER is assignable only by an OWNER, ADMIN by an OWNER or ADMIN, and
    MEMBER by anyone holding MEMBER_INVITE.
    """
    actor_role = to_role(actor)
    target_role = to_role(target)
    if target_role is Role.OWNER:
        return actor_role is Role.OWNER
    if target_role is Role.ADMIN:
        return actor_role in (Role.OWNER, Role.ADMIN)
    if target_role is Role.MEMBER:
        return has_permission(actor_role, Permission.MEMBER_INVITE)
    return False


def can_modify_user_role(
    actor: "Role | str | None",
    target_current: "Role | str | None",
    target_new: "Role | str | None" = None,
) -> bool:
    """Check whether the actor may change a member's role (optionally to target_new)."""
    actor_role = to_role(actor)
    if to_role(target_current) is Role.OWNER and actor_role is not Role.OWNER:
        return False
    if target_new and not can_assign_role(actor_role, target_new):
        return False
    return has_permission(actor_role, Permission.MEMBER_UPDATE_ROLE)


def can_remove_user(actor: "Role | str | None", target_role: "Role | str | None") -> bool:
    """Check whether the actor may remove a member holding target_role."""
    actor_role = to_role(actor)
    if to_role(target_role) is Role.OWNER and actor_role is not Role.OWNER:
        return False
    return has_permission(actor_role, Permission.MEMBER_REMOVE)


def get_assignable_roles(actor: "Role | str | None") -> list[Role]:
    """Return the roles the actor may grant, most privileged first."""
    return [role for role in Role if can_assign_role(actor, role)]


def get_role_info(role: "Role | str | None") -> RoleInfo:
    """Return badge name, color and description for the role."""
    resolved = to_role(role)
    if resolved is None:
        return _UNKNOWN_ROLE
    return _ROLE_INFO[resolved]


def validate_member_action(
    actor: "Role | str | None",
    action: "MemberAction | str",
    target_current: "Role | str | None" = None,
    target_new: "Role | str | None" = None,
) -> ValidationResult:
    """
    Validate a member action before it is sent to the API.

    Args:
        actor: Role of the user performing the action.
        action: ADD, UPDATE_ROLE or REMOVE.
        target_current: Current role of the affected member.
        target_new: Role to grant (ADD, UPDATE_ROLE).

    Returns:
        ValidationResult with a human readable error when invalid.
    """
    if action == MemberAction.ADD:
        if not has_permission(actor, Permission.MEMBER_INVITE):
            return ValidationResult(False, "Insufficient permissions to invite members")
        if target_new and not can_assign_role(actor, target_new):
            return ValidationResult(False, f"Cannot assign role {_role_label(target_new)}")
    elif action == MemberAction.UPDATE_ROLE:
        if not target_current or not target_new:
            return ValidationResult(False, "Current and new roles are required")
        if not can_modify_user_role(actor, target_current, target_new):
            return ValidationResult(False, "Cannot modify this user's role")
    elif action == MemberAction.REMOVE:
        if not target_current:
            return ValidationResult(False, "Target user role is required")
        if not can_remove_user(actor, target_current):
            return ValidationResult(False, "Cannot remove this user")
    else:
        return ValidationResult(False, "Invalid action")
    return ValidationResult(True)


def _role_label(role: "Role | str") -> str:
    return role.value if isinstance(role, Role) else str(role)
