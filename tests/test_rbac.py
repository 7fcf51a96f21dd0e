import pytest

from company_console import rbac
from company_console.rbac import MemberAction, Permission, Role

ADMIN_PERMISSIONS = {
    Permission.COMPANY_READ,
    Permission.COMPANY_UPDATE,
    Permission.MEMBER_READ,
    Permission.MEMBER_INVITE,
    Permission.MEMBER_REMOVE,
    Permission.MEMBER_UPDATE_ROLE,
    Permission.ROLE_ASSIGN_MEMBER,
    Permission.MANAGE_COMPANY_SETTINGS,
}
MEMBER_PERMISSIONS = {Permission.COMPANY_READ, Permission.MEMBER_READ}
EXPECTED = {
    Role.OWNER: set(Permission),
    Role.ADMIN: ADMIN_PERMISSIONS,
    Role.MEMBER: MEMBER_PERMISSIONS,
}


def test_thirteen_permissions():
    assert len(Permission) == 13


@pytest.mark.parametrize("role", list(Role))
@pytest.mark.parametrize("permission", list(Permission))
def test_has_permission_matches_table(role, permission):
    assert rbac.has_permission(role, permission) is (permission in EXPECTED[role])


def test_plain_strings_are_accepted():
    assert rbac.has_permission("ADMIN", "MEMBER_INVITE")
    assert not rbac.has_permission("MEMBER", "MEMBER_INVITE")


def test_unknown_role_has_no_permissions():
    assert rbac.get_permissions("GUEST") == frozenset()
    assert not rbac.has_permission(None, Permission.COMPANY_READ)


def test_has_any_permission():
    assert rbac.has_any_permission(Role.MEMBER, [Permission.COMPANY_DELETE, Permission.MEMBER_READ])
    assert not rbac.has_any_permission(Role.MEMBER, [Permission.COMPANY_DELETE])
    assert not rbac.has_any_permission(Role.OWNER, [])


@pytest.mark.parametrize("role", list(Role))
def test_only_owner_can_assign_owner(role):
    assert rbac.can_assign_role(role, Role.OWNER) is (role is Role.OWNER)


def test_assignable_roles():
    assert rbac.get_assignable_roles(Role.OWNER) == [Role.OWNER, Role.ADMIN, Role.MEMBER]
    assert rbac.get_assignable_roles(Role.ADMIN) == [Role.ADMIN, Role.MEMBER]
    assert rbac.get_assignable_roles(Role.MEMBER) == []


@pytest.mark.parametrize("new_role", [*Role, None])
def test_member_cannot_modify_owner(new_role):
    assert not rbac.can_modify_user_role(Role.MEMBER, Role.OWNER, new_role)


def test_admin_cannot_modify_owner_or_promote_to_owner():
    assert not rbac.can_modify_user_role(Role.ADMIN, Role.OWNER, Role.MEMBER)
    assert not rbac.can_modify_user_role(Role.ADMIN, Role.MEMBER, Role.OWNER)
    assert rbac.can_modify_user_role(Role.ADMIN, Role.MEMBER, Role.ADMIN)


def test_can_remove_user():
    assert not rbac.can_remove_user(Role.ADMIN, Role.OWNER)
    assert rbac.can_remove_user(Role.ADMIN, Role.MEMBER)
    assert rbac.can_remove_user(Role.OWNER, Role.OWNER)
    assert not rbac.can_remove_user(Role.MEMBER, Role.MEMBER)


def test_validate_add_requires_invite_permission():
    result = rbac.validate_member_action(Role.MEMBER, MemberAction.ADD, None, Role.MEMBER)
    assert not result.is_valid
    assert result.error == "Insufficient permissions to invite members"


def test_validate_add_rejects_unassignable_role():
    result = rbac.validate_member_action(Role.ADMIN, "ADD", None, "OWNER")
    assert result.error == "Cannot assign role OWNER"


def test_validate_update_role():
    assert rbac.validate_member_action(Role.OWNER, "UPDATE_ROLE", "MEMBER", "ADMIN").is_valid
    missing = rbac.validate_member_action(Role.OWNER, "UPDATE_ROLE", "MEMBER")
    assert missing.error == "Current and new roles are required"
    denied = rbac.validate_member_action(Role.ADMIN, "UPDATE_ROLE", "OWNER", "MEMBER")
    assert denied.error == "Cannot modify this user's role"


def test_validate_remove():
    assert rbac.validate_member_action(Role.OWNER, "REMOVE", "ADMIN").is_valid
    assert rbac.validate_member_action(Role.OWNER, "REMOVE").error == "Target user role is required"
    assert rbac.validate_member_action(Role.ADMIN, "REMOVE", "OWNER").error == "Cannot remove this user"


def test_validate_unknown_action():
    assert rbac.validate_member_action(Role.OWNER, "PROMOTE").error == "Invalid action"


def test_role_info():
    assert rbac.get_role_info(Role.OWNER).color == "red"
    assert rbac.get_role_info("ADMIN").name == "Admin"
    assert rbac.get_role_info("GUEST").name == "Unknown"
