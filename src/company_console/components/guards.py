"""
Permission guards.

Both guards evaluate in the browser against AuthState.permissions, so a
role change (for example after the member list resolves the user's
membership) re-renders the guarded content without a page reload.
"""

import functools
import operator

import reflex as rx

from company_console.rbac import Permission
from company_console.state import AuthState


def has_any(*permissions: Permission | str) -> rx.Var:
    """Var that is true when the active role holds any of the permissions."""
    checks = [
        AuthState.permissions.contains(getattr(permission, "value", permission))
        for permission in permissions
    ]
    return functools.reduce(operator.or_, checks)


def role_guard(
    *permissions: Permission | str,
    child: rx.Component,
    fallback: rx.Component | None = None,
) -> rx.Component:
    """
    Render child when the active role holds any of the permissions.

    Args:
        permissions: Permissions of which at least one is required.
        child: Content shown to permitted roles.
        fallback: Content shown otherwise; nothing when omitted.
    """
    if fallback is None:
        return rx.cond(has_any(*permissions), child)
    return rx.cond(has_any(*permissions), child, fallback)


def permission_button(
    *children: rx.Component | str,
    permissions: tuple[Permission | str, ...],
    **props,
) -> rx.Component:
    """A button rendered only for roles holding any of the permissions."""
    return rx.cond(has_any(*permissions), rx.button(*children, **props))


def no_permission(message: str) -> rx.Component:
    return rx.callout(message, icon="shield-alert", color_scheme="amber", class_name="notice")
