"""
Member management tab.

Lists the active company's members with role badges. Role changes and
removals are offered per row only where the acting role may perform
them; invite and ownership transfer sit behind their own permissions.
"""

import reflex as rx

from company_console.components.confirm_dialog import confirm_dialog
from company_console.components.guards import no_permission, permission_button, role_guard
from company_console.components.invitation_panel import invitation_panel
from company_console.models.view_models import MemberRow
from company_console.rbac import Permission
from company_console.state import MemberState


def member_management() -> rx.Component:
    return role_guard(
        Permission.MEMBER_READ,
        child=rx.cond(
            MemberState.active_company_id != "",
            _content(),
            rx.box(
                rx.icon("users", class_name="empty-icon", size=48),
                rx.text("Select a company to manage its members.", class_name="muted"),
                class_name="card empty-state",
            ),
        ),
        fallback=no_permission("You don't have permission to view members."),
    )


def _content() -> rx.Component:
    return rx.vstack(
        rx.box(
            rx.flex(
                rx.box(
                    rx.heading("Members", size="4", as_="h2"),
                    rx.text(MemberState.active_company_name, class_name="muted"),
                ),
                rx.spacer(),
                permission_button(
                    rx.icon("user-plus", size=16),
                    "Invite Member",
                    permissions=(Permission.MEMBER_INVITE,),
                    on_click=MemberState.set_invite_open(True),
                ),
                permission_button(
                    rx.icon("crown", size=16),
                    "Transfer Ownership",
                    permissions=(Permission.COMPANY_TRANSFER_OWNERSHIP,),
                    variant="outline",
                    color_scheme="red",
                    on_click=MemberState.set_transfer_open(True),
                ),
                spacing="3",
                align="center",
                class_name="toolbar",
            ),
            rx.cond(
                MemberState.loading & (MemberState.members.length() == 0),
                rx.box(rx.box(class_name="spinner"), class_name="loading-state"),
                _table(),
            ),
            class_name="card section",
            width="100%",
        ),
        role_guard(Permission.MEMBER_INVITE, child=invitation_panel()),
        _invite_dialog(),
        _transfer_dialog(),
        confirm_dialog(
            open=MemberState.remove_dialog_open,
            title="Remove Member",
            description="This member will lose access to the company.",
            on_confirm=MemberState.confirm_remove,
            on_cancel=MemberState.cancel_remove,
            confirm_label="Remove",
        ),
        spacing="4",
        width="100%",
    )


def _table() -> rx.Component:
    return rx.table.root(
        rx.table.header(
            rx.table.row(
                rx.table.column_header_cell("User"),
                rx.table.column_header_cell("Role"),
                rx.table.column_header_cell("Status"),
                rx.table.column_header_cell("Joined"),
                rx.table.column_header_cell("Actions"),
            ),
        ),
        rx.table.body(rx.foreach(MemberState.member_rows, _row)),
        width="100%",
    )


def _row(member: MemberRow) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.hstack(
                rx.text(member.user_id),
                rx.cond(member.is_current_user, rx.badge("You", variant="outline")),
                spacing="2",
            ),
        ),
        rx.table.cell(
            rx.cond(
                member.can_modify,
                rx.select(
                    member.assignable_roles,
                    value=member.role,
                    on_change=lambda role: MemberState.change_role(member.user_id, role),
                    size="1",
                ),
                rx.badge(member.role_name, color_scheme=member.role_color),
            ),
        ),
        rx.table.cell(member.status),
        rx.table.cell(member.joined_at),
        rx.table.cell(
            rx.cond(
                member.can_remove,
                rx.icon_button(
                    rx.icon("user-minus", size=14),
                    variant="ghost",
                    color_scheme="red",
                    on_click=MemberState.request_remove(member.user_id),
                    title="Remove",
                ),
            ),
        ),
    )


def _invite_dialog() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title("Invite Member"),
            rx.dialog.description(
                "Send an invitation email to join this company.", class_name="muted"
            ),
            rx.vstack(
                rx.input(
                    placeholder="Email address",
                    type="email",
                    value=MemberState.invite_email,
                    on_change=MemberState.set_invite_email,
                    width="100%",
                ),
                rx.select(
                    MemberState.invite_roles,
                    value=MemberState.invite_role,
                    on_change=MemberState.set_invite_role,
                    width="100%",
                ),
                rx.text_area(
                    placeholder="Optional message",
                    value=MemberState.invite_message,
                    on_change=MemberState.set_invite_message,
                    width="100%",
                ),
                spacing="3",
                width="100%",
            ),
            rx.flex(
                rx.dialog.close(rx.button("Cancel", variant="soft", color_scheme="gray")),
                rx.button(
                    "Send Invitation",
                    on_click=MemberState.send_invite,
                    loading=MemberState.loading,
                ),
                spacing="3",
                justify="end",
                margin_top="16px",
            ),
        ),
        open=MemberState.invite_open,
        on_open_change=MemberState.set_invite_open,
    )


def _transfer_dialog() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title("Transfer Ownership"),
            rx.callout(
                "You will lose owner privileges. This cannot be undone by you.",
                icon="triangle-alert",
                color_scheme="red",
            ),
            rx.select(
                MemberState.transfer_candidates,
                placeholder="Select the new owner",
                value=MemberState.transfer_target,
                on_change=MemberState.set_transfer_target,
                width="100%",
                margin_top="12px",
            ),
            rx.flex(
                rx.dialog.close(rx.button("Cancel", variant="soft", color_scheme="gray")),
                rx.button(
                    "Transfer",
                    color_scheme="red",
                    disabled=MemberState.transfer_target == "",
                    on_click=MemberState.confirm_transfer,
                ),
                spacing="3",
                justify="end",
                margin_top="16px",
            ),
        ),
        open=MemberState.transfer_open,
        on_open_change=MemberState.set_transfer_open,
    )
