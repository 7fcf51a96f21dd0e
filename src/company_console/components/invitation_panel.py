"""Invitation list with resend and cancel actions, and the invitation acceptance form."""

import reflex as rx

from company_console.models.view_models import InvitationRow
from company_console.state import MemberState


def invitation_panel() -> rx.Component:
    return rx.box(
        rx.flex(
            rx.heading("Invitations", size="4", as_="h2"),
            rx.badge(MemberState.pending_invitation_count, " pending", variant="soft"),
            spacing="3",
            align="center",
        ),
        rx.cond(
            MemberState.invitations.length() > 0,
            rx.table.root(
                rx.table.header(
                    rx.table.row(
                        rx.table.column_header_cell("Email"),
                        rx.table.column_header_cell("Role"),
                        rx.table.column_header_cell("Status"),
                        rx.table.column_header_cell("Sent"),
                        rx.table.column_header_cell("Expires"),
                        rx.table.column_header_cell("Actions"),
                    ),
                ),
                rx.table.body(rx.foreach(MemberState.invitation_rows, _row)),
                width="100%",
            ),
            rx.text("No invitations sent yet.", class_name="muted"),
        ),
        class_name="card section",
        width="100%",
    )


def _row(invitation: InvitationRow) -> rx.Component:
    return rx.table.row(
        rx.table.cell(invitation.email),
        rx.table.cell(rx.badge(invitation.role, color_scheme=invitation.role_color)),
        rx.table.cell(rx.badge(invitation.status, color_scheme=invitation.status_color)),
        rx.table.cell(invitation.invited_at),
        rx.table.cell(invitation.expires_at),
        rx.table.cell(
            rx.cond(
                invitation.is_pending,
                rx.hstack(
                    rx.button(
                        "Resend",
                        size="1",
                        variant="soft",
                        on_click=MemberState.resend_invitation(invitation.id),
                    ),
                    rx.button(
                        "Cancel",
                        size="1",
                        variant="soft",
                        color_scheme="red",
                        on_click=MemberState.cancel_invitation(invitation.id),
                    ),
                    spacing="2",
                ),
            ),
        ),
    )


def accept_invitation_form() -> rx.Component:
    """Token input for accepting an invitation; available to every signed-in user."""
    return rx.flex(
        rx.input(
            placeholder="Invitation token",
            value=MemberState.accept_token,
            on_change=MemberState.set_accept_token,
        ),
        rx.button(
            "Accept Invitation",
            variant="outline",
            disabled=MemberState.accept_token == "",
            on_click=MemberState.accept_invitation,
        ),
        spacing="3",
        margin_top="16px",
    )
