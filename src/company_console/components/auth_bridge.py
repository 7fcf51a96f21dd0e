"""
Session components: the host-message listener, session bar and sign-in card.

auth_bridge renders nothing visible; mounting it arms the browser
listener that forwards host auth messages to AuthState.
"""

import reflex as rx

from company_console.rbac import Role
from company_console.state import AuthState


def auth_bridge() -> rx.Component:
    return rx.box(display="none", on_mount=AuthState.listen_for_host)


def session_bar() -> rx.Component:
    """Signed-in user, active company and role badge."""
    return rx.flex(
        rx.hstack(
            rx.icon("circle-user", size=18),
            rx.text(AuthState.user_label, weight="medium"),
            rx.text("·", class_name="muted"),
            rx.text(AuthState.active_company_name, class_name="muted"),
            spacing="2",
            align="center",
        ),
        rx.hstack(
            rx.tooltip(
                rx.badge(AuthState.role_name, color_scheme=AuthState.role_color),
                content=AuthState.role_description,
            ),
            rx.cond(
                AuthState.is_demo,
                rx.select(
                    [role.value for role in Role],
                    value=AuthState.role,
                    on_change=AuthState.switch_role,
                    size="1",
                ),
            ),
            rx.cond(
                AuthState.is_authenticated,
                rx.button("Sign out", size="1", variant="ghost", on_click=AuthState.sign_out),
            ),
            spacing="2",
            align="center",
        ),
        justify="between",
        align="center",
        class_name="card session-bar",
    )


def sign_in_card() -> rx.Component:
    """Email and password sign-in, shown until credentials are present."""
    return rx.cond(
        AuthState.is_authenticated,
        rx.fragment(),
        rx.box(
            rx.heading("Sign in to a company", size="4", as_="h2"),
            rx.text(
                "Embedded sessions sign in automatically; use this form otherwise.",
                class_name="muted",
            ),
            rx.flex(
                rx.input(
                    placeholder="Company ID",
                    value=AuthState.sign_in_company_id,
                    on_change=AuthState.set_sign_in_company_id,
                ),
                rx.input(
                    placeholder="Email",
                    type="email",
                    value=AuthState.sign_in_email,
                    on_change=AuthState.set_sign_in_email,
                ),
                rx.input(
                    placeholder="Password",
                    type="password",
                    value=AuthState.sign_in_password,
                    on_change=AuthState.set_sign_in_password,
                ),
                rx.button(
                    "Sign in",
                    on_click=AuthState.sign_in,
                    loading=AuthState.is_authenticating,
                ),
                spacing="3",
                wrap="wrap",
                margin_top="8px",
            ),
            rx.cond(
                AuthState.auth_error,
                rx.text(AuthState.auth_error, class_name="field-error"),
            ),
            class_name="card section",
        ),
    )
