"""
Reflex application entry point for the Company Console.

This module initializes the Reflex app and defines the main page layout:
a session bar, then tabs for company management, member management and
the financial dashboard.
"""

import reflex as rx

from company_console.components import (
    accept_invitation_form,
    auth_bridge,
    company_management,
    financial_dashboard,
    member_management,
    session_bar,
    sign_in_card,
)
from company_console.config import get_settings
from company_console.lib import logs
from company_console.state import CompanyState, FinanceState, MemberState

LOG = logs.logger(__file__)

APP_TITLE = "Company Console"
APP_SUBTITLE = "Manage companies, members and finances."

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap"

settings = get_settings()
LOG.info(
    "Company Console - api:%s payments:%s service:%s",
    settings.api_url,
    settings.payment_base_url,
    settings.service_kind,
)


def page_header() -> rx.Component:
    """Build the hero text area at the top of the page."""
    return rx.box(
        rx.heading(APP_TITLE, size="6", as_="h1"),
        rx.text(APP_SUBTITLE, class_name="muted"),
        class_name="page-header",
    )


def tabs() -> rx.Component:
    return rx.tabs.root(
        rx.tabs.list(
            rx.tabs.trigger("Company Management", value="companies"),
            rx.tabs.trigger("Member Management", value="members"),
            rx.tabs.trigger(
                "Financial Dashboard", value="finance", on_click=FinanceState.load_dashboard
            ),
        ),
        rx.tabs.content(company_management(), value="companies", padding_top="16px"),
        rx.tabs.content(
            member_management(),
            value="members",
            padding_top="16px",
            on_mount=MemberState.load_members,
        ),
        rx.tabs.content(financial_dashboard(), value="finance", padding_top="16px"),
        default_value="companies",
    )


def index() -> rx.Component:
    """
    Build the main page layout.

    Returns:
        The complete page component with header, session and tabs.
    """
    return rx.box(
        auth_bridge(),
        rx.box(
            page_header(),
            session_bar(),
            sign_in_card(),
            tabs(),
            accept_invitation_form(),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
)

app.add_page(
    index,
    title=APP_TITLE,
    on_load=CompanyState.load_companies,
)


def main() -> None:
    """Entrypoint used by `company-console`; runs the development server."""
    import subprocess
    import sys

    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--frontend-port", str(settings.port)]
    )


if __name__ == "__main__":
    main()
