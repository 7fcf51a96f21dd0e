"""
Reflex UI components for the Company Console.

This package provides the page sections:
- auth_bridge: host-message listener, session bar and sign-in card
- company_table: company search, table and create/edit/delete dialogs
- member_management: members, role changes, invites and ownership transfer
- invitation_panel: invitation list and acceptance form
- financial_dashboard: balance, expenses, income and transactions
- guards: permission-based rendering helpers

All components are functions returning rx.Component, bound to the states
in company_console.state.
"""

from company_console.components.auth_bridge import auth_bridge, session_bar, sign_in_card
from company_console.components.company_table import company_management
from company_console.components.financial_dashboard import financial_dashboard
from company_console.components.guards import permission_button, role_guard
from company_console.components.invitation_panel import (
    accept_invitation_form,
    invitation_panel,
)
from company_console.components.member_management import member_management

__all__ = [
    "accept_invitation_form",
    "auth_bridge",
    "company_management",
    "financial_dashboard",
    "invitation_panel",
    "member_management",
    "permission_button",
    "role_guard",
    "session_bar",
    "sign_in_card",
]
