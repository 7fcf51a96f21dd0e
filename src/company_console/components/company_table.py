"""
Company management tab.

Search box, company table with row actions, and the create/edit and
delete dialogs. Add and edit need COMPANY_UPDATE; delete needs
COMPANY_DELETE.
"""

import reflex as rx

from company_console.components.company_form import company_form_dialog
from company_console.components.confirm_dialog import confirm_dialog
from company_console.components.guards import has_any, permission_button
from company_console.models.view_models import CompanyRow
from company_console.rbac import Permission
from company_console.state import CompanyState


def company_management() -> rx.Component:
    return rx.box(
        _toolbar(),
        rx.cond(
            CompanyState.loading & (CompanyState.companies.length() == 0),
            _loader(),
            rx.cond(CompanyState.is_empty, _empty(), _table()),
        ),
        company_form_dialog(),
        confirm_dialog(
            open=CompanyState.delete_dialog_open,
            title="Delete Company",
            description=rx.text(
                "Are you sure you want to delete ",
                rx.text.strong(CompanyState.delete_target_name),
                "? This action cannot be undone.",
            ),
            on_confirm=CompanyState.confirm_delete,
            on_cancel=CompanyState.cancel_delete,
        ),
        class_name="card section",
    )


def _toolbar() -> rx.Component:
    return rx.flex(
        rx.box(
            rx.icon("search", class_name="input-icon"),
            rx.input(
                placeholder="Search companies by name, address, phone or email...",
                value=CompanyState.search_query,
                on_change=CompanyState.set_search_query,
                class_name="search-input",
                debounce=300,
            ),
            class_name="input-with-icon",
        ),
        rx.checkbox(
            "My companies",
            checked=CompanyState.show_mine,
            on_change=CompanyState.toggle_show_mine,
        ),
        permission_button(
            rx.icon("plus", size=16),
            "Add Company",
            permissions=(Permission.COMPANY_UPDATE,),
            on_click=CompanyState.open_create_form,
        ),
        spacing="3",
        align="center",
        class_name="toolbar",
    )


def _table() -> rx.Component:
    return rx.box(
        rx.text(CompanyState.result_summary, class_name="muted results-summary"),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell("Name"),
                    rx.table.column_header_cell("Address"),
                    rx.table.column_header_cell("Phone"),
                    rx.table.column_header_cell("Email"),
                    rx.table.column_header_cell("Status"),
                    rx.table.column_header_cell("Actions"),
                ),
            ),
            rx.table.body(rx.foreach(CompanyState.company_rows, _row)),
            width="100%",
        ),
    )


def _row(company: CompanyRow) -> rx.Component:
    return rx.table.row(
        rx.table.cell(
            rx.link(company.name, on_click=CompanyState.select_company(company.id)),
        ),
        rx.table.cell(company.address),
        rx.table.cell(company.phone),
        rx.table.cell(rx.cond(company.email != "", company.email, "-")),
        rx.table.cell(
            rx.badge(
                company.status,
                color_scheme=rx.cond(company.is_active, "green", "gray"),
            ),
        ),
        rx.table.cell(
            rx.hstack(
                rx.cond(
                    has_any(Permission.COMPANY_UPDATE),
                    rx.icon_button(
                        rx.icon("pencil", size=14),
                        variant="ghost",
                        on_click=CompanyState.open_edit_form(company.id),
                        title="Edit",
                    ),
                ),
                rx.cond(
                    has_any(Permission.COMPANY_DELETE),
                    rx.icon_button(
                        rx.icon("trash-2", size=14),
                        variant="ghost",
                        color_scheme="red",
                        on_click=CompanyState.request_delete(company.id),
                        title="Delete",
                    ),
                ),
                spacing="1",
            ),
        ),
    )


def _empty() -> rx.Component:
    return rx.box(
        rx.icon("building-2", class_name="empty-icon", size=48),
        rx.heading("No companies found", size="3", as_="h3"),
        rx.cond(
            CompanyState.search_query != "",
            rx.text(
                rx.text.span('No results match "'),
                rx.text.span(CompanyState.search_query),
                rx.text.span('". Try a different search term.'),
                class_name="muted",
            ),
            rx.text("No companies available.", class_name="muted"),
        ),
        class_name="empty-state",
    )


def _loader() -> rx.Component:
    return rx.box(
        rx.box(class_name="spinner"),
        rx.text("Loading companies...", class_name="muted"),
        class_name="loading-state",
    )
