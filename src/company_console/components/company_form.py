"""
Company create/edit dialog.

The same form serves both modes; CompanyState.selected_company decides
whether saving creates or updates. Validation runs server-side in
save_company and the messages are shown under each field.
"""

import reflex as rx

from company_console.models.company import CompanyStatus
from company_console.state import CompanyState


def company_form_dialog() -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(CompanyState.form_title),
            rx.dialog.description(
                rx.cond(
                    CompanyState.is_editing,
                    "Update the company information.",
                    "Enter the details of the new company.",
                ),
                class_name="muted",
            ),
            rx.vstack(
                _field("Name", "name", CompanyState.form_name, CompanyState.set_form_name),
                _field(
                    "Address",
                    "address",
                    CompanyState.form_address,
                    CompanyState.set_form_address,
                ),
                _field("Phone", "phone", CompanyState.form_phone, CompanyState.set_form_phone),
                _field(
                    "Email",
                    "email",
                    CompanyState.form_email,
                    CompanyState.set_form_email,
                    required=False,
                ),
                _field(
                    "Website",
                    "website",
                    CompanyState.form_website,
                    CompanyState.set_form_website,
                    required=False,
                ),
                rx.box(
                    rx.text("Status", as_="label", class_name="field-label"),
                    rx.select(
                        [status.value for status in CompanyStatus],
                        value=CompanyState.form_status,
                        on_change=CompanyState.set_form_status,
                        width="100%",
                    ),
                    width="100%",
                ),
                spacing="3",
                width="100%",
            ),
            rx.flex(
                rx.dialog.close(
                    rx.button("Cancel", variant="soft", color_scheme="gray"),
                ),
                rx.button(
                    rx.cond(CompanyState.is_editing, "Save Changes", "Create Company"),
                    on_click=CompanyState.save_company,
                    loading=CompanyState.loading,
                ),
                spacing="3",
                justify="end",
                margin_top="16px",
            ),
        ),
        open=CompanyState.form_open,
        on_open_change=CompanyState.set_form_open,
    )


def _field(label: str, key: str, value, on_change, required: bool = True) -> rx.Component:
    """Labelled text input with its validation message."""
    return rx.box(
        rx.text(label + (" *" if required else ""), as_="label", class_name="field-label"),
        rx.input(value=value, on_change=on_change, width="100%"),
        rx.cond(
            CompanyState.form_errors.contains(key),
            rx.text(CompanyState.form_errors[key], class_name="field-error", size="1"),
        ),
        width="100%",
    )
