"""Confirmation dialog shared by the destructive actions."""

import reflex as rx


def confirm_dialog(
    open: rx.Var,
    title: str,
    description: rx.Component | str,
    on_confirm,
    on_cancel,
    confirm_label: str = "Delete",
) -> rx.Component:
    """
    Build an alert dialog that only runs on_confirm after an explicit click.

    Args:
        open: Bool var controlling visibility.
        title: Dialog title.
        description: Text explaining what will happen.
        on_confirm: Event fired by the confirm button.
        on_cancel: Event fired by the cancel button.
        confirm_label: Text of the confirm button.
    """
    return rx.alert_dialog.root(
        rx.alert_dialog.content(
            rx.alert_dialog.title(title),
            rx.alert_dialog.description(description),
            rx.flex(
                rx.alert_dialog.cancel(
                    rx.button("Cancel", variant="soft", color_scheme="gray", on_click=on_cancel),
                ),
                rx.alert_dialog.action(
                    rx.button(confirm_label, color_scheme="red", on_click=on_confirm),
                ),
                spacing="3",
                justify="end",
                margin_top="16px",
            ),
        ),
        open=open,
    )
