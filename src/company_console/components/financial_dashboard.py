"""
Financial dashboard tab.

Balance card with add-funds dialog, summary cards, expense and income
tables with their row actions, and the recent transactions list.
"""

import reflex as rx

from company_console.models.finance import IncomeFrequency
from company_console.models.view_models import ExpenseRow, IncomeRow, TransactionRow
from company_console.state import FinanceState


def financial_dashboard() -> rx.Component:
    return rx.vstack(
        rx.cond(
            FinanceState.error,
            rx.callout(FinanceState.error, icon="triangle-alert", color_scheme="red", width="100%"),
        ),
        rx.grid(
            _balance_card(),
            _summary_card("Total Expenses", FinanceState.total_expenses_label, "receipt"),
            _summary_card("Total Income", FinanceState.total_income_label, "trending-up"),
            _summary_card("Unpaid Expenses", FinanceState.unpaid_count, "clock"),
            _summary_card("Transactions", FinanceState.transaction_count, "list"),
            columns="5",
            spacing="3",
            width="100%",
        ),
        rx.grid(
            _expenses_card(),
            _income_card(),
            columns="2",
            spacing="3",
            width="100%",
        ),
        _transactions_card(),
        _credit_dialog(),
        _expense_dialog(),
        _income_dialog(),
        spacing="4",
        width="100%",
    )


def _balance_card() -> rx.Component:
    return rx.box(
        rx.flex(
            rx.text("Account Balance", class_name="muted"),
            rx.icon_button(
                rx.cond(FinanceState.show_balance, rx.icon("eye-off", size=14), rx.icon("eye", size=14)),
                variant="ghost",
                size="1",
                on_click=FinanceState.toggle_balance,
            ),
            justify="between",
            align="center",
        ),
        rx.heading(FinanceState.balance_label, size="6"),
        rx.button(
            rx.icon("plus", size=14),
            "Add Funds",
            size="1",
            variant="soft",
            on_click=FinanceState.set_credit_open(True),
        ),
        class_name="card stat-card",
    )


def _summary_card(label: str, value, icon: str) -> rx.Component:
    return rx.box(
        rx.flex(
            rx.text(label, class_name="muted"),
            rx.icon(icon, size=16),
            justify="between",
            align="center",
        ),
        rx.heading(value, size="5"),
        class_name="card stat-card",
    )


def _expenses_card() -> rx.Component:
    return rx.box(
        _card_header("Expenses", "New Expense", FinanceState.set_expense_open(True)),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell("Description"),
                    rx.table.column_header_cell("Category"),
                    rx.table.column_header_cell("Amount"),
                    rx.table.column_header_cell("Due"),
                    rx.table.column_header_cell(""),
                ),
            ),
            rx.table.body(rx.foreach(FinanceState.expense_rows, _expense_row)),
            width="100%",
        ),
        class_name="card section",
    )


def _expense_row(expense: ExpenseRow) -> rx.Component:
    return rx.table.row(
        rx.table.cell(expense.description),
        rx.table.cell(expense.category),
        rx.table.cell(expense.amount),
        rx.table.cell(expense.due_date),
        rx.table.cell(
            rx.cond(
                expense.is_paid,
                rx.badge("Paid", color_scheme="green"),
                rx.button(
                    "Pay",
                    size="1",
                    on_click=FinanceState.pay_expense(expense.id),
                ),
            ),
        ),
    )


def _income_card() -> rx.Component:
    return rx.box(
        _card_header("Income", "New Income", FinanceState.set_income_open(True)),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell("Source"),
                    rx.table.column_header_cell("Frequency"),
                    rx.table.column_header_cell("Amount"),
                    rx.table.column_header_cell("Received"),
                    rx.table.column_header_cell(""),
                ),
            ),
            rx.table.body(rx.foreach(FinanceState.income_rows, _income_row)),
            width="100%",
        ),
        class_name="card section",
    )


def _income_row(income: IncomeRow) -> rx.Component:
    return rx.table.row(
        rx.table.cell(income.source),
        rx.table.cell(
            rx.hstack(
                rx.text(income.frequency),
                rx.cond(income.is_recurring, rx.icon("repeat", size=12)),
                spacing="1",
            ),
        ),
        rx.table.cell(income.amount),
        rx.table.cell(income.received_at),
        rx.table.cell(
            rx.button(
                "Add to Account",
                size="1",
                variant="soft",
                on_click=FinanceState.add_income_to_account(income.id),
            ),
        ),
    )


def _transactions_card() -> rx.Component:
    return rx.box(
        rx.heading("Recent Transactions", size="4", as_="h2"),
        rx.cond(
            FinanceState.transaction_rows.length() > 0,
            rx.vstack(rx.foreach(FinanceState.transaction_rows, _transaction), width="100%"),
            rx.text("No transactions yet.", class_name="muted"),
        ),
        class_name="card section",
        width="100%",
    )


def _transaction(transaction: TransactionRow) -> rx.Component:
    return rx.flex(
        rx.box(
            rx.text(transaction.description, weight="medium"),
            rx.text(transaction.type, " · ", transaction.created_at, class_name="muted", size="1"),
        ),
        rx.text(
            transaction.amount,
            color=rx.cond(transaction.is_credit, "var(--green-11)", "var(--red-11)"),
            weight="medium",
        ),
        justify="between",
        align="center",
        width="100%",
        class_name="transaction-row",
    )


def _card_header(title: str, action_label: str, on_click) -> rx.Component:
    return rx.flex(
        rx.heading(title, size="4", as_="h2"),
        rx.button(rx.icon("plus", size=14), action_label, size="1", on_click=on_click),
        justify="between",
        align="center",
        margin_bottom="8px",
    )


def _dialog(title: str, open, on_open_change, body: list, on_submit, submit_label: str) -> rx.Component:
    return rx.dialog.root(
        rx.dialog.content(
            rx.dialog.title(title),
            rx.vstack(*body, spacing="3", width="100%"),
            rx.flex(
                rx.dialog.close(rx.button("Cancel", variant="soft", color_scheme="gray")),
                rx.button(submit_label, on_click=on_submit, loading=FinanceState.loading),
                spacing="3",
                justify="end",
                margin_top="16px",
            ),
        ),
        open=open,
        on_open_change=on_open_change,
    )


def _credit_dialog() -> rx.Component:
    return _dialog(
        "Add Funds",
        FinanceState.credit_open,
        FinanceState.set_credit_open,
        [
            rx.input(
                placeholder="Amount",
                type="number",
                value=FinanceState.credit_amount,
                on_change=FinanceState.set_credit_amount,
                width="100%",
            ),
            rx.input(
                placeholder="Description (optional)",
                value=FinanceState.credit_description,
                on_change=FinanceState.set_credit_description,
                width="100%",
            ),
        ],
        FinanceState.submit_credit,
        "Add Funds",
    )


def _expense_dialog() -> rx.Component:
    return _dialog(
        "New Expense",
        FinanceState.expense_open,
        FinanceState.set_expense_open,
        [
            rx.input(
                placeholder="Description",
                value=FinanceState.expense_description,
                on_change=FinanceState.set_expense_description,
                width="100%",
            ),
            rx.input(
                placeholder="Amount",
                type="number",
                value=FinanceState.expense_amount,
                on_change=FinanceState.set_expense_amount,
                width="100%",
            ),
            rx.input(
                placeholder="Category",
                value=FinanceState.expense_category,
                on_change=FinanceState.set_expense_category,
                width="100%",
            ),
            rx.input(
                type="date",
                value=FinanceState.expense_due_date,
                on_change=FinanceState.set_expense_due_date,
                width="100%",
            ),
        ],
        FinanceState.submit_expense,
        "Create Expense",
    )


def _income_dialog() -> rx.Component:
    return _dialog(
        "New Income",
        FinanceState.income_open,
        FinanceState.set_income_open,
        [
            rx.input(
                placeholder="Source",
                value=FinanceState.income_source,
                on_change=FinanceState.set_income_source,
                width="100%",
            ),
            rx.input(
                placeholder="Amount",
                type="number",
                value=FinanceState.income_amount,
                on_change=FinanceState.set_income_amount,
                width="100%",
            ),
            rx.select(
                [frequency.value for frequency in IncomeFrequency],
                value=FinanceState.income_frequency,
                on_change=FinanceState.set_income_frequency,
                width="100%",
            ),
            rx.checkbox(
                "Recurring",
                checked=FinanceState.income_recurring,
                on_change=FinanceState.set_income_recurring,
            ),
        ],
        FinanceState.submit_income,
        "Record Income",
    )
