"""
Finance slice: account balance, transactions, expenses and income.

Mutations refetch what they invalidate:

    credit_account          account, transactions
    create/update_expense   expenses
    pay_expense             expenses, account, transactions
    create/update_income    income
    add_income_to_account   income, account, transactions
"""

import asyncio
import math
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from company_console.models.finance import (
    Account,
    CreditRequest,
    DashboardSnapshot,
    Expense,
    ExpenseRequest,
    Income,
    IncomeFrequency,
    IncomeRequest,
    Transaction,
)
from company_console.store.actions import Action, ThunkRejected, async_thunk
from company_console.store.slice import Slice

REQUIRED_FIELDS_ERROR = "Please fill in all required fields"
INVALID_AMOUNT_ERROR = "Please enter a valid amount"


@dataclass
class FinanceSliceState:
    account: Account | None = None
    transactions: list[Transaction] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    income: list[Income] = field(default_factory=list)
    loading: bool = False
    error: str | None = None


finance_slice: Slice[FinanceSliceState] = Slice("finance", FinanceSliceState)


def _positive_amount(value: Any) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ThunkRejected(INVALID_AMOUNT_ERROR) from None
    if not math.isfinite(amount) or amount <= 0:
        raise ThunkRejected(INVALID_AMOUNT_ERROR)
    return amount


@async_thunk("finance/fetchDashboard", error="Failed to load financial data")
async def fetch_dashboard(ctx) -> DashboardSnapshot:
    payments = ctx.services.payments
    account, transactions, expenses, income = await asyncio.gather(
        payments.get_account_balance(ctx.token),
        payments.list_transactions(ctx.token),
        payments.list_expenses(ctx.token),
        payments.list_income(ctx.token),
    )
    return DashboardSnapshot(account, transactions, expenses, income)


@async_thunk("finance/fetchAccountBalance", error="Failed to fetch account balance")
async def fetch_account_balance(ctx) -> Account:
    return await ctx.services.payments.get_account_balance(ctx.token)


@async_thunk("finance/fetchTransactions", error="Failed to fetch transactions")
async def fetch_transactions(ctx, page: int = 1, limit: int = 20) -> list[Transaction]:
    return await ctx.services.payments.list_transactions(ctx.token, page, limit)


@async_thunk("finance/fetchExpenses", error="Failed to fetch expenses")
async def fetch_expenses(ctx) -> list[Expense]:
    return await ctx.services.payments.list_expenses(ctx.token)


@async_thunk("finance/fetchIncome", error="Failed to fetch income")
async def fetch_income(ctx) -> list[Income]:
    return await ctx.services.payments.list_income(ctx.token)


async def _refresh_balance(ctx) -> None:
    await ctx.run(fetch_account_balance)
    await ctx.run(fetch_transactions)


@async_thunk("finance/creditAccount", error="Failed to add funds")
async def credit_account(ctx, amount: Any, description: str = "") -> float:
    value = _positive_amount(amount)
    request = CreditRequest(value, description.strip() or "Account credit")
    await ctx.services.payments.credit_account(request, ctx.token)
    await _refresh_balance(ctx)
    return value


@async_thunk("finance/createExpense", error="Failed to create expense")
async def create_expense(
    ctx,
    description: str,
    amount: Any,
    category: str,
    due_date: str | None = None,
) -> Expense:
    if not description.strip() or not category.strip() or amount in (None, ""):
        raise ThunkRejected(REQUIRED_FIELDS_ERROR)
    request = ExpenseRequest(
        description=description.strip(),
        amount=_positive_amount(amount),
        category=category.strip(),
        due_date=due_date or None,
    )
    expense = await ctx.services.payments.create_expense(request, ctx.token)
    await ctx.run(fetch_expenses)
    return expense


@async_thunk("finance/updateExpense", error="Failed to update expense")
async def update_expense(ctx, expense_id: str, changes: Mapping[str, Any]) -> str:
    await ctx.services.payments.update_expense(expense_id, changes, ctx.token)
    await ctx.run(fetch_expenses)
    return expense_id


@async_thunk("finance/payExpense", error="Failed to pay expense")
async def pay_expense(ctx, expense_id: str) -> str:
    await ctx.services.payments.pay_expense(expense_id, ctx.token)
    await ctx.run(fetch_expenses)
    await _refresh_balance(ctx)
    return expense_id


@async_thunk("finance/createIncome", error="Failed to create income")
async def create_income(
    ctx,
    source: str,
    amount: Any,
    frequency: str = IncomeFrequency.ONE_TIME.value,
    is_recurring: bool = False,
) -> Income:
    if not source.strip() or amount in (None, ""):
        raise ThunkRejected(REQUIRED_FIELDS_ERROR)
    request = IncomeRequest(
        source=source.strip(),
        amount=_positive_amount(amount),
        frequency=frequency,
        is_recurring=is_recurring,
    )
    income = await ctx.services.payments.create_income(request, ctx.token)
    await ctx.run(fetch_income)
    return income


@async_thunk("finance/updateIncome", error="Failed to update income")
async def update_income(ctx, income_id: str, changes: Mapping[str, Any]) -> str:
    await ctx.services.payments.update_income(income_id, changes, ctx.token)
    await ctx.run(fetch_income)
    return income_id


@async_thunk("finance/addIncomeToAccount", error="Failed to add income to account")
async def add_income_to_account(ctx, income_id: str) -> str:
    await ctx.services.payments.add_income_to_account(income_id, ctx.token)
    await ctx.run(fetch_income)
    await _refresh_balance(ctx)
    return income_id


finance_slice.track(
    fetch_dashboard,
    fetch_account_balance,
    fetch_transactions,
    fetch_expenses,
    fetch_income,
    credit_account,
    create_expense,
    update_expense,
    pay_expense,
    create_income,
    update_income,
    add_income_to_account,
)


@finance_slice.on(fetch_dashboard.fulfilled)
def _dashboard_loaded(state: FinanceSliceState, action: Action) -> FinanceSliceState:
    snapshot: DashboardSnapshot = action.payload
    return replace(
        state,
        loading=False,
        account=snapshot.account,
        transactions=list(snapshot.transactions or []),
        expenses=list(snapshot.expenses or []),
        income=list(snapshot.income or []),
    )


@finance_slice.on(fetch_account_balance.fulfilled)
def _account_loaded(state: FinanceSliceState, action: Action) -> FinanceSliceState:
    return replace(state, loading=False, account=action.payload)


@finance_slice.on(fetch_transactions.fulfilled)
def _transactions_loaded(state: FinanceSliceState, action: Action) -> FinanceSliceState:
    return replace(state, loading=False, transactions=list(action.payload))


@finance_slice.on(fetch_expenses.fulfilled)
def _expenses_loaded(state: FinanceSliceState, action: Action) -> FinanceSliceState:
    return replace(state, loading=False, expenses=list(action.payload))


@finance_slice.on(fetch_income.fulfilled)
def _income_loaded(state: FinanceSliceState, action: Action) -> FinanceSliceState:
    return replace(state, loading=False, income=list(action.payload))
