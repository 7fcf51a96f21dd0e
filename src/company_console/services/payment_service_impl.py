"""
REST implementation of PaymentService.

All paths are relative to the payments API base
(COMPANY_CONSOLE_PAYMENT_API_URL + "/payment/v1"):

    GET   /payments/account/balance
    GET   /payments/account/transactions?page=&limit=
    POST  /payments/account/credit
    GET   /payments/expenses            POST /payments/expenses
    PUT   /payments/expenses/{id}       POST /payments/expenses/{id}/pay
    GET   /payments/income              POST /payments/income
    PUT   /payments/income/{id}         POST /payments/income/{id}/add-to-account
"""

from typing import Any, Mapping

import httpx

from company_console.config import get_settings
from company_console.lib import logs
from company_console.lib.objects import to_payload
from company_console.models.finance import (
    Account,
    CreditRequest,
    Expense,
    ExpenseRequest,
    Income,
    IncomeRequest,
    Transaction,
)
from company_console.services.http import ApiClient, unwrap_list
from company_console.services.payment_service import PaymentService

LOG = logs.logger(__file__)


class PaymentServiceImpl(PaymentService):
    """
    Payment service backed by the payments REST API.

    Attributes:
        client: ApiClient bound to the versioned payments base URL.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client = ApiClient(
            base_url or get_settings().payment_base_url, transport=transport
        )
        LOG.info("PaymentServiceImpl - base_url:%s", self.client.base_url)

    async def get_account_balance(self, token: str | None = None) -> Account:
        data = await self.client.get(
            "/payments/account/balance", "fetch account balance", token
        )
        return Account.from_dict(data)

    async def list_transactions(
        self, token: str | None = None, page: int = 1, limit: int = 20
    ) -> list[Transaction]:
        data = await self.client.get(
            "/payments/account/transactions",
            "fetch transactions",
            token,
            params={"page": page, "limit": limit},
        )
        return [Transaction.from_dict(item) for item in unwrap_list(data, "transactions")]

    async def credit_account(
        self, request: CreditRequest, token: str | None = None
    ) -> Account | None:
        data = await self.client.post(
            "/payments/account/credit", "credit account", token, body=request.to_dict()
        )
        return Account.from_dict(data) if data else None

    async def list_expenses(self, token: str | None = None) -> list[Expense]:
        data = await self.client.get("/payments/expenses", "fetch expenses", token)
        return [Expense.from_dict(item) for item in unwrap_list(data, "expenses")]

    async def create_expense(
        self, request: ExpenseRequest, token: str | None = None
    ) -> Expense:
        data = await self.client.post(
            "/payments/expenses", "create expense", token, body=request.to_dict()
        )
        return Expense.from_dict(data)

    async def update_expense(
        self, expense_id: str, changes: Mapping[str, Any], token: str | None = None
    ) -> Expense | None:
        data = await self.client.put(
            f"/payments/expenses/{expense_id}",
            "update expense",
            token,
            body=to_payload(changes),
        )
        return Expense.from_dict(data) if data else None

    async def pay_expense(self, expense_id: str, token: str | None = None) -> None:
        await self.client.post(f"/payments/expenses/{expense_id}/pay", "pay expense", token)

    async def list_income(self, token: str | None = None) -> list[Income]:
        data = await self.client.get("/payments/income", "fetch income", token)
        return [Income.from_dict(item) for item in unwrap_list(data, "income")]

    async def create_income(
        self, request: IncomeRequest, token: str | None = None
    ) -> Income:
        data = await self.client.post(
            "/payments/income", "create income", token, body=request.to_dict()
        )
        return Income.from_dict(data)

    async def update_income(
        self, income_id: str, changes: Mapping[str, Any], token: str | None = None
    ) -> Income | None:
        data = await self.client.put(
            f"/payments/income/{income_id}",
            "update income",
            token,
            body=to_payload(changes),
        )
        return Income.from_dict(data) if data else None

    async def add_income_to_account(
        self, income_id: str, token: str | None = None
    ) -> None:
        await self.client.post(
            f"/payments/income/{income_id}/add-to-account",
            "add income to account",
            token,
        )
