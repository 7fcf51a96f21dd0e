"""Shared fixtures: a fake payments API and service bundles for store tests."""

import json

import httpx
import pytest

from company_console.models.auth import AuthGrant, User
from company_console.services import Services
from company_console.services.company_service_demo import DEMO_USER_ID, DemoCompanyService
from company_console.services.payment_service_impl import PaymentServiceImpl
from company_console.store import create_store
from company_console.store.slices.auth import set_auth

PAYMENTS_URL = "http://payments.test/api/payment/v1"


class FakePaymentsApi:
    """In-memory payments API served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.balance = 100.0
        self.transactions: list[dict] = []
        self.expenses: list[dict] = [
            {"id": "e1", "description": "Rent", "amount": 40.0, "category": "office", "isPaid": False}
        ]
        self.income: list[dict] = [
            {"id": "i1", "source": "Consulting", "amount": 25.0, "frequency": "one-time"}
        ]
        self.calls: list[str] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def _ledger(self, type_: str, amount: float, description: str) -> None:
        self.transactions.insert(
            0,
            {
                "id": f"t{len(self.transactions) + 1}",
                "type": type_,
                "amount": amount,
                "description": description,
                "createdAt": "2024-01-01T00:00:00Z",
            },
        )

    def _update(self, items: list[dict], path: str, changes: dict) -> httpx.Response:
        item_id = path.split("/")[-1]
        for item in items:
            if item["id"] == item_id:
                item.update(changes)
                return httpx.Response(200, json=item)
        return httpx.Response(404, json={"message": f"{item_id} not found"})

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/payment/v1")
        self.calls.append(f"{request.method} {path}")
        body = json.loads(request.content) if request.content else {}

        if request.method == "GET" and path == "/payments/account/balance":
            return httpx.Response(200, json={"userId": "u1", "balance": self.balance, "currency": "USD"})
        if request.method == "GET" and path == "/payments/account/transactions":
            return httpx.Response(200, json={"transactions": self.transactions})
        if request.method == "POST" and path == "/payments/account/credit":
            self.balance += body["amount"]
            self._ledger("ACCOUNT_CREDIT", body["amount"], body["description"])
            return httpx.Response(200, json={"balance": self.balance})
        if request.method == "GET" and path == "/payments/expenses":
            return httpx.Response(200, json=self.expenses)
        if request.method == "POST" and path == "/payments/expenses":
            expense = {"id": f"e{len(self.expenses) + 1}", "isPaid": False, **body}
            self.expenses.append(expense)
            return httpx.Response(201, json=expense)
        if request.method == "PUT" and path.startswith("/payments/expenses/"):
            return self._update(self.expenses, path, body)
        if request.method == "POST" and path.endswith("/pay"):
            expense_id = path.split("/")[-2]
            for expense in self.expenses:
                if expense["id"] == expense_id:
                    expense["isPaid"] = True
                    self.balance -= expense["amount"]
                    self._ledger("PAYMENT", expense["amount"], expense["description"])
            return httpx.Response(204)
        if request.method == "GET" and path == "/payments/income":
            return httpx.Response(200, json={"income": self.income})
        if request.method == "POST" and path == "/payments/income":
            income = {"id": f"i{len(self.income) + 1}", **body}
            self.income.append(income)
            return httpx.Response(201, json=income)
        if request.method == "PUT" and path.startswith("/payments/income/"):
            return self._update(self.income, path, body)
        if request.method == "POST" and path.endswith("/add-to-account"):
            income_id = path.split("/")[-2]
            for income in self.income:
                if income["id"] == income_id:
                    self.balance += income["amount"]
                    self._ledger("INCOME", income["amount"], income["source"])
            return httpx.Response(204)
        return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})


@pytest.fixture
def payments_api():
    return FakePaymentsApi()


@pytest.fixture
def services(payments_api):
    return Services(
        companies=DemoCompanyService(),
        payments=PaymentServiceImpl(PAYMENTS_URL, transport=payments_api.transport()),
    )


@pytest.fixture
def store(services):
    return create_store(services)


def sign_in(store, role: str = "OWNER", user_id: str = DEMO_USER_ID) -> None:
    """Put a session into the store's auth slice."""
    store.dispatch(
        set_auth(AuthGrant(user=User(id=user_id), access_token="token-1", role=role))
    )


@pytest.fixture
def login(store):
    def _login(role: str = "OWNER", user_id: str = DEMO_USER_ID) -> None:
        sign_in(store, role, user_id)

    return _login
