"""Thin HTTP client for the finance tracker API.

Every call returns an :class:`ApiResponse`. Failures never raise: network
errors, non-2xx answers and unparseable bodies all come back as
``ApiResponse(data=None, error={"error": message})``.
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"

# amounts are stored as NUMERIC(10, 2)
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


@dataclass
class ApiResponse:
    data: Any = None
    error: Optional[dict] = None

    @property
    def ok(self):
        return self.error is None


def failure(message):
    return ApiResponse(data=None, error={"error": message})


def parse_amount(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def check_transaction(transaction):
    """Return an error message for a transaction that must not be sent, else None."""
    amount = parse_amount(transaction.get("amount"))
    if amount is None or amount <= 0:
        return "Amount must be greater than zero"
    if amount != amount.quantize(CENT):
        return "Amount must have at most two decimal places"
    if amount > MAX_AMOUNT:
        return "Amount is too large"
    if transaction.get("type") == "expense" and not transaction.get("category_id"):
        return "Expense transactions need a category"
    return None


class FinanceClient:
    def __init__(self, base_url=None, session=None):
        self.base_url = (base_url or os.getenv("API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.categories = CategoriesApi(self)
        self.transactions = TransactionsApi(self)
        self.budgets = BudgetsApi(self)
        self.dashboard = DashboardApi(self)

    def request(self, method, endpoint, params=None, json=None):
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{endpoint}",
                params=params,
                json=json,
                headers={"Content-Type": "application/json"},
            )
        except requests.RequestException as e:
            logger.error("API error: %s", e)
            return failure(str(e) or "Network error")

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            if not isinstance(body, dict) or "error" not in body:
                body = {"error": "Unknown error"}
            return ApiResponse(data=None, error=body)

        try:
            return ApiResponse(data=response.json())
        except ValueError as e:
            logger.error("API error: %s", e)
            return failure("Invalid JSON in response")

    def close(self):
        self.session.close()


def drop_empty(params):
    return {k: v for k, v in params.items() if v}


class CategoriesApi:
    def __init__(self, client):
        self.client = client

    def get_all(self):
        return self.client.request("GET", "/categories")

    def create(self, name, icon=None, is_default=None):
        body = {"name": name}
        if icon is not None:
            body["icon"] = icon
        if is_default is not None:
            body["is_default"] = is_default
        return self.client.request("POST", "/categories", json=body)

    def delete(self, id):
        return self.client.request("DELETE", f"/categories/{id}")


class TransactionsApi:
    def __init__(self, client):
        self.client = client

    def get_all(self, limit=None, type=None, category_id=None):
        params = drop_empty({"limit": limit, "type": type, "category_id": category_id})
        return self.client.request("GET", "/transactions", params=params or None)

    def create(self, transaction):
        problem = check_transaction(transaction)
        if problem:
            return failure(problem)
        return self.client.request("POST", "/transactions", json=transaction)

    def update(self, id, transaction):
        problem = check_transaction(transaction)
        if problem:
            return failure(problem)
        return self.client.request("PUT", f"/transactions/{id}", json=transaction)

    def delete(self, id):
        return self.client.request("DELETE", f"/transactions/{id}")


class BudgetsApi:
    def __init__(self, client):
        self.client = client

    def get_all(self, month=None, year=None):
        params = drop_empty({"month": month, "year": year})
        return self.client.request("GET", "/budgets", params=params or None)

    def create(self, category_id, amount, month, year):
        body = {"category_id": category_id, "amount": amount, "month": month, "year": year}
        return self.client.request("POST", "/budgets", json=body)

    def delete(self, id):
        return self.client.request("DELETE", f"/budgets/{id}")


class DashboardApi:
    def __init__(self, client):
        self.client = client

    def get_stats(self, month=None, year=None):
        params = drop_empty({"month": month, "year": year})
        return self.client.request("GET", "/dashboard/stats", params=params or None)
