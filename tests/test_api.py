"""
API tests.

The Supabase-backed ReportService is replaced through `app.dependency_overrides` with
one over in-memory repositories. Endpoints that depend on the current time get data
created relative to `datetime.now`.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from factories import at, item, product, txn

from pos_analytics.api.dependencies import get_report_service
from pos_analytics.api.main import create_app
from pos_analytics.config import Settings
from pos_analytics.domain.transaction import TransactionStatus
from pos_analytics.repositories.memory import (
    InMemoryOperatorRepository,
    InMemoryProductRepository,
    InMemoryTransactionRepository,
)
from pos_analytics.services.report_service import ReportService


class BrokenTransactionRepository:
    def query(self, window, status=None, operator_id=None):
        raise RuntimeError("Failed to query transactions: timeout")


def build_service(transactions=(), broken: bool = False) -> ReportService:
    products = InMemoryProductRepository(
        [
            product("p-1", 50, 10, price="15.99", name="Coffee Beans"),
            product("p-2", 4, 5, price="4.99", name="Milk"),
            product("p-3", 0, 5, price="3.49", name="Bread"),
        ]
    )
    repo = BrokenTransactionRepository() if broken else InMemoryTransactionRepository(transactions)
    return ReportService(repo, products, InMemoryOperatorRepository({"op-1": "John Cashier"}), Settings())


@pytest.fixture
def make_client():
    def factory(service: ReportService) -> TestClient:
        app = create_app(Settings())
        app.dependency_overrides[get_report_service] = lambda: service
        return TestClient(app)

    return factory


def test_health(make_client) -> None:
    response = make_client(build_service()).get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["timezone"] == "UTC"


def test_sales_summary_envelope_and_camel_case(make_client) -> None:
    service = build_service(
        [
            txn("a", "100", created_at=at(2025, 1, 5), items=[item("p-1", 4, "25")]),
            txn("b", "50", created_at=at(2025, 1, 6), status=TransactionStatus.PENDING),
            txn("c", "25", created_at=at(2025, 1, 7)),
        ]
    )

    response = make_client(service).get(
        "/api/reports/sales-summary", params={"startDate": "2025-01-01", "endDate": "2025-01-31"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert float(data["totalSales"]) == 125
    assert data["totalTransactions"] == 2
    assert float(data["averageTransaction"]) == 62.5
    assert data["topProducts"][0]["name"] == "Coffee Beans"
    assert data["topProducts"][0]["units"] == 4
    assert data["dateRange"]["start"].startswith("2025-01-01T00:00:00")


def test_start_after_end_is_400(make_client) -> None:
    response = make_client(build_service()).get(
        "/api/reports/sales-summary", params={"startDate": "2025-02-01", "endDate": "2025-01-01"}
    )

    assert response.status_code == 400


def test_missing_dates_are_422(make_client) -> None:
    client = make_client(build_service())

    assert client.get("/api/reports/sales-summary").status_code == 422
    assert client.get("/api/reports/daily-transactions", params={"startDate": "2025-01-01"}).status_code == 422
    assert client.get("/api/reports/my-sales/op-1", params={"startDate": "bad", "endDate": "2025-01-01"}).status_code == 422


def test_repository_failure_is_500(make_client) -> None:
    client = make_client(build_service(broken=True))

    response = client.get("/api/reports/sales-summary", params={"startDate": "2025-01-01", "endDate": "2025-01-31"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to generate sales report"
    assert client.get("/api/reports/dashboard-analytics").status_code == 500


def test_inventory_overview(make_client) -> None:
    response = make_client(build_service()).get("/api/reports/inventory-overview")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalProducts"] == 3
    assert data["lowStockItems"] == 2
    assert data["outOfStockItems"] == 1
    assert [p["name"] for p in data["lowStockProducts"]] == ["Bread", "Milk"]
    assert data["lowStockProducts"][0]["category"] == "Uncategorized"
    assert data["stockStatus"] == {"healthy": 1, "low": 1, "out": 1}


def test_daily_transactions_include_cashier_names(make_client) -> None:
    now = datetime.now(timezone.utc)
    service = build_service(
        [txn("t-1", "12.50", created_at=now, operator_id="op-1"), txn("t-2", "3", created_at=now, operator_id="op-x")]
    )
    today = now.date().isoformat()

    response = make_client(service).get(
        "/api/reports/daily-transactions", params={"startDate": today, "endDate": today}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalTransactions"] == 2
    assert data["todayTransactions"] == 2
    assert sorted(t["cashier"] for t in data["recentTransactions"]) == ["John Cashier", "Unknown"]


def test_operator_sales(make_client) -> None:
    now = datetime.now(timezone.utc)
    service = build_service(
        [txn("mine", "30", created_at=now, operator_id="op-1"), txn("theirs", "70", created_at=now, operator_id="op-2")]
    )
    today = now.date().isoformat()

    response = make_client(service).get("/api/reports/my-sales/op-1", params={"startDate": today, "endDate": today})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["operatorId"] == "op-1"
    assert float(data["totalSales"]) == 30
    assert float(data["todaySales"]) == 30
    assert [t["id"] for t in data["recentTransactions"]] == ["mine"]


def test_operator_totals_are_window_only(make_client) -> None:
    """Sales outside the range are left out of the totals but still listed as recent."""

    service = build_service(
        [txn("old", "40", created_at=at(2024, 12, 20), operator_id="op-1"), txn("jan", "10", created_at=at(2025, 1, 5), operator_id="op-1")]
    )
    client = make_client(service)

    data = client.get(
        "/api/reports/my-sales/op-1", params={"startDate": "2025-01-01", "endDate": "2025-01-31"}
    ).json()["data"]
    schemas = client.get("/openapi.json").json()["components"]["schemas"]
    schema = next(v for k, v in schemas.items() if k.startswith("OperatorSalesData"))

    assert float(data["totalSales"]) == 10
    assert data["totalTransactions"] == 1
    assert [t["id"] for t in data["recentTransactions"]] == ["jan", "old"]
    assert "not all-time" in schema["properties"]["totalSales"]["description"]


def test_dashboard_analytics(make_client) -> None:
    now = datetime.now(timezone.utc)
    service = build_service([txn("a", "20", created_at=now, items=[item("p-1", 2, "10")])])

    response = make_client(service).get("/api/reports/dashboard-analytics")

    assert response.status_code == 200
    data = response.json()["data"]
    assert float(data["totalRevenue"]) == 20
    assert data["totalOrders"] == 1
    assert data["activeCustomers"] == 1
    assert data["productsSold"] == 2
    assert len(data["salesTrend"]) == 7
    assert data["salesTrend"][-1]["day"] == now.date().isoformat()
    assert float(data["salesTrend"][-1]["sales"]) == 20


def test_transaction_stats(make_client) -> None:
    service = build_service(
        [txn("a", "10", created_at=at(2025, 1, 5)), txn("b", "5", created_at=at(2025, 1, 6), status=TransactionStatus.REFUNDED)]
    )

    data = make_client(service).get("/api/reports/transaction-stats").json()["data"]

    assert data["totalTransactions"] == 2
    assert float(data["totalRevenue"]) == 15


# ----------------------------------------------------------------------
# Scan queue
# ----------------------------------------------------------------------


def test_scan_posted_then_polled_once(make_client) -> None:
    client = make_client(build_service())

    posted = client.post("/scan-queue", json={"barcode": "1234567890123", "timestamp": "2025-01-15T12:00:00Z"})
    first = client.get("/scan-queue/latest")
    second = client.get("/scan-queue/latest")

    assert posted.status_code == 200
    assert posted.json()["data"]["deviceType"] == "phone"
    assert first.json()["data"]["barcode"] == "1234567890123"
    assert second.json() == {"success": True, "data": None}


def test_scan_sessions_via_query_param(make_client) -> None:
    client = make_client(build_service())

    client.post("/scan-queue", json={"barcode": "111", "sessionId": "register-2", "deviceType": "tablet"})

    assert client.get("/scan-queue/latest").json()["data"] is None
    data = client.get("/scan-queue/latest", params={"sessionId": "register-2"}).json()["data"]
    assert data["barcode"] == "111"
    assert data["deviceType"] == "tablet"
    assert data["timestamp"]


def test_empty_barcode_is_422(make_client) -> None:
    response = make_client(build_service()).post("/scan-queue", json={"barcode": ""})

    assert response.status_code == 422
