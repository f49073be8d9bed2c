"""
Reports API Endpoints.

Thin transport over ReportService. Invalid date ranges map to 400; any other failure
(typically a repository error) is logged and mapped to 500.
"""

import logging
from datetime import date
from typing import Callable, List, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query

from pos_analytics.api.dependencies import get_report_service
from pos_analytics.api.models import (
    DailyTransactionsData,
    DailyTransactionsResponse,
    DashboardAnalyticsData,
    DashboardAnalyticsResponse,
    DateRangeResponse,
    InventoryOverviewData,
    InventoryOverviewResponse,
    LowStockProductResponse,
    OperatorSalesData,
    OperatorSalesResponse,
    RecentTransactionResponse,
    SalesSummaryData,
    SalesSummaryResponse,
    StockStatusResponse,
    TopProductResponse,
    TransactionStatsData,
    TransactionStatsResponse,
    TrendPointResponse,
)
from pos_analytics.domain.window import DateWindow, InvalidRangeError
from pos_analytics.services.report_service import RecentTransaction, ReportService

logger = logging.getLogger(__name__)

router = APIRouter()

T = TypeVar("T")


def _run(failure_message: str, build: Callable[[], T]) -> T:
    try:
        return build()
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(failure_message)
        raise HTTPException(status_code=500, detail=failure_message)


def _date_range(window: DateWindow) -> DateRangeResponse:
    return DateRangeResponse(start=window.start, end=window.end)


def _recent(items: List[RecentTransaction]) -> List[RecentTransactionResponse]:
    return [
        RecentTransactionResponse(
            id=t.transaction_id,
            time=t.created_at,
            amount=t.amount,
            items=t.items,
            cashier=t.operator,
        )
        for t in items
    ]


@router.get(
    "/sales-summary",
    response_model=SalesSummaryResponse,
    summary="Sales Summary",
    description="Completed sales totals, average ticket and top 10 products for a date range.",
)
def get_sales_summary(
    start_date: date = Query(..., alias="startDate", description="First day (YYYY-MM-DD), inclusive"),
    end_date: date = Query(..., alias="endDate", description="Last day (YYYY-MM-DD), inclusive"),
    service: ReportService = Depends(get_report_service),
):
    def build() -> SalesSummaryResponse:
        report = service.sales_summary(start_date, end_date)
        return SalesSummaryResponse(
            data=SalesSummaryData(
                date_range=_date_range(report.window),
                total_sales=report.total_sales,
                total_transactions=report.total_transactions,
                average_transaction=report.average_transaction,
                top_products=[
                    TopProductResponse(
                        product_id=p.product_id,
                        name=p.name,
                        sales=p.total_revenue,
                        units=p.total_units,
                    )
                    for p in report.top_products
                ],
            )
        )

    return _run("Failed to generate sales report", build)


@router.get(
    "/inventory-overview",
    response_model=InventoryOverviewResponse,
    summary="Inventory Overview",
    description="Active product counts, low/out-of-stock alerts and inventory valuation.",
)
def get_inventory_overview(service: ReportService = Depends(get_report_service)):
    def build() -> InventoryOverviewResponse:
        report = service.inventory_overview()
        return InventoryOverviewResponse(
            data=InventoryOverviewData(
                total_products=report.total_products,
                low_stock_items=report.low_stock_count,
                out_of_stock_items=report.out_of_stock_count,
                total_value=report.total_value,
                low_stock_products=[
                    LowStockProductResponse(
                        product_id=item.product_id,
                        name=item.name,
                        current=item.current,
                        minimum=item.minimum,
                        category=item.category,
                    )
                    for item in report.low_stock_products
                ],
                stock_status=StockStatusResponse(
                    healthy=report.stock_status.healthy,
                    low=report.stock_status.low,
                    out=report.stock_status.out,
                ),
            )
        )

    return _run("Failed to generate inventory report", build)


@router.get(
    "/my-sales/{operator_id}",
    response_model=OperatorSalesResponse,
    summary="Operator Sales",
    description="A cashier's sales for a date range plus today, this week and recent transactions.",
)
def get_operator_sales(
    operator_id: str,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    service: ReportService = Depends(get_report_service),
):
    def build() -> OperatorSalesResponse:
        report = service.operator_sales(operator_id, start_date, end_date)
        return OperatorSalesResponse(
            data=OperatorSalesData(
                operator_id=report.operator_id,
                date_range=_date_range(report.window),
                total_sales=report.total_sales,
                total_transactions=report.total_transactions,
                today_sales=report.today_sales,
                today_transactions=report.today_transactions,
                week_sales=report.week_sales,
                recent_transactions=_recent(report.recent_transactions),
            )
        )

    return _run("Failed to generate user sales report", build)


@router.get(
    "/daily-transactions",
    response_model=DailyTransactionsResponse,
    summary="Daily Transactions",
)
def get_daily_transactions(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    service: ReportService = Depends(get_report_service),
):
    def build() -> DailyTransactionsResponse:
        report = service.daily_transactions(start_date, end_date)
        return DailyTransactionsResponse(
            data=DailyTransactionsData(
                date_range=_date_range(report.window),
                total_sales=report.total_sales,
                total_transactions=report.total_transactions,
                today_sales=report.today_sales,
                today_transactions=report.today_transactions,
                week_sales=report.week_sales,
                recent_transactions=_recent(report.recent_transactions),
            )
        )

    return _run("Failed to generate daily transactions report", build)


@router.get(
    "/dashboard-analytics",
    response_model=DashboardAnalyticsResponse,
    summary="Dashboard Analytics",
    description="Month-to-date revenue, orders, active operators, units sold and the trailing daily trend.",
)
def get_dashboard_analytics(service: ReportService = Depends(get_report_service)):
    def build() -> DashboardAnalyticsResponse:
        report = service.dashboard_analytics()
        return DashboardAnalyticsResponse(
            data=DashboardAnalyticsData(
                total_revenue=report.total_revenue,
                total_orders=report.total_orders,
                active_customers=report.active_customers,
                products_sold=report.products_sold,
                sales_trend=[
                    TrendPointResponse(date=p.label, day=p.day.isoformat(), sales=p.sales)
                    for p in report.sales_trend
                ],
            )
        )

    return _run("Failed to get dashboard analytics", build)


@router.get(
    "/transaction-stats",
    response_model=TransactionStatsResponse,
    summary="Transaction Stats",
    description="All-status transaction counters (pending and refunded included).",
)
def get_transaction_stats(service: ReportService = Depends(get_report_service)):
    def build() -> TransactionStatsResponse:
        report = service.transaction_stats()
        return TransactionStatsResponse(
            data=TransactionStatsData(
                total_transactions=report.total_transactions,
                total_revenue=report.total_revenue,
                today_transactions=report.today_transactions,
                today_revenue=report.today_revenue,
            )
        )

    return _run("Failed to get transaction stats", build)
