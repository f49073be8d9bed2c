"""
Report assembly.

Composes filtering, rollups, ranking, stock detection and trends into the report shapes
served to callers:
- Sales Summary
- Inventory Overview
- Operator (cashier) Sales
- Daily Transactions
- Dashboard Analytics
- Transaction Stats (all statuses, activity counter)

Each report is a linear pipeline over snapshots fetched from the repositories during
that call: fetch -> filter -> aggregate -> rank/trend. Nothing is cached between calls,
and a report either returns complete or raises. Repository errors propagate unchanged.

Calendar boundaries ("today", Sunday-start week, month) are evaluated in the configured
reporting timezone. Every report that depends on the current time accepts `now`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from pos_analytics.config import Settings
from pos_analytics.domain.time import local_date, month_start, week_start
from pos_analytics.domain.transaction import TransactionRecord, TransactionStatus
from pos_analytics.domain.window import START_OF_DAY, DateWindow
from pos_analytics.repositories.base import OperatorRepository, ProductRepository, TransactionRepository
from pos_analytics.services.aggregation import distinct_operators, summarize, total_sales, units_sold
from pos_analytics.services.record_filter import (
    active_products,
    completed,
    transactions_for_operator,
    transactions_in_window,
    transactions_since,
)
from pos_analytics.services.stock import (
    LowStockItem,
    StockStatusBreakdown,
    inventory_value,
    low_stock,
    out_of_stock,
    stock_status_breakdown,
)
from pos_analytics.services.top_products import ProductRanking, top_products
from pos_analytics.services.trend import TrendPoint, daily_series, trend_window

logger = logging.getLogger(__name__)

UNKNOWN_OPERATOR = "Unknown"

_COMPLETED = TransactionStatus.COMPLETED


@dataclass(frozen=True, slots=True)
class RecentTransaction:
    transaction_id: str
    created_at: datetime
    amount: Decimal
    items: int
    operator: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SalesSummaryReport:
    window: DateWindow
    total_sales: Decimal
    total_transactions: int
    average_transaction: Decimal
    top_products: List[ProductRanking]


@dataclass(frozen=True, slots=True)
class InventoryOverviewReport:
    total_products: int
    low_stock_count: int
    out_of_stock_count: int
    total_value: Decimal
    low_stock_products: List[LowStockItem]
    stock_status: StockStatusBreakdown


@dataclass(frozen=True, slots=True)
class OperatorSalesReport:
    """
    Sales for one cashier.

    total_* cover the requested window only, not the operator's lifetime (the legacy
    report filtered them by the requested dates); today/week are relative to `now`;
    recent_transactions are the operator's newest completed transactions regardless
    of window.
    """

    operator_id: str
    window: DateWindow
    total_sales: Decimal
    total_transactions: int
    today_sales: Decimal
    today_transactions: int
    week_sales: Decimal
    recent_transactions: List[RecentTransaction]


@dataclass(frozen=True, slots=True)
class DailyTransactionsReport:
    window: DateWindow
    total_sales: Decimal
    total_transactions: int
    today_sales: Decimal
    today_transactions: int
    week_sales: Decimal
    recent_transactions: List[RecentTransaction]


@dataclass(frozen=True, slots=True)
class DashboardAnalyticsReport:
    """
    Month-to-date headline metrics plus the trailing daily trend.

    active_customers keeps its legacy name but counts DISTINCT OPERATORS (cashiers)
    with a completed transaction this month, not customers.
    """

    window: DateWindow
    total_revenue: Decimal
    total_orders: int
    active_customers: int
    products_sold: int
    sales_trend: List[TrendPoint]


@dataclass(frozen=True, slots=True)
class TransactionStatsReport:
    """Activity counters over every status (pending and refunded included)."""

    total_transactions: int
    total_revenue: Decimal
    today_transactions: int
    today_revenue: Decimal


def _newest_first(transactions: Iterable[TransactionRecord]) -> List[TransactionRecord]:
    return sorted(transactions, key=lambda t: t.created_at, reverse=True)


def warn_inconsistent_totals(transactions: Iterable[TransactionRecord]) -> int:
    """
    Log transactions whose total_amount differs from their line-item sum.

    Reports still use total_amount; this only surfaces the discrepancy.
    Returns the number of inconsistent transactions.
    """

    mismatched = 0
    for t in transactions:
        if t.line_items and not t.is_consistent:
            mismatched += 1
            logger.warning(
                "Transaction total does not match its line items",
                extra={
                    "transaction_id": t.transaction_id,
                    "total_amount": str(t.total_amount),
                    "line_items_total": str(t.line_items_total),
                },
            )
    return mismatched


class ReportService:
    """
    Assembles reports from repository snapshots.

    Holds only collaborator references and immutable settings, so one instance can be
    shared by concurrent callers.
    """

    def __init__(
        self,
        transactions: TransactionRepository,
        products: ProductRepository,
        operators: Optional[OperatorRepository] = None,
        settings: Optional[Settings] = None,
    ):
        self._transactions = transactions
        self._products = products
        self._operators = operators
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(timezone.utc)
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("now must be timezone-aware")
        return now.astimezone(timezone.utc)

    def _today(self, now: datetime) -> date:
        return local_date(now, self._settings.tz)

    def _window(self, start: date, end: date) -> DateWindow:
        return DateWindow.from_dates(start, end, self._settings.tz)

    def _completed_in(self, window: DateWindow, operator_id: Optional[str] = None) -> List[TransactionRecord]:
        fetched = self._transactions.query(window, _COMPLETED, operator_id)
        selected = transactions_in_window(fetched, window, _COMPLETED)
        if operator_id is not None:
            selected = transactions_for_operator(selected, operator_id)
        return selected

    def _recent(
        self,
        transactions: Iterable[TransactionRecord],
        with_operator: bool,
    ) -> List[RecentTransaction]:
        newest = _newest_first(transactions)[: self._settings.recent_transactions_limit]
        names: Dict[str, str] = {}
        recent: List[RecentTransaction] = []
        for t in newest:
            operator: Optional[str] = None
            if with_operator:
                if t.operator_id not in names:
                    names[t.operator_id] = self._operator_display_name(t)
                operator = names[t.operator_id]
            recent.append(
                RecentTransaction(
                    transaction_id=t.transaction_id,
                    created_at=t.created_at,
                    amount=t.total_amount,
                    items=t.item_count,
                    operator=operator,
                )
            )
        return recent

    def _operator_display_name(self, transaction: TransactionRecord) -> str:
        if self._operators is not None and transaction.operator_id:
            name = self._operators.display_name(transaction.operator_id)
            if name:
                return name
        return transaction.operator_name or UNKNOWN_OPERATOR

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def sales_summary(self, start: date, end: date) -> SalesSummaryReport:
        """
        Completed sales in [start, end] with the top products by revenue.

        Raises:
            InvalidRangeError: If start > end
        """

        window = self._window(start, end)
        transactions = self._completed_in(window)
        warn_inconsistent_totals(transactions)

        rollup = summarize(transactions)
        ranking = top_products(transactions, self._products.by_id, limit=self._settings.top_products_limit)

        logger.debug(
            "Sales summary computed",
            extra={"start": start.isoformat(), "end": end.isoformat(), "transactions": rollup.count},
        )
        return SalesSummaryReport(
            window=window,
            total_sales=rollup.total,
            total_transactions=rollup.count,
            average_transaction=rollup.average,
            top_products=ranking,
        )

    def inventory_overview(self) -> InventoryOverviewReport:
        products = active_products(self._products.active_snapshot())
        flagged = low_stock(products)

        logger.debug("Inventory overview computed", extra={"products": len(products), "low_stock": len(flagged)})
        return InventoryOverviewReport(
            total_products=len(products),
            low_stock_count=len(flagged),
            out_of_stock_count=len(out_of_stock(products)),
            total_value=inventory_value(products),
            low_stock_products=flagged[: self._settings.low_stock_list_limit],
            stock_status=stock_status_breakdown(products),
        )

    def operator_sales(
        self,
        operator_id: str,
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> OperatorSalesReport:
        """
        Completed sales for one operator.

        The operator's completed history is fetched once and re-filtered for the window,
        today, and the Sunday-start week through the end of today.

        Raises:
            InvalidRangeError: If start > end
        """

        window = self._window(start, end)
        now = self._resolve_now(now)
        today = self._today(now)

        fetched = self._transactions.query(None, _COMPLETED, operator_id)
        history = transactions_for_operator(completed(fetched), operator_id)

        in_window = transactions_in_window(history, window)
        today_txns = transactions_in_window(history, DateWindow.for_day(today, self._settings.tz))
        week_txns = transactions_in_window(history, self._window(week_start(today), today))

        rollup = summarize(in_window)
        logger.debug(
            "Operator sales computed",
            extra={"operator_id": operator_id, "transactions": rollup.count, "history": len(history)},
        )
        return OperatorSalesReport(
            operator_id=operator_id,
            window=window,
            total_sales=rollup.total,
            total_transactions=rollup.count,
            today_sales=total_sales(today_txns),
            today_transactions=len(today_txns),
            week_sales=total_sales(week_txns),
            recent_transactions=self._recent(history, with_operator=False),
        )

    def daily_transactions(
        self,
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> DailyTransactionsReport:
        """
        Completed transactions in [start, end] with today/week subsets.

        Today and week are re-filtered from the already-fetched window set, so they can
        never include transactions outside the requested window.

        Raises:
            InvalidRangeError: If start > end
        """

        window = self._window(start, end)
        now = self._resolve_now(now)
        today = self._today(now)

        transactions = self._completed_in(window)
        today_txns = transactions_in_window(transactions, DateWindow.for_day(today, self._settings.tz))
        week_begins = datetime.combine(week_start(today), START_OF_DAY, tzinfo=self._settings.tz)
        week_txns = transactions_since(transactions, week_begins.astimezone(timezone.utc))

        rollup = summarize(transactions)
        logger.debug(
            "Daily transactions computed",
            extra={"start": start.isoformat(), "end": end.isoformat(), "transactions": rollup.count},
        )
        return DailyTransactionsReport(
            window=window,
            total_sales=rollup.total,
            total_transactions=rollup.count,
            today_sales=total_sales(today_txns),
            today_transactions=len(today_txns),
            week_sales=total_sales(week_txns),
            recent_transactions=self._recent(transactions, with_operator=True),
        )

    def dashboard_analytics(self, now: Optional[datetime] = None) -> DashboardAnalyticsReport:
        """Month-to-date revenue, orders, active operators, units and the daily trend."""

        now = self._resolve_now(now)
        today = self._today(now)
        tz = self._settings.tz

        month_begins = datetime.combine(month_start(today), START_OF_DAY, tzinfo=tz)
        month_window = DateWindow.between(month_begins, now)
        month_txns = self._completed_in(month_window)

        days = self._settings.trend_days
        trend_txns: Sequence[TransactionRecord] = []
        if days > 0:
            trend_txns = self._completed_in(trend_window(days, today, tz))
        sales_trend = daily_series(trend_txns, days, today, tz)

        rollup = summarize(month_txns)
        logger.debug("Dashboard analytics computed", extra={"transactions": rollup.count, "trend_days": days})
        return DashboardAnalyticsReport(
            window=month_window,
            total_revenue=rollup.total,
            total_orders=rollup.count,
            active_customers=distinct_operators(month_txns),
            products_sold=units_sold(month_txns),
            sales_trend=sales_trend,
        )

    def transaction_stats(self, now: Optional[datetime] = None) -> TransactionStatsReport:
        now = self._resolve_now(now)
        today = self._today(now)

        everything = self._transactions.query(None)
        today_txns = transactions_in_window(everything, DateWindow.for_day(today, self._settings.tz))
        return TransactionStatsReport(
            total_transactions=len(everything),
            total_revenue=total_sales(everything),
            today_transactions=len(today_txns),
            today_revenue=total_sales(today_txns),
        )


__all__ = [
    "DailyTransactionsReport",
    "DashboardAnalyticsReport",
    "InventoryOverviewReport",
    "OperatorSalesReport",
    "RecentTransaction",
    "ReportService",
    "SalesSummaryReport",
    "TransactionStatsReport",
    "UNKNOWN_OPERATOR",
    "warn_inconsistent_totals",
]
