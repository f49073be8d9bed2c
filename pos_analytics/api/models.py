"""
API Response Models.

Pydantic models for serializing reports. JSON keys are camelCase to match what the
legacy dashboard front-end consumes; every response is wrapped as
{"success": true, "data": {...}}.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Shared pieces
# ============================================================================

class DateRangeResponse(CamelModel):
    start: datetime
    end: datetime


class TopProductResponse(CamelModel):
    """One ranked product (legacy keys: name / sales / units)."""
    product_id: str
    name: str
    sales: Decimal
    units: int


class LowStockProductResponse(CamelModel):
    product_id: str
    name: str
    current: int
    minimum: int
    category: str


class StockStatusResponse(CamelModel):
    healthy: int
    low: int
    out: int


class RecentTransactionResponse(CamelModel):
    id: str
    time: datetime
    amount: Decimal
    items: int
    cashier: Optional[str] = None


class TrendPointResponse(CamelModel):
    date: str  # short weekday label, e.g. "Mon"
    day: str  # ISO calendar date
    sales: Decimal


# ============================================================================
# Report payloads
# ============================================================================

class SalesSummaryData(CamelModel):
    date_range: DateRangeResponse
    total_sales: Decimal
    total_transactions: int
    average_transaction: Decimal
    top_products: List[TopProductResponse]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "dateRange": {"start": "2025-01-01T00:00:00Z", "end": "2025-01-31T23:59:59.999000Z"},
                "totalSales": "125.00",
                "totalTransactions": 2,
                "averageTransaction": "62.50",
                "topProducts": [{"productId": "p-1", "name": "Premium Coffee Beans", "sales": "50.00", "units": 5}],
            }
        }
    )


class InventoryOverviewData(CamelModel):
    total_products: int
    low_stock_items: int
    out_of_stock_items: int
    total_value: Decimal
    low_stock_products: List[LowStockProductResponse]
    stock_status: StockStatusResponse


class OperatorSalesData(CamelModel):
    """
    One cashier's sales.

    totalSales / totalTransactions cover the requested dateRange only, not the
    operator's lifetime; recentTransactions ignore the range.
    """
    operator_id: str
    date_range: DateRangeResponse
    total_sales: Decimal = Field(description="Completed sales inside dateRange (not all-time)")
    total_transactions: int = Field(description="Completed transactions inside dateRange (not all-time)")
    today_sales: Decimal
    today_transactions: int
    week_sales: Decimal
    recent_transactions: List[RecentTransactionResponse] = Field(
        description="The operator's newest completed transactions, regardless of dateRange"
    )


class DailyTransactionsData(CamelModel):
    date_range: DateRangeResponse
    total_sales: Decimal
    total_transactions: int
    today_sales: Decimal
    today_transactions: int
    week_sales: Decimal
    recent_transactions: List[RecentTransactionResponse]


class DashboardAnalyticsData(CamelModel):
    total_revenue: Decimal
    total_orders: int
    active_customers: int = Field(description="Distinct operators (cashiers) with a completed sale this month")
    products_sold: int
    sales_trend: List[TrendPointResponse]


class TransactionStatsData(CamelModel):
    total_transactions: int
    total_revenue: Decimal
    today_transactions: int
    today_revenue: Decimal


# ============================================================================
# Envelopes
# ============================================================================

class SalesSummaryResponse(CamelModel):
    success: bool = True
    data: SalesSummaryData


class InventoryOverviewResponse(CamelModel):
    success: bool = True
    data: InventoryOverviewData


class OperatorSalesResponse(CamelModel):
    success: bool = True
    data: OperatorSalesData


class DailyTransactionsResponse(CamelModel):
    success: bool = True
    data: DailyTransactionsData


class DashboardAnalyticsResponse(CamelModel):
    success: bool = True
    data: DashboardAnalyticsData


class TransactionStatsResponse(CamelModel):
    success: bool = True
    data: TransactionStatsData


# ============================================================================
# Scan Queue Models
# ============================================================================

class ScanRequest(CamelModel):
    """Scan posted by the phone scanner."""
    barcode: str = Field(..., min_length=1)
    timestamp: Optional[str] = None
    device_type: Optional[str] = None
    session_id: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "barcode": "1234567890123",
                "timestamp": "2025-01-01T12:00:00Z",
                "deviceType": "phone",
                "sessionId": "register-1",
            }
        }
    )


class ScanDataResponse(CamelModel):
    barcode: str
    timestamp: str
    device_type: str
    session_id: Optional[str] = None


class ScanResponse(CamelModel):
    success: bool = True
    data: Optional[ScanDataResponse] = None
