"""
FastAPI dependency providers.

Tests (and alternative deployments) swap the Supabase-backed service out through
`app.dependency_overrides[get_report_service]`.
"""

from fastapi import Request

from pos_analytics.config import Settings
from pos_analytics.repositories.operator_repository import SupabaseOperatorRepository
from pos_analytics.repositories.product_repository import SupabaseProductRepository
from pos_analytics.repositories.transaction_repository import SupabaseTransactionRepository
from pos_analytics.services.report_service import ReportService
from pos_analytics.services.scan_queue_service import ScanQueueService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_report_service(request: Request) -> ReportService:
    return ReportService(
        transactions=SupabaseTransactionRepository(),
        products=SupabaseProductRepository(),
        operators=SupabaseOperatorRepository(),
        settings=request.app.state.settings,
    )


def get_scan_queue(request: Request) -> ScanQueueService:
    return request.app.state.scan_queue
