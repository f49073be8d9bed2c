"""
Command-line report runner.

Prints any report as JSON, either from Supabase (default) or from the built-in demo
dataset (--demo).
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional

from pos_analytics.config import configure_logging, load_settings
from pos_analytics.domain.window import InvalidRangeError
from pos_analytics.services.report_service import ReportService

logger = logging.getLogger(__name__)

REPORTS = (
    "sales-summary",
    "inventory-overview",
    "operator-sales",
    "daily-transactions",
    "dashboard-analytics",
    "transaction-stats",
)
_NEEDS_RANGE = {"sales-summary", "operator-sales", "daily-transactions"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_service(demo: bool) -> ReportService:
    settings = load_settings()
    if demo:
        from pos_analytics.demo import demo_repositories

        transactions, products, operators = demo_repositories(datetime.now(timezone.utc))
    else:
        from pos_analytics.repositories.operator_repository import SupabaseOperatorRepository
        from pos_analytics.repositories.product_repository import SupabaseProductRepository
        from pos_analytics.repositories.transaction_repository import SupabaseTransactionRepository

        transactions = SupabaseTransactionRepository()
        products = SupabaseProductRepository()
        operators = SupabaseOperatorRepository()
    return ReportService(transactions, products, operators, settings)


def run_report(service: ReportService, args: argparse.Namespace) -> Any:
    name = args.report
    if name in _NEEDS_RANGE and (args.start is None or args.end is None):
        raise SystemExit(f"{name} requires --start and --end")

    if name == "sales-summary":
        return service.sales_summary(args.start, args.end)
    if name == "inventory-overview":
        return service.inventory_overview()
    if name == "operator-sales":
        if not args.operator:
            raise SystemExit("operator-sales requires --operator")
        return service.operator_sales(args.operator, args.start, args.end)
    if name == "daily-transactions":
        return service.daily_transactions(args.start, args.end)
    if name == "dashboard-analytics":
        return service.dashboard_analytics()
    return service.transaction_stats()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Print a POS analytics report as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dashboard from the demo dataset
  pos-report dashboard-analytics --demo

  # Sales summary for January from Supabase
  pos-report sales-summary --start 2025-01-01 --end 2025-01-31

  # One cashier's sales this week
  pos-report operator-sales --operator user-cashier --start 2025-01-05 --end 2025-01-11
        """,
    )
    parser.add_argument("report", choices=REPORTS, help="Report to generate")
    parser.add_argument("--start", type=date.fromisoformat, help="First day (YYYY-MM-DD), inclusive")
    parser.add_argument("--end", type=date.fromisoformat, help="Last day (YYYY-MM-DD), inclusive")
    parser.add_argument("--operator", help="Operator (cashier) id for operator-sales")
    parser.add_argument("--demo", action="store_true", help="Use the built-in demo dataset instead of Supabase")

    args = parser.parse_args(argv)

    try:
        service = build_service(args.demo)
        configure_logging(service.settings.log_level)
        report = run_report(service, args)
    except InvalidRangeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception:
        logger.exception("Report %s failed", args.report)
        return 1

    print(json.dumps(dataclasses.asdict(report), indent=2, default=_json_default))
    return 0


if __name__ == "__main__":
    sys.exit(main())
