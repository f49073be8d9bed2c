"""
Runtime configuration.

Settings are read from environment variables. A `.env` file in the project root is
loaded first (existing environment variables win).

Environment variables:
- REPORT_TIMEZONE: IANA timezone used for "today", week and month boundaries (default UTC)
- TOP_PRODUCTS_LIMIT: number of ranked products in the sales summary (default 10)
- RECENT_TRANSACTIONS_LIMIT: length of recent-transaction lists (default 10)
- LOW_STOCK_LIST_LIMIT: low-stock rows in the inventory overview (default 10)
- TREND_DAYS: length of the dashboard sales trend (default 7)
- LOG_LEVEL: log level for the API and CLI (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ENV_PATH = Path(__file__).parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class Settings:
    timezone_name: str = "UTC"
    top_products_limit: int = 10
    recent_transactions_limit: int = 10
    low_stock_list_limit: int = 10
    trend_days: int = 7
    log_level: str = "INFO"
    tz: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            zone = ZoneInfo(self.timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown REPORT_TIMEZONE: {self.timezone_name!r}") from None
        object.__setattr__(self, "tz", zone)

        for name in ("top_products_limit", "recent_transactions_limit", "low_stock_list_limit", "trend_days"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")


def _int_setting(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env: Mapping to read from instead of os.environ (skips .env loading)

    Raises:
        ValueError: for non-integer limits or an unknown timezone
    """

    if env is None:
        load_dotenv(dotenv_path=_ENV_PATH)
        env = os.environ

    return Settings(
        timezone_name=env.get("REPORT_TIMEZONE") or "UTC",
        top_products_limit=_int_setting(env, "TOP_PRODUCTS_LIMIT", 10),
        recent_transactions_limit=_int_setting(env, "RECENT_TRANSACTIONS_LIMIT", 10),
        low_stock_list_limit=_int_setting(env, "LOW_STOCK_LIST_LIMIT", 10),
        trend_days=_int_setting(env, "TREND_DAYS", 7),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the API and CLI entry points. Library code never calls this."""

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers if called more than once
    if any(getattr(h, "_pos_analytics", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler._pos_analytics = True  # type: ignore[attr-defined]
    root.addHandler(handler)


__all__ = ["LOG_FORMAT", "Settings", "configure_logging", "load_settings"]
