"""
Domain: Barcode scan events relayed from a phone scanner to a register.

A scan is identified for delivery purposes by its timestamp string; two scans with the
same timestamp are treated as the same event.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

DEFAULT_DEVICE_TYPE = "phone"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True, slots=True)
class ScanData:
    barcode: str
    timestamp: str = field(default_factory=_utc_now_iso)
    device_type: str = DEFAULT_DEVICE_TYPE
    session_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.barcode:
            raise ValueError("barcode must be non-empty")


__all__ = ["DEFAULT_DEVICE_TYPE", "ScanData"]
