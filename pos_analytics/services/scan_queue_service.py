"""
Scan queue relay.

Relays the latest barcode scan from a phone to the register polling for it. Each
session key owns a single-slot mailbox: posting replaces the slot, and taking returns
the scan only once (a scan is "already delivered" when its timestamp matches the last
delivered timestamp for that mailbox).

Peripheral to reporting; this module does not depend on the analytics services.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from pos_analytics.domain.scan import ScanData

logger = logging.getLogger(__name__)

DEFAULT_SESSION = "default"


class ScanMailbox:
    """Single-producer/single-consumer slot with an explicit delivered marker."""

    def __init__(self) -> None:
        self._latest: Optional[ScanData] = None
        self._delivered_timestamp: Optional[str] = None

    @property
    def latest(self) -> Optional[ScanData]:
        return self._latest

    def post(self, scan: ScanData) -> None:
        self._latest = scan

    def take(self) -> Optional[ScanData]:
        """Return the latest scan if it has not been delivered yet, else None."""

        scan = self._latest
        if scan is None or scan.timestamp == self._delivered_timestamp:
            return None
        self._delivered_timestamp = scan.timestamp
        return scan


class ScanQueueService:
    """Per-session mailboxes guarded by one lock."""

    def __init__(self) -> None:
        self._mailboxes: Dict[str, ScanMailbox] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(session_id: Optional[str]) -> str:
        return session_id or DEFAULT_SESSION

    def add_scan(self, scan: ScanData) -> ScanData:
        key = self._key(scan.session_id)
        with self._lock:
            mailbox = self._mailboxes.setdefault(key, ScanMailbox())
            mailbox.post(scan)
        logger.info("Scan received", extra={"session": key, "barcode": scan.barcode, "device": scan.device_type})
        return scan

    def latest_scan(self, session_id: Optional[str] = None) -> Optional[ScanData]:
        key = self._key(session_id)
        with self._lock:
            mailbox = self._mailboxes.get(key)
            scan = mailbox.take() if mailbox is not None else None
        if scan is not None:
            logger.info("Scan delivered", extra={"session": key, "barcode": scan.barcode})
        return scan


__all__ = ["DEFAULT_SESSION", "ScanMailbox", "ScanQueueService"]
