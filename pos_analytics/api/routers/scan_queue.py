"""
Scan Queue API Endpoints.

The phone posts scans; the register polls `/latest` and receives each scan once.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from pos_analytics.api.dependencies import get_scan_queue
from pos_analytics.api.models import ScanDataResponse, ScanRequest, ScanResponse
from pos_analytics.domain.scan import DEFAULT_DEVICE_TYPE, ScanData
from pos_analytics.services.scan_queue_service import ScanQueueService

router = APIRouter()


def _to_response(scan: ScanData) -> ScanDataResponse:
    return ScanDataResponse(
        barcode=scan.barcode,
        timestamp=scan.timestamp,
        device_type=scan.device_type,
        session_id=scan.session_id,
    )


@router.post("", response_model=ScanResponse, summary="Post Scan")
def add_scan(request: ScanRequest, queue: ScanQueueService = Depends(get_scan_queue)):
    """Store a scan as the latest for its session (timestamp defaults to now, device to 'phone')."""

    fields = {
        "barcode": request.barcode,
        "device_type": request.device_type or DEFAULT_DEVICE_TYPE,
        "session_id": request.session_id,
    }
    if request.timestamp:
        fields["timestamp"] = request.timestamp

    scan = queue.add_scan(ScanData(**fields))
    return ScanResponse(data=_to_response(scan))


@router.get("/latest", response_model=ScanResponse, summary="Poll Latest Scan")
def get_latest_scan(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    queue: ScanQueueService = Depends(get_scan_queue),
):
    """Return the latest undelivered scan for the session, or data=null."""

    scan = queue.latest_scan(session_id)
    return ScanResponse(data=_to_response(scan) if scan is not None else None)
