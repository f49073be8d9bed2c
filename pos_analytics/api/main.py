"""
POS Analytics API - Main Application.

FastAPI application exposing the report engine and the scan queue relay.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pos_analytics import __version__
from pos_analytics.api.routers import reports, scan_queue
from pos_analytics.config import Settings, configure_logging, load_settings
from pos_analytics.services.scan_queue_service import ScanQueueService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="POS Analytics API",
        description="Sales, inventory and dashboard reports for the point-of-sale back office",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.scan_queue = ScanQueueService()

    # TODO: Restrict origins once the dashboard host is fixed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Returns the API status and version.
        """
        return {
            "status": "healthy",
            "version": __version__,
            "service": "pos-analytics-api",
            "timezone": settings.timezone_name,
        }

    app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
    app.include_router(scan_queue.router, prefix="/scan-queue", tags=["Scan Queue"])
    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
