"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (Firestore client, asset store,
telemetry).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from headless_cms.core.config import get_settings
from headless_cms.infrastructure.firebase.client import close_firebase, init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Firestore client, telemetry (if enabled). The asset store
    is created lazily by the API dependencies and stored on app.state.
    Shutdown order: asset store HTTP client, Firestore client, telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    if init_firebase():
        logger.info("Firestore ready")
    else:
        logger.warning("Firestore not configured; schema and content routes will fail")
    app.state.asset_store = None

    if settings.telemetry_enabled:
        from headless_cms.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_httpx()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    asset_store = getattr(app.state, "asset_store", None)
    if asset_store is not None and hasattr(asset_store, "aclose"):
        await asset_store.aclose()
        app.state.asset_store = None
        logger.info("Asset store HTTP client closed")

    await close_firebase()

    from headless_cms.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
