"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, telemetry, schema,
seeding, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI

from passage_search.core.config import get_settings
from passage_search.infrastructure.persistence import database
from passage_search.infrastructure.persistence.seed import DatabaseSeeder
from passage_search.shared.telemetry.logging import setup_logging
from passage_search.shared.telemetry.telemetry import get_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), schema creation (if
    database_auto_create), seeding (if seed_on_startup). Shutdown order:
    telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    # TelemetryConfig is created (and FastAPI instrumented) in create_app.
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_sqlalchemy(database.get_engine())
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    if settings.database_auto_create:
        await database.create_schema()

    if settings.seed_on_startup:
        data_path = Path(settings.seed_data_path) if settings.seed_data_path else None
        async with database.get_session_factory()() as session:
            await DatabaseSeeder(session, data_path).seed()

    yield

    # ---- Shutdown ----
    if telemetry is not None:
        telemetry.shutdown()

    await database.dispose_engine()
