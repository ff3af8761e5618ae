import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from railway_restarter.api.v1 import health, restart
from railway_restarter.config import Settings, get_settings
from railway_restarter.domain.services.restart_service import RestartService
from railway_restarter.infrastructure.railway import RailwayClient
from railway_restarter.middleware import LoggingMiddleware
from railway_restarter.scheduler import build_scheduler

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    service: RestartService = app.state.restart_service

    scheduler = build_scheduler(settings, service)
    scheduler.start()
    app.state.scheduler = scheduler
    logger.info(
        f"🚀 Watching '{settings.TARGET_SERVICE_NAME}' in environment '{settings.RAILWAY_ENVIRONMENT_NAME}'"
    )
    try:
        yield
    finally:
        scheduler.shutdown(wait=False)
        await service.client.close()
        logger.info("👋 Scheduler stopped")


def create_app(settings: Optional[Settings] = None, client: Optional[RailwayClient] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Railway Restarter",
        description="Restarts a Railway service on a memory threshold or a fixed schedule",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.restart_service = RestartService(client or RailwayClient(settings), settings)
    app.state.scheduler = None

    app.add_middleware(LoggingMiddleware)

    app.include_router(health.router)
    app.include_router(restart.router, prefix="/api/v1")

    return app
