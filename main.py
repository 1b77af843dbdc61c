import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.users import ensure_default_admin
from app.config import get_settings
from app.infrastructure.database import SessionLocal, engine, initialize_database
from app.interfaces.api.routes import register_routes
from app.interfaces.scheduler import DailyScanScheduler
from app.utils import today_in_app_timezone

logger = logging.getLogger(__name__)


def _bootstrap_admin() -> None:
    settings = get_settings()
    if not (settings.default_admin_email and settings.default_admin_password):
        return
    session = SessionLocal()
    try:
        ensure_default_admin(
            session,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
            today=today_in_app_timezone(),
        )
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the daily scan, and release them on shutdown."""

    settings = get_settings()
    initialize_database()
    _bootstrap_admin()

    scheduler = DailyScanScheduler(SessionLocal, settings=settings)
    app.state.scan_scheduler = scheduler
    if settings.scan_enabled:
        scheduler.start()
    else:
        logger.info("Daily employee scan disabled by configuration")
    try:
        yield
    finally:
        await scheduler.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Staff notifier", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
