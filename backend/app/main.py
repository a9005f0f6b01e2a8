"""
DevConnect profile API.

    uvicorn backend.app.main:app
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devconnect.config import is_production
from devconnect.db import db
from devconnect.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import profile as profile_router

settings = get_settings()
configure_logging(level="DEBUG" if settings.debug else "INFO")
logger = get_logger("api")


def wait_for_database(attempts: int = 3, backoff_seconds: float = 2.0) -> None:
    """Poll ``db.health_check`` with linear backoff. Raises RuntimeError when it never passes."""
    for attempt in range(1, attempts + 1):
        result = db.health_check()
        if result["healthy"]:
            logger.info("database_reachable", attempt=attempt, latency_ms=result["latency_ms"])
            return
        logger.warning("database_unreachable", attempt=attempt, attempts=attempts, error=result["error"])
        if attempt < attempts:
            time.sleep(backoff_seconds * attempt)
    raise RuntimeError(f"Database unreachable after {attempts} attempts; check DATABASE_URL")


def _check_config() -> None:
    errors, notes = settings.validate_production_config()
    for note in notes:
        logger.warning("config_warning", message=note)
    if not is_production():
        return
    for error in errors:
        logger.error("config_error", error=error)
    if errors:
        raise RuntimeError("Invalid production configuration")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("app_startup", app_name=settings.app_name)
    _check_config()
    db.initialize(settings.database_url)
    wait_for_database()
    if settings.auto_create_tables:
        db.create_all_tables()
        logger.info("database_tables_created")

    yield

    logger.info("app_shutdown")
    db.reset()


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    # Outermost, so the request log line already carries request_id
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def liveness():
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness():
        """200 while the database answers ``SELECT 1``, 503 otherwise."""
        result = db.health_check()
        body = {
            "status": "ready" if result["healthy"] else "not_ready",
            "checks": {"database": result["healthy"]},
        }
        if not result["healthy"]:
            return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
        return body

    app.include_router(profile_router.router, prefix=settings.api_prefix)
    return app


app = create_app()
