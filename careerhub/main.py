import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Load env before settings are read (tests configure the environment themselves)
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv()

from careerhub import __version__
from careerhub.api import activity, health, stats, streaks
from careerhub.core.config import Settings, settings as default_settings, validate_config
from careerhub.core.errors import (
    AppError,
    app_error_handler,
    http_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from careerhub.core.logging import configure_logging
from careerhub.core.middleware.request_id import RequestIdMiddleware
from careerhub.core.services import Services, build_services
from careerhub.core.validation import validate_env

logger = logging.getLogger("careerhub")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting CareerHub backend...")
    app.state.startup_time = time.time()
    services: Services = app.state.services
    if services.db is not None:
        services.db.create_all_tables()
    try:
        yield
    finally:
        if services.db is not None:
            services.db.dispose()
        logger.info("Stopping CareerHub backend...")


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings override (defaults to environment-derived settings)
        services: Pre-built services (tests inject in-memory or SQLite-backed ones)
    """
    cfg = settings or default_settings

    configure_logging(cfg.ENV)
    validate_env(settings_obj=cfg)
    validate_config(strict=cfg.CONFIG_STRICT, settings_obj=cfg)

    app = FastAPI(title="CareerHub - Backend", version=__version__, lifespan=lifespan)
    app.state.settings = cfg
    app.state.services = services or build_services(cfg)

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(activity.router)
    app.include_router(streaks.router)
    app.include_router(stats.router)
    app.include_router(health.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "careerhub.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
