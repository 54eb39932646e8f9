"""
Study Planner API application.

``create_app`` builds a fresh FastAPI instance from the YAML settings;
tests call it directly. uvicorn loads ``studyplanner.backend.main:app``,
which is built on first attribute access so that importing this module
never reads configuration.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studyplanner.backend.api import health
from studyplanner.backend.api.v1 import router as api_v1_router
from studyplanner.backend.core.config import AppConfig, get_app_config
from studyplanner.backend.core.database import dispose_engine
from studyplanner.backend.core.exception_handlers import register_exception_handlers
from studyplanner.backend.core.logging import get_logger, setup_logging
from studyplanner.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    application = get_app_config().application
    logger.info(
        "Application starting",
        extra={"app_name": application.name, "env": application.environment},
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Application shutting down")


def _install_middleware(app: FastAPI, config: AppConfig) -> None:
    # Added last runs first: CORS answers preflights before request tracking.
    app.add_middleware(
        RequestContextMiddleware,
        log_level="info" if config.features.api_request_logging else "debug",
    )
    origins = config.application.cors.origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=config.security.cors.allow_methods,
            allow_headers=config.security.cors.allow_headers,
        )


def create_app() -> FastAPI:
    config = get_app_config()
    application = config.application
    show_docs = application.docs_enabled and application.debug

    app = FastAPI(
        title=application.name,
        description=application.description,
        version=application.version,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        lifespan=lifespan,
    )

    _install_middleware(app, config)
    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=application.api_prefix)
    return app


def get_app() -> FastAPI:
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
