from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.exceptions import register_exception_handlers  # central mapping
from shared.infrastructure.observability.logger import configure_logging, get_logger
from enrollment.bootstrap import dispose_session_factory
from enrollment.api.routes import router as dugsi_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Application starting",
        environment=settings.ENVIRONMENT,
        billing_provider_configured=settings.billing_provider_configured,
    )
    yield
    await dispose_session_factory()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.json_logs)

    app = FastAPI(
        title="Dugsi Enrollment & Billing API",
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    # Routers
    app.include_router(dugsi_router)

    # Centralized error handling → {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": "Dugsi Enrollment & Billing API",
            "docs": "/docs",
        }

    return app


app = create_app()
