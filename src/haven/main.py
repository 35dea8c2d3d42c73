"""
Sensory Haven FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (engine startup/shutdown)
- CORS configuration
- Error handling middleware
- Router registration
- Metrics endpoint

This is the production entry point for the breathing backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from haven.config import Settings, get_settings
from haven.config.logging_config import configure_logging, get_logger
from haven.api.dependencies import set_engine
from haven.api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from haven.api.v1.router import api_router
from haven.infrastructure.metrics import metrics_router, update_system_info
from haven.infrastructure.monitoring import init_sentry
from haven.services.breathing.engine import BreathingSessionEngine
from haven.services.breathing.factory import build_engine

logger = get_logger(__name__)

EngineBuilder = Callable[[Settings], BreathingSessionEngine]


def create_application(
    settings: Optional[Settings] = None,
    engine_builder: EngineBuilder = build_engine,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings override (defaults to cached settings)
        engine_builder: Builds the breathing engine during startup

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        The engine is created inside the running loop so its clock
        schedules ticks on the same loop that serves requests.
        """
        logger.info(
            "Starting Sensory Haven breathing backend",
            env=settings.env,
            version="0.1.0",
        )

        engine = engine_builder(settings)
        set_engine(engine)
        try:
            yield
        finally:
            logger.info("Shutting down breathing backend")
            # Releases the session clock and silences any voice cue
            engine.reset()
            set_engine(None)
            logger.info("Breathing backend shutdown complete")

    app = FastAPI(
        title="Sensory Haven API",
        description="Guided breathing session engine - Backend API",
        version="0.1.0",
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlerMiddleware)
    register_exception_handlers(app)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "Sensory Haven API",
            "version": "0.1.0",
            "status": "operational",
        }

    return app


def bootstrap(settings: Settings) -> FastAPI:
    """Configure logging and monitoring, then build the app."""
    configure_logging(settings)
    init_sentry(
        dsn=settings.monitoring.dsn.get_secret_value(),
        environment=settings.env,
        sample_rate=settings.monitoring.sample_rate,
        traces_sample_rate=settings.monitoring.traces_sample_rate,
    )
    update_system_info(settings.env)
    return create_application(settings)


# Create application instance
app = bootstrap(get_settings())


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "haven.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
