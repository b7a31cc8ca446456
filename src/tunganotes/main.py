# Main application entry point
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api import auth_router, health_router, notes_router
from .config import Settings, get_settings
from .core.errors import register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import Database

# Setup logging first
setup_logging()
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(
        "Starting Tunga Notes API",
        extra={"version": settings.app_version, "environment": settings.environment},
    )

    database = Database.from_settings(settings)
    app.state.database = database
    if settings.create_tables_on_startup:
        try:
            await database.create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            await database.dispose()
            raise

    # The API still serves notes without Redis; logout just stops revoking tokens
    redis_client = get_redis_client()
    try:
        await redis_client.connect()
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Continuing without Redis...")

    yield

    # Shutdown
    logger.info("Shutting down Tunga Notes API")
    await redis_client.disconnect()
    await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; the database itself is opened by the lifespan."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Personal notes with per-user ownership",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Add logging middleware
    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "message": "Notes API is running",
            "status": "active",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # Liveness only; /api/health checks the dependencies
    @app.get("/health")
    async def basic_health():
        return {"status": "ok"}

    if settings.is_production and settings.spa_dist_dir:
        # Mounted last so the API routes above are matched first
        app.mount("/", StaticFiles(directory=settings.spa_dist_dir, html=True), name="spa")
        logger.info("Serving frontend", extra={"directory": settings.spa_dist_dir})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "tunganotes.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.reload,
        log_config=None,
    )
