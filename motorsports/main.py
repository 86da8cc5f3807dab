"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from motorsports.config import Settings, settings as default_settings
from motorsports.database import build_engine, build_session_factory, init_db
from motorsports.exceptions import register_exception_handlers
from motorsports.logging_config import setup_logging
from motorsports.routes import admin, analytics, auth, drivers, events, parts, setups, uploads, vehicles
from motorsports.services.storage import ObjectStorage
from motorsports.services.weather import WeatherService

logger = logging.getLogger(__name__)

ROUTERS = (auth, admin, vehicles, events, drivers, setups, analytics, parts, uploads)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.storage = ObjectStorage(settings)
    app.state.weather_service = WeatherService(settings)
    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set; authenticated endpoints will fail")
    logger.info("Application started", extra={"version": settings.APP_VERSION})
    yield
    engine.dispose()
    logger.info("Application stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Team management for motorsports: vehicles, drivers, events, setups, lap times and parts",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    for module in ROUTERS:
        app.include_router(module.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "message": f"{settings.APP_NAME} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api")
    async def api_info():
        """API name, version and endpoint map."""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "endpoints": {
                "health": "/health",
                "auth": "/api/auth",
                "admin": "/api/admin/users",
                "vehicles": "/api/vehicles",
                "events": "/api/events",
                "weather": "/api/events/:id/weather",
                "drivers": "/api/drivers",
                "setups": "/api/setups",
                "analytics": "/api/analytics",
                "parts": "/api/parts",
                "uploads": "/api/uploads",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("motorsports.main:app", host="0.0.0.0", port=default_settings.PORT)
