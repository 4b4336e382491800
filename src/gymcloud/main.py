"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gymcloud.config import get_settings
from gymcloud.gamification.router import router as gamification_router
from gymcloud.health.router import router as health_router
from gymcloud.middleware import setup_middleware
from gymcloud.redis_client import close_redis, init_redis
from gymcloud.workouts.router import router as workouts_router


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_redis(settings.redis_url, max_connections=settings.redis_max_connections)

    yield

    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="GymCloud Gamification API",
        description="Levels, point multipliers, badge progress and workout records for GymCloud members",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(gamification_router)
    app.include_router(workouts_router)

    return app


app = create_app()
