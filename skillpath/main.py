"""SkillPath - FastAPI app entry point."""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillpath.core.config import get_settings
from skillpath.core.errors import register_error_handlers
from skillpath.core.logging import configure_logging
from skillpath.db.base import Base
from skillpath.db.session import engine, AsyncSessionLocal
from skillpath.routers import assessment, auth, gamification, generation, lessons, modules, profile, quizzes
from skillpath.services.seeding import seed_all

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_on_startup:
        async with AsyncSessionLocal() as db:
            await seed_all(db)

    logger.info("api_startup", app=settings.app_name)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.debug)

    app = FastAPI(
        title=settings.app_name,
        description="Learning modules, quizzes, points, badges and leaderboard",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(assessment.router)
    app.include_router(modules.router)
    app.include_router(quizzes.router)
    app.include_router(gamification.router)
    app.include_router(generation.router)
    app.include_router(lessons.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
