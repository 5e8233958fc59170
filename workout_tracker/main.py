from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workout_tracker.core.config import settings
from workout_tracker.core.db import engine, init_models
from workout_tracker.core.errors import register_exception_handlers
from workout_tracker.core.logging import configure_logging
from workout_tracker.routers.exercises import router as exercises_router
from workout_tracker.routers.health import router as health_router
from workout_tracker.routers.sessions import router as sessions_router
from workout_tracker.routers.templates import router as templates_router

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await init_models()
    logger.info("workout_tracker_started", env=settings.APP_ENV)
    yield
    await engine.dispose()


app = FastAPI(title="Workout Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(sessions_router)
app.include_router(exercises_router)
app.include_router(templates_router)
