"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from showplanner.api.routes import health, movies, schedules
from showplanner.config import settings
from showplanner.logging_config import configure_logging
from showplanner.tasks.cleanup_job import run_cleanup_past_shows

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = AsyncIOScheduler()
    if settings.cleanup_enabled:
        scheduler.add_job(
            run_cleanup_past_shows,
            trigger=CronTrigger(hour=settings.cleanup_hour, minute=0),
            id="daily_past_show_cleanup",
            name="Daily cleanup of past shows",
            replace_existing=True,
        )
        scheduler.start()
        logger.info(f"Scheduler started: past-show cleanup registered daily at {settings.cleanup_hour:02d}:00")

    yield

    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")


app = FastAPI(
    title="Showplanner API",
    description="Show scheduling and conflict detection for theatre screens",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(movies.router, prefix="/api", tags=["movies"])
app.include_router(schedules.router, prefix="/api", tags=["schedules"])


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run("showplanner.main:app", host=settings.api_host, port=settings.api_port)
