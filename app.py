"""
app.py — FastAPI application factory.

This is the ASGI application object imported by uvicorn.
It wires the calendar service and registers the availability router.

Usage (via launcher):
    python main.py serve

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from room_calendar.controllers.calendar_controller import router as calendar_router
from room_calendar.services.calendar_service import CalendarService
from room_calendar.utils.config import Settings, get_settings
from room_calendar.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The service is attached to app.state so the controller resolves it
    through its dependency provider instead of a module-level singleton.
    """
    settings = settings or get_settings()
    calendar_service = CalendarService(settings=settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
    )
    app.include_router(calendar_router)
    app.state.settings = settings
    app.state.calendar_service = calendar_service

    logger.info("Application created: %s %s", settings.app_name, settings.app_version)
    return app


# Module-level app object for uvicorn
app = create_app()
