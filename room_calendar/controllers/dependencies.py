"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from room_calendar.services.calendar_service import CalendarService
from room_calendar.utils.config import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        request.app.state.settings = settings
    return settings


def get_calendar_service(request: Request) -> CalendarService:
    service = getattr(request.app.state, "calendar_service", None)
    if service is None:
        try:
            service = CalendarService(settings=get_app_settings(request))
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Calendar service is not initialized: {exc}",
            ) from exc
        request.app.state.calendar_service = service
    return service
