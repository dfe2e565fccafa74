"""HTTP controller layer for availability calculation."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from room_calendar.controllers.dependencies import get_app_settings, get_calendar_service
from room_calendar.domain.constraints import RecordValidationError, build_linked_group
from room_calendar.domain.models import Booking, LinkedRoomGroup, MaintenancePeriod, RecordSet
from room_calendar.services.calendar_service import (
    AvailabilityDocument,
    CalendarService,
    to_document,
)
from room_calendar.services.occupancy_service import BookingConflictError
from room_calendar.utils.config import Settings
from room_calendar.utils.logger import get_logger
from room_calendar.utils.masking import mask_email, mask_guest_id


logger = get_logger(__name__)
router = APIRouter(tags=["availability"])


class DatedRoomRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_id: str = Field(min_length=1)
    from_date: date = Field(alias="from")
    to_date: date = Field(alias="to")

    @field_validator("room_id")
    @classmethod
    def strip_room_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("room_id must be non-empty")
        return cleaned

    @model_validator(mode="after")
    def validate_date_order(self) -> "DatedRoomRecord":
        if self.from_date > self.to_date:
            raise ValueError("'from' date must not be after 'to' date")
        return self


class BookingPayload(DatedRoomRecord):
    guest_id: str = ""
    email: Optional[str] = None


class MaintenancePayload(DatedRoomRecord):
    pass


class LinkedRoomsPayload(BaseModel):
    suite_id: str = Field(min_length=1)
    room_ids: list[str] = Field(min_length=1)


class AvailabilityRequest(BaseModel):
    bookings: list[BookingPayload] = Field(default_factory=list)
    maintenance: list[MaintenancePayload] = Field(default_factory=list)
    linked_rooms: list[LinkedRoomsPayload] = Field(default_factory=list)


class AvailabilityResponse(BaseModel):
    availability: AvailabilityDocument


class HealthResponse(BaseModel):
    status: str
    app_version: str


def _to_records(payload: AvailabilityRequest) -> RecordSet:
    bookings: list[Booking] = []
    for item in payload.bookings:
        masked_guest_id = mask_guest_id(item.guest_id)
        logger.debug(
            "Booking Guest=%s Email=%s Room=%s From=%s To=%s",
            masked_guest_id,
            mask_email(item.email),
            item.room_id,
            item.from_date,
            item.to_date,
        )
        bookings.append(
            Booking(
                masked_guest_id=masked_guest_id,
                room_id=item.room_id,
                start=item.from_date,
                end=item.to_date,
            )
        )
    maintenance = [
        MaintenancePeriod(room_id=item.room_id, start=item.from_date, end=item.to_date)
        for item in payload.maintenance
    ]
    linked_rooms: list[LinkedRoomGroup] = [
        build_linked_group(item.suite_id, item.room_ids) for item in payload.linked_rooms
    ]
    return RecordSet(bookings=bookings, maintenance=maintenance, linked_rooms=linked_rooms)


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return HealthResponse(status="ok", app_version=settings.app_version)


@router.post(
    "/availability",
    response_model=AvailabilityResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
)
async def calculate_availability(
    payload: AvailabilityRequest,
    service: CalendarService = Depends(get_calendar_service),
) -> AvailabilityResponse:
    """Compute free spans per room and per suite for the submitted records."""
    try:
        records = _to_records(payload)
        availability = service.calculate(records)
        return AvailabilityResponse(availability=to_document(availability))
    except RecordValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc
    except BookingConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected availability failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute availability",
        ) from exc
