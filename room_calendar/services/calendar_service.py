"""Top-level availability pipeline and its serialized form."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, RootModel

from room_calendar.domain.constraints import CalendarConfig, validate_calendar_config
from room_calendar.domain.models import (
    AvailabilityIndex,
    Booking,
    LinkedRoomGroup,
    MaintenancePeriod,
    RecordSet,
)
from room_calendar.services.availability_service import build_availability_index, resolve_window
from room_calendar.services.occupancy_service import (
    UnknownRoomReporter,
    build_occupancy_index,
    collect_room_universe,
)
from room_calendar.services.suite_service import add_suite_availability
from room_calendar.utils.config import Settings, get_settings
from room_calendar.utils.logger import get_logger


logger = get_logger(__name__)


class DateSpanModel(BaseModel):
    """Wire form of a free span: ``{"from": "YYYY-MM-DD", "to": "YYYY-MM-DD"}``."""

    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(alias="from")
    to_date: date = Field(alias="to")


class AvailabilityDocument(RootModel[dict[str, list[DateSpanModel]]]):
    pass


def compute_availability(
    bookings: Sequence[Booking],
    maintenance: Sequence[MaintenancePeriod],
    linked_rooms: Sequence[LinkedRoomGroup],
    *,
    today: Optional[date] = None,
    default_window_months: int = 3,
    reporter: Optional[UnknownRoomReporter] = None,
) -> AvailabilityIndex:
    """Free spans per room and per suite over the global event window.

    Raises ``BookingConflictError`` when two bookings share a room and a date;
    nothing is returned in that case.
    """
    universe = collect_room_universe(bookings, maintenance, linked_rooms)
    if not universe:
        return {}

    window = resolve_window(
        bookings,
        maintenance,
        today=today,
        default_months=default_window_months,
    )
    occupancy = build_occupancy_index(universe, bookings, maintenance, reporter=reporter)
    availability = build_availability_index(occupancy, window)
    return add_suite_availability(availability, linked_rooms)


def serialize_availability(availability: AvailabilityIndex) -> dict[str, list[dict[str, str]]]:
    return {
        identifier: [span.to_dict() for span in availability[identifier]]
        for identifier in sorted(availability)
    }


def to_document(availability: AvailabilityIndex) -> AvailabilityDocument:
    return AvailabilityDocument.model_validate(serialize_availability(availability))


def availability_to_json(availability: AvailabilityIndex, indent: int = 2) -> str:
    if not availability:
        return "{}"
    return to_document(availability).model_dump_json(indent=indent, by_alias=True)


def availability_frame(serialized: dict[str, list[dict[str, str]]]) -> pd.DataFrame:
    """One row per free span; identifiers without any span get a single blank row."""
    rows: list[dict[str, object]] = []
    for identifier in sorted(serialized):
        spans = serialized[identifier]
        if not spans:
            rows.append({"identifier": identifier, "from": "", "to": "", "days": 0})
            continue
        for span in spans:
            days = (pd.Timestamp(span["to"]) - pd.Timestamp(span["from"])).days + 1
            rows.append({"identifier": identifier, "from": span["from"], "to": span["to"], "days": days})
    frame = pd.DataFrame(rows, columns=["identifier", "from", "to", "days"])
    return frame.astype({"days": "int64"})


class CalendarService:
    """Runs the availability pipeline with application settings applied."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        reporter: Optional[UnknownRoomReporter] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._config = CalendarConfig(
            default_window_months=self._settings.default_window_months,
            date_format=self._settings.date_format,
        )
        validate_calendar_config(self._config)
        self._reporter = reporter

    @property
    def config(self) -> CalendarConfig:
        return self._config

    def calculate(self, records: RecordSet, today: Optional[date] = None) -> AvailabilityIndex:
        availability = compute_availability(
            records.bookings,
            records.maintenance,
            records.linked_rooms,
            today=today,
            default_window_months=self._config.default_window_months,
            reporter=self._reporter,
        )
        logger.info(
            "Computed availability for %d identifiers from %d bookings, "
            "%d maintenance periods, %d linked groups",
            len(availability),
            len(records.bookings),
            len(records.maintenance),
            len(records.linked_rooms),
        )
        return availability
