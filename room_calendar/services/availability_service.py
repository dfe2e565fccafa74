"""Free-span derivation as the complement of occupied spans."""

from __future__ import annotations

from datetime import date
from itertools import chain
from typing import Optional, Sequence

import pandas as pd

from room_calendar.domain.models import (
    AvailabilityIndex,
    Booking,
    DateRange,
    MaintenancePeriod,
    OccupancyIndex,
)
from room_calendar.services.occupancy_service import ONE_DAY


def add_months(value: date, months: int) -> date:
    """Calendar-month offset that clamps to the last day of shorter months."""
    return (pd.Timestamp(value) + pd.DateOffset(months=months)).date()


def resolve_window(
    bookings: Sequence[Booking],
    maintenance: Sequence[MaintenancePeriod],
    today: Optional[date] = None,
    default_months: int = 3,
) -> DateRange:
    """Global window spanning every event, or ``today`` plus a default horizon."""
    starts = [record.start for record in chain(bookings, maintenance)]
    ends = [record.end for record in chain(bookings, maintenance)]

    min_date = min(starts) if starts else (today or date.today())
    max_date = max(ends) if ends else add_months(min_date, default_months)
    return DateRange(min_date, max_date)


def derive_free_spans(occupied: Sequence[DateRange], window: DateRange) -> list[DateRange]:
    """Walk sorted occupied spans and emit the gaps inside ``window``."""
    free: list[DateRange] = []
    cursor = window.start
    for span in occupied:
        if cursor < span.start:
            free.append(DateRange(cursor, span.start - ONE_DAY))
        cursor = span.end + ONE_DAY
    if cursor <= window.end:
        free.append(DateRange(cursor, window.end))
    return free


def build_availability_index(occupancy: OccupancyIndex, window: DateRange) -> AvailabilityIndex:
    return {
        room_id: derive_free_spans(spans, window)
        for room_id, spans in occupancy.items()
    }
