"""Occupied-span construction per room from bookings and maintenance."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Iterable, Optional, Sequence

from room_calendar.domain.models import (
    Booking,
    DateRange,
    LinkedRoomGroup,
    MaintenancePeriod,
    OccupancyIndex,
)
from room_calendar.utils.logger import get_logger


logger = get_logger(__name__)

ONE_DAY = timedelta(days=1)

# Called as reporter(record_kind, room_id) for records naming a room outside the universe.
UnknownRoomReporter = Callable[[str, str], None]


class CalendarError(Exception):
    """Base exception for availability computation failures."""


class BookingConflictError(CalendarError):
    """Raised when two bookings claim the same room on the same date."""

    def __init__(self, room_id: str, conflict: DateRange) -> None:
        self.room_id = room_id
        self.conflict = conflict
        super().__init__(
            f"Overlapping booking detected for room {room_id} "
            f"in range {conflict.start.isoformat()} to {conflict.end.isoformat()}"
        )


def log_unknown_room(record_kind: str, room_id: str) -> None:
    logger.warning("Unknown room in %s: %s", record_kind, room_id)


def collect_room_universe(
    bookings: Iterable[Booking],
    maintenance: Iterable[MaintenancePeriod],
    linked_rooms: Iterable[LinkedRoomGroup],
) -> set[str]:
    """Every room id referenced by any record or suite membership list."""
    universe = {booking.room_id for booking in bookings}
    universe.update(period.room_id for period in maintenance)
    for group in linked_rooms:
        universe.update(group.member_room_ids)
    return universe


def merge_spans(spans: Sequence[DateRange]) -> list[DateRange]:
    """Collapse start-sorted spans that overlap or touch into minimal spans."""
    if not spans:
        return []

    merged: list[DateRange] = []
    current = spans[0]
    for following in spans[1:]:
        if current.end + ONE_DAY >= following.start:
            current = DateRange(current.start, max(current.end, following.end))
        else:
            merged.append(current)
            current = following
    merged.append(current)
    return merged


def _has_overlap(recorded: list[DateRange], candidate: DateRange) -> bool:
    return any(span.overlaps(candidate) for span in recorded)


def build_occupancy_index(
    universe: Iterable[str],
    bookings: Sequence[Booking],
    maintenance: Sequence[MaintenancePeriod],
    reporter: Optional[UnknownRoomReporter] = None,
) -> OccupancyIndex:
    """Map every room in ``universe`` to its sorted, merged occupied spans.

    Bookings are checked against earlier bookings only and any overlap aborts
    the build with ``BookingConflictError``. Maintenance periods are appended
    afterwards without a check, so they merge silently with bookings and with
    each other. Records for rooms outside the universe are reported and skipped.
    """
    report = reporter or log_unknown_room
    occupied: dict[str, list[DateRange]] = {room_id: [] for room_id in universe}

    for booking in bookings:
        recorded = occupied.get(booking.room_id)
        if recorded is None:
            report("booking", booking.room_id)
            continue
        span = booking.span
        if _has_overlap(recorded, span):
            raise BookingConflictError(booking.room_id, span)
        recorded.append(span)

    for period in maintenance:
        recorded = occupied.get(period.room_id)
        if recorded is None:
            report("maintenance", period.room_id)
            continue
        recorded.append(period.span)

    return {
        room_id: merge_spans(sorted(spans, key=lambda span: span.start))
        for room_id, spans in occupied.items()
    }
