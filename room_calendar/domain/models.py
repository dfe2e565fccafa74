"""Domain records for occupancy and availability calculation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List


@dataclass(frozen=True)
class DateRange:
    """Inclusive span of calendar dates."""

    start: date
    end: date

    def overlaps(self, other: DateRange) -> bool:
        return not (self.end < other.start or self.start > other.end)

    def to_dict(self) -> dict[str, str]:
        return {"from": self.start.isoformat(), "to": self.end.isoformat()}


@dataclass(frozen=True)
class Booking:
    masked_guest_id: str
    room_id: str
    start: date
    end: date

    @property
    def span(self) -> DateRange:
        return DateRange(self.start, self.end)


@dataclass(frozen=True)
class MaintenancePeriod:
    room_id: str
    start: date
    end: date

    @property
    def span(self) -> DateRange:
        return DateRange(self.start, self.end)


@dataclass(frozen=True)
class LinkedRoomGroup:
    group_id: str
    member_room_ids: tuple[str, ...]


@dataclass(frozen=True)
class RecordSet:
    """The three record lists a single calendar run consumes."""

    bookings: list[Booking]
    maintenance: list[MaintenancePeriod]
    linked_rooms: list[LinkedRoomGroup]


OccupancyIndex = Dict[str, List[DateRange]]
AvailabilityIndex = Dict[str, List[DateRange]]
