"""Domain-level validation rules for calendar records and configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from room_calendar.domain.models import LinkedRoomGroup


class RecordValidationError(ValueError):
    """Raised when a record breaks a domain invariant."""


@dataclass(frozen=True)
class CalendarConfig:
    default_window_months: int
    date_format: str


def validate_calendar_config(config: CalendarConfig) -> None:
    if config.default_window_months <= 0:
        raise ValueError("default_window_months must be > 0")
    if not config.date_format:
        raise ValueError("date_format must be non-empty")


def validate_room_id(room_id: str) -> str:
    cleaned = room_id.strip()
    if not cleaned:
        raise RecordValidationError("room_id must be non-empty")
    return cleaned


def validate_date_order(start: date, end: date, label: str) -> None:
    if start > end:
        raise RecordValidationError(f"{label} 'from' date after 'to' date")


def build_linked_group(group_id: str, room_ids: Iterable[str]) -> LinkedRoomGroup:
    """Create a group from raw cells, dropping blank member ids."""
    cleaned_group_id = group_id.strip()
    if not cleaned_group_id:
        raise RecordValidationError("suite_id must be non-empty")
    members = tuple(room_id.strip() for room_id in room_ids if room_id.strip())
    if not members:
        raise RecordValidationError("No rooms specified for suite")
    return LinkedRoomGroup(group_id=cleaned_group_id, member_room_ids=members)
