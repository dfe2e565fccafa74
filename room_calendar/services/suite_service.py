"""Suite availability as the intersection of member room availability."""

from __future__ import annotations

from typing import Sequence

from room_calendar.domain.models import AvailabilityIndex, DateRange, LinkedRoomGroup


def intersect_spans(left: Sequence[DateRange], right: Sequence[DateRange]) -> list[DateRange]:
    """Two-pointer intersection of two ascending, non-overlapping span lists."""
    result: list[DateRange] = []
    i = 0
    j = 0
    while i < len(left) and j < len(right):
        first = left[i]
        second = right[j]
        start = max(first.start, second.start)
        end = min(first.end, second.end)
        if start <= end:
            result.append(DateRange(start, end))
        if first.end < second.end:
            i += 1
        else:
            j += 1
    return result


def add_suite_availability(
    availability: AvailabilityIndex,
    linked_rooms: Sequence[LinkedRoomGroup],
) -> AvailabilityIndex:
    """Return a copy of ``availability`` extended with one entry per suite.

    Groups are resolved in order against the growing mapping, so a suite id
    listed as a member of a later group contributes its own intersection.
    A member without an entry counts as never available.
    """
    combined: AvailabilityIndex = dict(availability)
    for group in linked_rooms:
        if not group.member_room_ids:
            continue
        first_member, *other_members = group.member_room_ids
        intersection = list(combined.get(first_member, []))
        for room_id in other_members:
            if not intersection:
                break
            intersection = intersect_spans(intersection, combined.get(room_id, []))
        combined[group.group_id] = intersection
    return combined
