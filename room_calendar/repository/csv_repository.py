"""Repository layer that loads calendar records from CSV files."""

from __future__ import annotations

import csv
import logging
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import IO, Any, Iterator, List, Optional, Union

from room_calendar.domain.constraints import (
    RecordValidationError,
    build_linked_group,
    validate_date_order,
    validate_room_id,
)
from room_calendar.domain.models import Booking, LinkedRoomGroup, MaintenancePeriod, RecordSet
from room_calendar.utils.config import Settings, get_settings
from room_calendar.utils.logger import get_logger
from room_calendar.utils.masking import mask_email, mask_guest_id


CsvSource = Union[str, Path, IO[str]]


class CsvFormatError(Exception):
    """Raised when a CSV file is empty or its header does not match."""


class CsvRecordRepository:
    """Parses booking, maintenance and linked-room CSV exports.

    Malformed rows are logged and skipped; only an empty file or a wrong
    header aborts a load. Guest identifiers are masked before they are kept
    and raw guest data never reaches the logger.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._logger = logger or get_logger(__name__)

    @contextmanager
    def _open(self, source: CsvSource) -> Iterator[IO[str]]:
        if isinstance(source, (str, Path)):
            with open(source, newline="", encoding=self._settings.csv_encoding) as handle:
                yield handle
        else:
            yield source

    def _parse_date(self, value: str) -> date:
        return datetime.strptime(value.strip(), self._settings.date_format).date()

    @staticmethod
    def _read_header(reader: Any, label: str) -> list[str]:
        header = next(reader, None)
        if header is None:
            raise CsvFormatError(f"Empty {label} CSV")
        return [column.strip() for column in header]

    @staticmethod
    def _data_rows(reader: Any) -> Iterator[tuple[int, list[str]]]:
        """Yield ``(line_number, fields)`` for every non-blank row left in ``reader``."""
        for fields in reader:
            if not any(field.strip() for field in fields):
                continue
            yield reader.line_num, fields

    def load_bookings(self, source: CsvSource) -> List[Booking]:
        """Columns: guest_id,email,room_id,from_date,to_date."""
        bookings: list[Booking] = []
        with self._open(source) as handle:
            reader = csv.reader(handle)
            header = self._read_header(reader, "bookings")
            if len(header) < 5 or header[0].lower() != "guest_id" or header[2].lower() != "room_id":
                raise CsvFormatError("Bookings CSV header invalid")

            for line_number, fields in self._data_rows(reader):
                if len(fields) < 5:
                    self._logger.warning("Skipping incomplete booking line %d", line_number)
                    continue
                try:
                    masked_guest_id = mask_guest_id(fields[0].strip())
                    self._logger.debug(
                        "Booking Guest=%s Email=%s Room=%s From=%s To=%s",
                        masked_guest_id,
                        mask_email(fields[1].strip()),
                        fields[2].strip(),
                        fields[3].strip(),
                        fields[4].strip(),
                    )
                    room_id = validate_room_id(fields[2])
                    start = self._parse_date(fields[3])
                    end = self._parse_date(fields[4])
                    validate_date_order(start, end, "Booking")
                except ValueError as exc:
                    self._logger.warning("Skipping invalid booking line %d: %s", line_number, exc)
                    continue
                bookings.append(
                    Booking(masked_guest_id=masked_guest_id, room_id=room_id, start=start, end=end)
                )
        return bookings

    def load_maintenance(self, source: CsvSource) -> List[MaintenancePeriod]:
        """Columns: room_id,from_date,to_date."""
        periods: list[MaintenancePeriod] = []
        with self._open(source) as handle:
            reader = csv.reader(handle)
            header = self._read_header(reader, "maintenance")
            if len(header) < 3 or header[0].lower() != "room_id":
                raise CsvFormatError("Maintenance CSV header invalid")

            for line_number, fields in self._data_rows(reader):
                if len(fields) < 3:
                    self._logger.warning("Skipping incomplete maintenance line %d", line_number)
                    continue
                try:
                    room_id = validate_room_id(fields[0])
                    start = self._parse_date(fields[1])
                    end = self._parse_date(fields[2])
                    validate_date_order(start, end, "Maintenance")
                except ValueError as exc:
                    self._logger.warning(
                        "Skipping invalid maintenance line %d: %s", line_number, exc
                    )
                    continue
                periods.append(MaintenancePeriod(room_id=room_id, start=start, end=end))
        return periods

    def load_linked_rooms(self, source: CsvSource) -> List[LinkedRoomGroup]:
        """Columns: suite_id followed by any number of member room ids."""
        groups: list[LinkedRoomGroup] = []
        with self._open(source) as handle:
            reader = csv.reader(handle)
            header = self._read_header(reader, "linked rooms")
            if len(header) < 2 or header[0].lower() != "suite_id":
                raise CsvFormatError("Linked rooms CSV header invalid")

            for line_number, fields in self._data_rows(reader):
                if len(fields) < 2:
                    self._logger.warning("Skipping incomplete linked rooms line %d", line_number)
                    continue
                try:
                    groups.append(build_linked_group(fields[0], fields[1:]))
                except RecordValidationError as exc:
                    self._logger.warning(
                        "Skipping invalid linked rooms line %d: %s", line_number, exc
                    )
        return groups

    def load_all(
        self,
        bookings_source: CsvSource,
        maintenance_source: CsvSource,
        linked_rooms_source: CsvSource,
    ) -> RecordSet:
        records = RecordSet(
            bookings=self.load_bookings(bookings_source),
            maintenance=self.load_maintenance(maintenance_source),
            linked_rooms=self.load_linked_rooms(linked_rooms_source),
        )
        self._logger.info(
            "Loaded %d bookings, %d maintenance periods, %d linked groups",
            len(records.bookings),
            len(records.maintenance),
            len(records.linked_rooms),
        )
        return records
