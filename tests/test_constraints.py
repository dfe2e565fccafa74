"""Tests for record and configuration validation rules."""

from __future__ import annotations

from datetime import date

import pytest

from room_calendar.domain.constraints import (
    CalendarConfig,
    RecordValidationError,
    build_linked_group,
    validate_calendar_config,
    validate_date_order,
    validate_room_id,
)
from room_calendar.utils.config import get_settings


def valid_config(**overrides) -> CalendarConfig:
    """Return a valid baseline CalendarConfig, optionally overriding fields."""
    defaults = {
        "default_window_months": 3,
        "date_format": "%Y-%m-%d",
    }
    defaults.update(overrides)
    return CalendarConfig(**defaults)


# --- CalendarConfig ---

def test_valid_config_passes() -> None:
    validate_calendar_config(valid_config())


def test_window_months_zero_raises() -> None:
    with pytest.raises(ValueError):
        validate_calendar_config(valid_config(default_window_months=0))


def test_window_months_negative_raises() -> None:
    with pytest.raises(ValueError):
        validate_calendar_config(valid_config(default_window_months=-1))


def test_empty_date_format_raises() -> None:
    with pytest.raises(ValueError):
        validate_calendar_config(valid_config(date_format=""))


# --- records ---

def test_same_day_range_passes() -> None:
    validate_date_order(date(2024, 1, 1), date(2024, 1, 1), "Booking")


def test_reversed_range_raises() -> None:
    with pytest.raises(RecordValidationError, match="Maintenance 'from' date after 'to' date"):
        validate_date_order(date(2024, 1, 2), date(2024, 1, 1), "Maintenance")


def test_room_id_is_trimmed() -> None:
    assert validate_room_id("  101 ") == "101"


def test_blank_room_id_raises() -> None:
    with pytest.raises(RecordValidationError):
        validate_room_id("   ")


def test_linked_group_keeps_member_order_and_drops_blanks() -> None:
    group = build_linked_group(" S1 ", ["103", " ", "101 ", ""])
    assert group.group_id == "S1"
    assert group.member_room_ids == ("103", "101")


def test_linked_group_without_members_raises() -> None:
    with pytest.raises(RecordValidationError, match="No rooms specified for suite"):
        build_linked_group("S1", ["", " "])


def test_record_validation_error_is_a_value_error() -> None:
    assert issubclass(RecordValidationError, ValueError)


# --- Settings ---

def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("ROOM_CALENDAR_DEFAULT_WINDOW_MONTHS", "6")
    monkeypatch.setenv("ROOM_CALENDAR_PORT", "9001")
    monkeypatch.delenv("ROOM_CALENDAR_API_URL", raising=False)
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.default_window_months == 6
        assert settings.server_port == 9001
        assert settings.api_base_url.endswith(":9001")
    finally:
        get_settings.cache_clear()


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("ROOM_CALENDAR_DEFAULT_WINDOW_MONTHS", raising=False)
    get_settings.cache_clear()
    try:
        settings = get_settings()
        assert settings.default_window_months == 3
        assert settings.date_format == "%Y-%m-%d"
    finally:
        get_settings.cache_clear()
