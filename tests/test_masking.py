from __future__ import annotations

from room_calendar.utils.masking import mask_email, mask_guest_id


def test_guest_id_keeps_first_and_last_character() -> None:
    assert mask_guest_id("G1001") == "G***1"
    assert mask_guest_id("abc") == "a*c"


def test_short_guest_ids_are_fully_masked() -> None:
    assert mask_guest_id("A") == "*"
    assert mask_guest_id("AB") == "**"


def test_missing_guest_id() -> None:
    assert mask_guest_id("") == "*****"
    assert mask_guest_id(None) == "*****"


def test_masking_a_masked_id_is_stable() -> None:
    assert mask_guest_id(mask_guest_id("SECRET42")) == "S******2"


def test_email_keeps_domain_only() -> None:
    assert mask_email("alice@example.com") == "***@example.com"


def test_email_without_local_part_or_at_sign() -> None:
    assert mask_email("@example.com") == "***"
    assert mask_email("not-an-email") == "***"
    assert mask_email("   ") == "***"
    assert mask_email(None) == "***"
