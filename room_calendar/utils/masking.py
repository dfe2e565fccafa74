"""Redaction helpers for guest data that may appear in log lines."""

from __future__ import annotations

from typing import Optional


def mask_guest_id(raw_id: Optional[str]) -> str:
    """Keep only the first and last character of a guest identifier."""
    if not raw_id:
        return "*****"
    if len(raw_id) <= 2:
        return "*" * len(raw_id)
    return raw_id[0] + "*" * (len(raw_id) - 2) + raw_id[-1]


def mask_email(raw_email: Optional[str]) -> str:
    """Hide the local part of an email address, keeping ``@domain``."""
    if raw_email is None or not raw_email.strip():
        return "***"
    at = raw_email.find("@")
    if at < 1:
        return "***"
    return "***" + raw_email[at:]
