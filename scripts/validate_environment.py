#!/usr/bin/env python3
"""Validate local room calendar environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from room_calendar.repository.csv_repository import CsvRecordRepository
from room_calendar.services.calendar_service import CalendarService, serialize_availability
from room_calendar.utils.config import get_settings

SEPARATOR_LINE = "=" * 44
SAMPLE_DIR = PROJECT_ROOT / "data" / "sample"


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("pandas", "pandas"),
        ("requests", "requests"),
        ("streamlit", "streamlit"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    from importlib.metadata import PackageNotFoundError, version

    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            _ = version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    settings = get_settings()
    repository = CsvRecordRepository(settings)

    # CHECK 3 — Sample CSV loading
    records = None
    try:
        records = repository.load_all(
            SAMPLE_DIR / "bookings.csv",
            SAMPLE_DIR / "maintenance.csv",
            SAMPLE_DIR / "linked_rooms.csv",
        )
        ok, line = _print_result(
            "Sample CSV loading",
            True,
            f": {len(records.bookings)} bookings, {len(records.maintenance)} maintenance, "
            f"{len(records.linked_rooms)} suites",
        )
    except Exception as exc:
        ok, line = _print_result("Sample CSV loading", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 — Availability computation
    if records is not None:
        try:
            availability = serialize_availability(CalendarService(settings).calculate(records))
            missing = [group.group_id for group in records.linked_rooms if group.group_id not in availability]
            if missing:
                raise RuntimeError(f"suites missing from result: {missing}")
            ok, line = _print_result(
                "Availability computation",
                True,
                f": {len(availability)} identifiers",
            )
        except Exception as exc:
            ok, line = _print_result("Availability computation", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Room Calendar Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
