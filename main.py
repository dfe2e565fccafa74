"""
main.py — Command line entry point.

Compute an availability calendar from three CSV exports and print it as JSON:

    python main.py compute bookings.csv maintenance.csv linked_rooms.csv

Or start the HTTP API (see app.py):

    python main.py serve
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from room_calendar.domain.constraints import RecordValidationError
from room_calendar.repository.csv_repository import CsvFormatError, CsvRecordRepository
from room_calendar.services.calendar_service import CalendarService, availability_to_json
from room_calendar.services.occupancy_service import CalendarError
from room_calendar.utils.config import get_settings
from room_calendar.utils.logger import configure_logging, get_logger


logger = get_logger("room_calendar.cli")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="room-calendar",
        description="Room availability calendar from bookings, maintenance and linked rooms.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override ROOM_CALENDAR_LOG_LEVEL for this run",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    compute = subcommands.add_parser("compute", help="Print availability JSON for three CSV files")
    compute.add_argument("bookings", type=Path, help="guest_id,email,room_id,from_date,to_date")
    compute.add_argument("maintenance", type=Path, help="room_id,from_date,to_date")
    compute.add_argument("linked_rooms", type=Path, help="suite_id,room_id1,room_id2,...")
    compute.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")

    serve = subcommands.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default=settings.server_host)
    serve.add_argument("--port", type=int, default=settings.server_port)
    serve.add_argument("--reload", action="store_true", help="Hot-reload on file changes")
    return parser


def run_compute(args: argparse.Namespace) -> int:
    repository = CsvRecordRepository(logger=get_logger("room_calendar.loader"))
    try:
        records = repository.load_all(args.bookings, args.maintenance, args.linked_rooms)
        availability = CalendarService().calculate(records)
    except (OSError, CsvFormatError) as exc:
        logger.error("I/O Error: %s", exc)
        return 1
    except (CalendarError, RecordValidationError) as exc:
        logger.error("Processing Error: %s", exc)
        return 1

    document = availability_to_json(availability)
    if args.output is None:
        print(document)
    else:
        args.output.write_text(document + "\n", encoding="utf-8")
        logger.info("Availability written to %s", args.output)
    return 0


def run_server(args: argparse.Namespace) -> int:
    print("=" * 60)
    print(f"  {get_settings().app_name}")
    print("=" * 60)
    print(f"  Server  : http://{args.host}:{args.port}")
    print(f"  API docs: http://{args.host}:{args.port}/docs")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    # Blocks until CTRL+C
    uvicorn.run(
        "app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level is not None:
        configure_logging(args.log_level)
    if args.command == "serve":
        return run_server(args)
    return run_compute(args)


if __name__ == "__main__":
    sys.exit(main())
