#!/usr/bin/env python3
"""
Print a month of the training calendar with its events.

Events come from the LMS API (LMS_API_BASE_URL / LMS_SESSION_COOKIE) or from
an exported JSON file.

Usage:
    uv run python src/scripts/show_month.py --month 2024-02
    uv run python src/scripts/show_month.py --month 2024-02 --events-file events.json --user-id 7 --role trainee
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime, time, tzinfo
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx

from core.config import (
    LMS_API_BASE_URL,
    LMS_API_TIMEOUT,
    LMS_SESSION_COOKIE,
    MONTH_NAMES,
    UPCOMING_EVENTS_LIMIT,
    USER_ROLES,
    get_calendar_timezone,
)
from core.logging import configure_logging
from core.validation import InvalidArgument
from models.events import CalendarEvent
from models.users import SessionUser
from services.calendar import (
    MonthView,
    build_month_view,
    category_label,
    format_time,
    local_end,
    local_start,
    month_badge,
    month_of,
    upcoming_events,
    venue_badges,
)
from services.events_api import (
    ApiSession,
    EventsApiError,
    fetch_events,
    fetch_month_events,
    load_events_file,
)
from services.visibility import visible_events

logger = logging.getLogger(__name__)

CELL_WIDTH = 6


# =============================================================================
# ARGUMENTS
# =============================================================================


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, zero-based month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got '{value}'")
    return parsed.year, parsed.month - 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show a month of the training calendar")
    parser.add_argument("--month", type=parse_month, help="Month to show (YYYY-MM), default current")
    parser.add_argument("--events-file", type=Path, help="Read events from a JSON export instead of the API")
    parser.add_argument("--user-id", type=int, help="Only show events visible to this user (events file only; the API already scopes to the session)")
    parser.add_argument("--role", choices=USER_ROLES, default="trainee", help="Role of --user-id")
    parser.add_argument("--upcoming", type=int, default=UPCOMING_EVENTS_LIMIT, help="Number of upcoming events to list")
    parser.add_argument("--timezone", help="IANA timezone for placing events (default CALENDAR_TIMEZONE)")
    parser.add_argument("--today", type=date.fromisoformat, help=argparse.SUPPRESS)
    return parser


# =============================================================================
# API
# =============================================================================


def create_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=LMS_API_TIMEOUT)


async def load_from_api(
    session: ApiSession,
    year: int,
    month: int,
    now: datetime,
    tz: tzinfo | None = None,
) -> tuple[list[CalendarEvent], list[CalendarEvent]]:
    """
    Fetch the displayed month's events and everything from now on.

    Upcoming events are not limited to the displayed month.
    """
    async with create_client() as client:
        month_events = await fetch_month_events(session, year, month, client=client, tz=tz)
        upcoming = await fetch_events(session, start=now, client=client, tz=tz)
    return month_events, upcoming


# =============================================================================
# RENDERING
# =============================================================================


def render_grid(view: MonthView) -> list[str]:
    """Render the 6-week grid. Padding days in (), today marked with *."""
    lines = [view.title, "".join(h.rjust(CELL_WIDTH) for h in view.weekday_headers)]
    for week in view.weeks:
        row = ""
        for day in week:
            if not day.cell.in_target_month:
                label = f"({day.cell.day_number})"
            else:
                label = str(day.cell.day_number)
                if day.events:
                    label += f"+{len(day.events)}"
                if day.is_today:
                    label = "*" + label
            row += label.rjust(CELL_WIDTH)
        lines.append(row)
    return lines


def render_day_events(view: MonthView, tz: tzinfo | None = None) -> list[str]:
    """List each in-month day's events under the grid."""
    lines = []
    for day in view.days:
        if not day.events:
            continue
        lines.append(f"{MONTH_NAMES[view.month][:3]} {day.cell.day_number}:")
        for event in day.events:
            lines.append(
                f"  [{category_label(event.category)}] "
                f"{format_time(local_start(event, tz))} - {format_time(local_end(event, tz))}  "
                f"{event.title}"
            )
    return lines


def render_upcoming(events: list[CalendarEvent], tz: tzinfo | None = None) -> list[str]:
    lines = ["Upcoming Events"]
    if not events:
        lines.append("  No upcoming events")
        return lines
    for event in events:
        month, day = month_badge(local_start(event, tz))
        badges = ", ".join(venue_badges(event))
        line = f"  {month} {day:>2}  {event.title}"
        if event.location:
            line += f" @ {event.location}"
        if badges:
            line += f" [{badges}]"
        lines.append(line)
    return lines


# =============================================================================
# MAIN
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Show the month. Returns the process exit code."""
    configure_logging()
    args = build_parser().parse_args(argv)

    today = args.today or date.today()
    year, month = args.month or month_of(today)

    try:
        tz = get_calendar_timezone(args.timezone)
        now = datetime.combine(today, time.min) if args.today else datetime.now()

        if args.events_file:
            events, participants = load_events_file(args.events_file)
            if args.user_id is not None:
                user = SessionUser(id=args.user_id, role=args.role)
                events = visible_events(events, user, participants)
            candidates = events
        else:
            if args.user_id is not None:
                logger.info("--user-id ignored: API results are already scoped to the session user")
            session = ApiSession(LMS_API_BASE_URL, LMS_SESSION_COOKIE or None)
            events, candidates = asyncio.run(load_from_api(session, year, month, now, tz))

        view = build_month_view(year, month, events, today=today, tz=tz)
        upcoming = upcoming_events(candidates, now, limit=args.upcoming, tz=tz)

    except (EventsApiError, InvalidArgument) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("Rendering %s with %d events", view.title, len(events))

    lines = render_grid(view)
    day_lines = render_day_events(view, tz)
    if day_lines:
        lines += [""] + day_lines
    lines += [""] + render_upcoming(upcoming, tz)
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
