"""
Month grid generation and event placement for the training calendar.

Months are zero-based throughout (0 = January ... 11 = December) and weeks
start on Sunday, matching the dashboard's calendar layout.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from core.config import (
    CATEGORY_LABELS,
    DAYS_PER_WEEK,
    DEFAULT_CATEGORY_LABEL,
    GRID_CELLS,
    MONTH_NAMES,
    UPCOMING_EVENTS_LIMIT,
    WEEKDAY_HEADERS,
)
from core.validation import validate_limit, validate_year_month
from models.events import CalendarDayCell, CalendarEvent


# =============================================================================
# MONTH ARITHMETIC
# =============================================================================


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    validate_year_month(year, month)
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Return the weekday of the 1st of the month (0 = Sunday ... 6 = Saturday)."""
    validate_year_month(year, month)
    # calendar.weekday counts from Monday
    return (calendar.weekday(year, month + 1, 1) + 1) % 7


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    validate_year_month(year, month)
    if month == 0:
        return year - 1, 11
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    validate_year_month(year, month)
    if month == 11:
        return year + 1, 0
    return year, month + 1


def month_of(d: date) -> tuple[int, int]:
    """Return the (year, zero-based month) containing a date."""
    return d.year, d.month - 1


# =============================================================================
# GRID BUILDER
# =============================================================================


def build_month_grid(year: int, month: int) -> list[CalendarDayCell]:
    """
    Build the 42-cell (6 x 7) grid for a month.

    Leading cells hold the tail of the previous month, trailing cells the
    start of the next one; both are flagged in_target_month=False. The grid
    always has 6 rows so the calendar height stays constant.

    Raises:
        InvalidArgument: if month is outside 0..11
    """
    validate_year_month(year, month)

    leading = first_weekday(year, month)
    prev_year, prev_month = previous_month(year, month)
    days_in_prev = days_in_month(prev_year, prev_month)

    cells = [
        CalendarDayCell(days_in_prev - leading + i + 1, False)
        for i in range(leading)
    ]
    cells.extend(
        CalendarDayCell(day, True)
        for day in range(1, days_in_month(year, month) + 1)
    )
    cells.extend(
        CalendarDayCell(day, False)
        for day in range(1, GRID_CELLS - len(cells) + 1)
    )
    return cells


# =============================================================================
# EVENT MATCHING
# =============================================================================


def local_start(event: CalendarEvent, tz: tzinfo | None = None) -> datetime:
    """
    Return the event's start as a naive local datetime.

    Naive timestamps are already local. Aware ones are converted to tz, or
    to the system zone when tz is None.
    """
    return _to_local(event.start_timestamp, tz)


def local_end(event: CalendarEvent, tz: tzinfo | None = None) -> datetime:
    """Return the event's end as a naive local datetime."""
    return _to_local(event.end_timestamp, tz)


def _to_local(dt: datetime, tz: tzinfo | None) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz).replace(tzinfo=None)


def events_for_day(
    events: list[CalendarEvent],
    day_number: int,
    in_target_month: bool,
    year: int,
    month: int,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """
    Return the events starting on a grid cell's day, in input order.

    Padding cells never show events, even when an adjacent month's event
    falls on the same day number. Multi-day events appear only on their
    start day.
    """
    if not in_target_month:
        return []

    matches = []
    for event in events:
        start = local_start(event, tz)
        if start.day == day_number and start.month == month + 1 and start.year == year:
            matches.append(event)
    return matches


def events_for_cell(
    events: list[CalendarEvent],
    cell: CalendarDayCell,
    year: int,
    month: int,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """Same as events_for_day, taking a CalendarDayCell."""
    return events_for_day(events, cell.day_number, cell.in_target_month, year, month, tz)


# =============================================================================
# MONTH VIEW
# =============================================================================


@dataclass(frozen=True)
class DayView:
    """A grid cell together with what renders inside it."""

    cell: CalendarDayCell
    events: tuple[CalendarEvent, ...]
    is_today: bool = False


@dataclass(frozen=True)
class MonthView:
    """Render-ready month: title, weekday headers and 42 day views."""

    year: int
    month: int
    title: str
    weekday_headers: tuple[str, ...]
    days: tuple[DayView, ...]

    @property
    def weeks(self) -> list[tuple[DayView, ...]]:
        return [
            self.days[i:i + DAYS_PER_WEEK]
            for i in range(0, len(self.days), DAYS_PER_WEEK)
        ]


def month_title(year: int, month: int) -> str:
    """Format a month heading, e.g. 'February 2024'."""
    validate_year_month(year, month)
    return f"{MONTH_NAMES[month]} {year}"


def build_month_view(
    year: int,
    month: int,
    events: list[CalendarEvent],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> MonthView:
    """
    Place events on the month grid.

    Events within a day are ordered by start time; today (if given and in
    the displayed month) is flagged on its cell.
    """
    grid = build_month_grid(year, month)
    ordered = sorted(events, key=lambda e: local_start(e, tz))

    days = []
    for cell in grid:
        is_today = (
            today is not None
            and cell.in_target_month
            and (today.year, today.month, today.day) == (year, month + 1, cell.day_number)
        )
        days.append(
            DayView(
                cell=cell,
                events=tuple(events_for_cell(ordered, cell, year, month, tz)),
                is_today=is_today,
            )
        )

    return MonthView(
        year=year,
        month=month,
        title=month_title(year, month),
        weekday_headers=tuple(WEEKDAY_HEADERS),
        days=tuple(days),
    )


# =============================================================================
# UPCOMING EVENTS
# =============================================================================


def upcoming_events(
    events: list[CalendarEvent],
    now: datetime,
    limit: int = UPCOMING_EVENTS_LIMIT,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """
    Return the next events starting at or after now, soonest first.

    now may be naive (local) or aware; it is compared in the same local
    time as the event starts.
    """
    validate_limit(limit)
    now = _to_local(now, tz)

    ordered = sorted(events, key=lambda e: local_start(e, tz))
    return [e for e in ordered if local_start(e, tz) >= now][:limit]


# =============================================================================
# DISPLAY HELPERS
# =============================================================================


def format_time(dt: datetime) -> str:
    """Format time as 'H:MM AM' (no zero-padding, e.g., '9:00 AM')."""
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def format_date(dt: date) -> str:
    """Format date as 'Mon D, YYYY' (e.g., 'Feb 15, 2024')."""
    return f"{MONTH_NAMES[dt.month - 1][:3]} {dt.day}, {dt.year}"


def month_badge(dt: date) -> tuple[str, int]:
    """Return the ('FEB', 15) pair shown beside an upcoming event."""
    return MONTH_NAMES[dt.month - 1][:3].upper(), dt.day


def category_label(category: str) -> str:
    """Short tag for an event category."""
    return CATEGORY_LABELS.get(category, DEFAULT_CATEGORY_LABEL)


def venue_badges(event: CalendarEvent) -> list[str]:
    """Badges shown under an upcoming event: venue type and 'Required'."""
    badges = []
    if event.venue_type:
        badges.append(event.venue_type)
    if event.required:
        badges.append("Required")
    return badges
