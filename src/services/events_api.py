"""
Client for the LMS events REST endpoint.

The session is always passed in by the caller; this module keeps no
global client or user state.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from pathlib import Path

import httpx
from pydantic import TypeAdapter, ValidationError

from core.config import LMS_API_TIMEOUT, SESSION_COOKIE_NAME
from core.validation import validate_year_month
from models.events import CalendarEvent, EventParticipant

logger = logging.getLogger(__name__)

_events_adapter = TypeAdapter(list[CalendarEvent])
_participants_adapter = TypeAdapter(list[EventParticipant])


class EventsApiError(Exception):
    """Raised when events cannot be fetched or parsed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class ApiSession:
    """Authenticated connection details for the LMS API."""

    base_url: str
    session_cookie: str | None = None

    @property
    def headers(self) -> dict[str, str]:
        if not self.session_cookie:
            return {}
        return {"Cookie": f"{SESSION_COOKIE_NAME}={self.session_cookie}"}


def parse_events(payload) -> list[CalendarEvent]:
    """
    Validate a decoded JSON array into CalendarEvent models.

    Raises:
        EventsApiError: if the payload does not match the event schema
    """
    try:
        return _events_adapter.validate_python(payload)
    except ValidationError as e:
        logger.error("Invalid events payload: %s", e)
        raise EventsApiError(f"Invalid events payload: {e.error_count()} error(s)") from e


def load_events_file(path: Path) -> tuple[list[CalendarEvent], list[EventParticipant]]:
    """
    Load events exported from the LMS API.

    The file holds either a plain event array or an object with "events"
    and optional "participants" arrays.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise EventsApiError(f"Cannot read events file {path}: {e}") from e

    if isinstance(data, list):
        return parse_events(data), []

    if not isinstance(data, dict) or "events" not in data:
        raise EventsApiError(f"Events file {path} has no 'events' array")

    events = parse_events(data["events"])
    try:
        participants = _participants_adapter.validate_python(data.get("participants", []))
    except ValidationError as e:
        raise EventsApiError(f"Invalid participants in {path}: {e.error_count()} error(s)") from e
    return events, participants


def _format_bound(value: date | datetime, tz: tzinfo | None = None) -> str:
    """ISO 8601 bound with an explicit offset; naive values are local to tz."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        # astimezone() on a naive datetime assumes the system zone
        value = value.replace(tzinfo=tz) if tz is not None else value.astimezone()
    return value.isoformat()


async def fetch_events(
    session: ApiSession,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    category: str | None = None,
    client: httpx.AsyncClient | None = None,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """
    Fetch events visible to the session's user.

    Args:
        session: base URL and session cookie
        start, end: optional range on event start time
        category: optional event type filter (training, meeting, ...)
        client: optional shared AsyncClient (one is created otherwise)
        tz: zone for naive start/end bounds (system zone when None)

    Raises:
        EventsApiError: on transport errors, non-2xx responses or bad payloads
    """
    params = {}
    if start is not None:
        params["start"] = _format_bound(start, tz)
    if end is not None:
        params["end"] = _format_bound(end, tz)
    if category:
        params["type"] = category

    url = f"{session.base_url.rstrip('/')}/api/events"
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=LMS_API_TIMEOUT)

    try:
        response = await client.get(url, params=params, headers=session.headers)
    except httpx.HTTPError as e:
        logger.error("Error fetching events from %s: %s", url, e)
        raise EventsApiError(f"Could not reach events API: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code == 401:
        raise EventsApiError("Not authenticated", status_code=401)
    if response.is_error:
        logger.error("Events API returned %s: %s", response.status_code, response.text)
        raise EventsApiError(
            f"Events API returned {response.status_code}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise EventsApiError("Events API returned invalid JSON", response.status_code) from e

    events = parse_events(payload)
    logger.debug("Fetched %d events from %s", len(events), url)
    return events


async def fetch_month_events(
    session: ApiSession,
    year: int,
    month: int,
    client: httpx.AsyncClient | None = None,
    tz: tzinfo | None = None,
) -> list[CalendarEvent]:
    """Fetch events starting within a (year, zero-based month)."""
    validate_year_month(year, month)
    start = date(year, month + 1, 1)
    end = date(year + 1, 1, 1) if month == 11 else date(year, month + 2, 1)
    return await fetch_events(session, start=start, end=end, client=client, tz=tz)
