"""Calendar data models."""

from .events import CalendarDayCell, CalendarEvent, EventParticipant
from .users import SessionUser

__all__ = ["CalendarDayCell", "CalendarEvent", "EventParticipant", "SessionUser"]
