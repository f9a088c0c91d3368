"""
Data models for calendar events and grid cells.

CalendarEvent mirrors the JSON returned by the LMS `/api/events` endpoint
(camelCase keys) while exposing snake_case attributes in Python.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

EventCategory = Literal["training", "meeting", "ceremony", "workshop"]
VenueType = Literal["VTC", "Face-to-Face"]
ParticipantStatus = Literal["Pending", "Confirmed", "Declined"]


@dataclass(frozen=True)
class CalendarDayCell:
    """One of the 42 slots in a month grid."""

    day_number: int
    in_target_month: bool


class CalendarEvent(BaseModel):
    """Calendar event as served by the LMS API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    description: str | None = None
    start_timestamp: datetime = Field(alias="start")
    end_timestamp: datetime = Field(alias="end")
    location: str | None = None
    category: EventCategory = Field(alias="type")
    venue_type: VenueType | None = Field(default=None, alias="venueType")
    required: bool = False
    created_by_id: int | None = Field(default=None, alias="createdById")

    @model_validator(mode="after")
    def check_time_order(self) -> "CalendarEvent":
        start, end = self.start_timestamp, self.end_timestamp
        # Only comparable when both are naive or both are aware
        if (start.tzinfo is None) == (end.tzinfo is None) and end < start:
            raise ValueError("Event end is before its start")
        return self


class EventParticipant(BaseModel):
    """A user's attachment to an event (invited, confirmed or declined)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    event_id: int = Field(alias="eventId")
    user_id: int = Field(alias="userId")
    status: ParticipantStatus = "Pending"
