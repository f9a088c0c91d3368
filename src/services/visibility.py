"""
Per-user event visibility.

The current user and the participation records are passed in explicitly;
nothing here reads a global session.
"""

from models.events import CalendarEvent, EventParticipant
from models.users import SessionUser


def participant_event_ids(
    user: SessionUser, participants: list[EventParticipant]
) -> set[int]:
    """Event ids the user is attached to and has not declined."""
    return {
        p.event_id
        for p in participants
        if p.user_id == user.id and p.status != "Declined"
    }


def visible_events(
    events: list[CalendarEvent],
    user: SessionUser,
    participants: list[EventParticipant],
) -> list[CalendarEvent]:
    """
    Filter events down to those the user may see.

    Admins see everything. Trainers and trainees see events they created
    plus events they participate in (Pending or Confirmed).
    """
    if user.is_admin:
        return list(events)

    attached = participant_event_ids(user, participants)
    return [
        event
        for event in events
        if event.created_by_id == user.id or event.id in attached
    ]
