"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.events import CalendarEvent


@pytest.fixture
def fake():
    """Seeded Faker so generated titles and locations are stable."""
    faker = Faker()
    faker.seed_instance(1234)
    return faker


@pytest.fixture
def sample_event():
    """Sample event as returned by /api/events."""
    return {
        "id": 1,
        "title": "Leadership Fundamentals",
        "description": "Module 1",
        "start": "2024-02-15T09:00:00",
        "end": "2024-02-15T12:00:00",
        "location": "Building 4, Room 12",
        "type": "training",
        "venueType": "Face-to-Face",
        "required": True,
        "createdById": 2,
        "createdAt": "2024-01-10T08:00:00Z",
        "updatedAt": "2024-01-10T08:00:00Z",
    }


@pytest.fixture
def make_event(fake):
    """Factory for CalendarEvent models with generated text fields."""
    counter = {"id": 100}

    def _make(start: str, end: str | None = None, **overrides) -> CalendarEvent:
        counter["id"] += 1
        data = {
            "id": counter["id"],
            "title": fake.catch_phrase(),
            "start": start,
            "end": end or start,
            "location": fake.city(),
            "type": "meeting",
            "createdById": 1,
        }
        data.update(overrides)
        return CalendarEvent.model_validate(data)

    return _make


@pytest.fixture
def sample_events(sample_event, make_event):
    """A February 2024 event list with padding-month neighbours."""
    return [
        CalendarEvent.model_validate(sample_event),
        make_event("2024-02-15T14:00:00", "2024-02-15T15:00:00", type="meeting"),
        make_event("2024-02-01T08:00:00", "2024-02-01T09:00:00", type="ceremony"),
        make_event("2024-01-30T10:00:00", "2024-01-30T11:00:00", type="workshop"),
        make_event("2024-03-02T10:00:00", "2024-03-02T11:00:00", type="training"),
    ]
