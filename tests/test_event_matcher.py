"""Tests for placing events on grid cells."""

from zoneinfo import ZoneInfo

from models.events import CalendarDayCell, CalendarEvent
from services.calendar import build_month_grid, events_for_cell, events_for_day

UTC = ZoneInfo("UTC")
NEW_YORK = ZoneInfo("America/New_York")


def test_event_matches_its_single_cell(sample_event):
    event = CalendarEvent.model_validate(sample_event)
    grid = build_month_grid(2024, 1)

    matched = [cell for cell in grid if events_for_cell([event], cell, 2024, 1)]
    assert matched == [CalendarDayCell(15, True)]


def test_padding_cells_never_match(make_event):
    # June 2024 grid starts with May 26..31; cell 30 is padding
    may_30 = make_event("2024-05-30T10:00:00")
    jul_30 = make_event("2024-07-30T10:00:00")
    jun_30 = make_event("2024-06-30T10:00:00")
    events = [may_30, jul_30, jun_30]

    assert events_for_day(events, 30, False, 2024, 5) == []
    assert events_for_day(events, 30, True, 2024, 5) == [jun_30]


def test_trailing_padding_day_ignores_next_month_event(make_event):
    mar_2 = make_event("2024-03-02T10:00:00")
    grid = build_month_grid(2024, 1)
    padding_2 = [c for c in grid if c.day_number == 2 and not c.in_target_month]

    assert len(padding_2) == 1
    assert events_for_cell([mar_2], padding_2[0], 2024, 1) == []


def test_same_day_number_other_month_or_year_does_not_match(make_event):
    events = [
        make_event("2024-03-15T09:00:00"),
        make_event("2023-02-15T09:00:00"),
    ]
    assert events_for_day(events, 15, True, 2024, 1) == []


def test_matches_preserve_input_order(make_event):
    late = make_event("2024-02-10T16:00:00")
    early = make_event("2024-02-10T08:00:00")
    other = make_event("2024-02-11T08:00:00")

    assert events_for_day([late, other, early], 10, True, 2024, 1) == [late, early]


def test_multi_day_event_only_on_start_day(make_event):
    course = make_event("2024-02-12T09:00:00", "2024-02-16T17:00:00", type="training")

    assert events_for_day([course], 12, True, 2024, 1) == [course]
    assert events_for_day([course], 13, True, 2024, 1) == []


def test_aware_start_is_converted_to_local_zone(make_event):
    # 02:00 UTC on the 1st is still the evening of Jan 31 in New York
    event = make_event("2024-02-01T02:00:00Z")

    assert events_for_day([event], 1, True, 2024, 1, tz=UTC) == [event]
    assert events_for_day([event], 1, True, 2024, 1, tz=NEW_YORK) == []
    assert events_for_day([event], 31, True, 2024, 0, tz=NEW_YORK) == [event]


def test_empty_event_list():
    assert events_for_day([], 1, True, 2024, 1) == []


def test_matcher_does_not_mutate_input(sample_events):
    before = list(sample_events)
    events_for_day(sample_events, 15, True, 2024, 1)
    assert sample_events == before
