from datetime import datetime, timedelta

from prep_scheduler.scheduling.utils.event_filters import (
    all_day_interval, event_to_interval, events_to_busy_intervals, filter_events_for_processing, parse_timestamp
)
from prep_scheduler.schemas import CalendarEventIn
from tests.helpers import DAY, at

EVENTS = [
    {"title": "Roadmap review", "startTime": "2026-10-19T10:00:00", "endTime": "2026-10-19T11:00:00",
     "isAllDay": False, "attendees": ["ana@example.com"]},
    {"title": "Focus time", "startTime": "2026-10-19T13:00:00", "endTime": "2026-10-19T15:00:00",
     "isAllDay": False, "attendees": []},
    {"title": "Conference", "startTime": "2026-10-19T00:00:00", "endTime": "2026-10-20T00:00:00",
     "isAllDay": True, "attendees": ["team@example.com"]},
]


def test_filter_keeps_timed_events_with_attendees():
    assert [event["title"] for event in filter_events_for_processing(EVENTS)] == ["Roadmap review"]


def test_filter_accepts_schema_objects():
    events = [CalendarEventIn(**event) for event in EVENTS]
    assert [event.title for event in filter_events_for_processing(events)] == ["Roadmap review"]


def test_event_to_interval():
    interval = event_to_interval(EVENTS[0])
    assert (interval.start, interval.end, interval.label) == (at(10), at(11), "Roadmap review")


def test_offsets_are_converted_to_local_wall_clock():
    assert parse_timestamp("2026-10-19T09:00:00Z", "Europe/Amsterdam") == at(11)
    assert parse_timestamp("2026-10-19T09:00:00+02:00") == at(7)
    assert parse_timestamp("2026-10-19T09:00:00").tzinfo is None


def test_datetimes_pass_through():
    moment = datetime(2026, 10, 19, 8, 30)
    assert parse_timestamp(moment) == moment


def test_busy_intervals_keep_all_day_and_skip_broken_events(caplog):
    events = EVENTS + [
        {"title": "Broken", "startTime": "tomorrow-ish", "endTime": "2026-10-19T12:00:00"},
        {"title": "Zero length", "startTime": "2026-10-19T12:00:00", "endTime": "2026-10-19T12:00:00"},
    ]
    intervals = events_to_busy_intervals(events)
    assert [interval.label for interval in intervals] == ["Roadmap review", "Focus time", "Conference"]
    assert (intervals[2].start, intervals[2].end) == (DAY, DAY + timedelta(days=1))
    assert "Broken" in caplog.text


class TestAllDayInterval:
    def test_date_only_bounds(self):
        event = {"title": "Offsite", "startTime": "2026-10-19", "endTime": "2026-10-21", "isAllDay": True}
        interval = all_day_interval(event)
        assert (interval.start, interval.end) == (DAY, DAY + timedelta(days=2))

    def test_end_inside_a_day_rounds_up_to_midnight(self):
        event = {"title": "Holiday", "startTime": "2026-10-19T00:00:00", "endTime": "2026-10-19T23:59:00"}
        interval = all_day_interval(event)
        assert (interval.start, interval.end) == (DAY, DAY + timedelta(days=1))

    def test_missing_end_blocks_one_day(self):
        interval = all_day_interval({"title": "Out of office", "startTime": "2026-10-19T08:00:00", "endTime": None})
        assert (interval.start, interval.end, interval.label) == (DAY, DAY + timedelta(days=1), "Out of office")
