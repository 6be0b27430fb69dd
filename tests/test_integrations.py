"""
Tests for integrations/calendar.py and integrations/location.py.

Device services are replaced by small fakes that return native-looking
objects (SimpleNamespace) the way the real bridges do.
"""

import sys
from datetime import date, datetime
from pathlib import Path
from types import SimpleNamespace

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from vault_notes.integrations.calendar import Calendar, CalendarEvent
from vault_notes.integrations.location import Address, Coordinates, Location
from vault_notes.note import Note


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

WORK = SimpleNamespace(title="Work")
HOME = SimpleNamespace(title="Home")


def _event(title, start, end, calendar=WORK, **extra):
    return SimpleNamespace(
        title=title,
        start_date=start,
        end_date=end,
        calendar=calendar,
        identifier=f"id-{title}",
        **extra,
    )


class _FakeCalendarSource:
    def __init__(self, events):
        self.events = events
        self.calls = []

    def for_events(self):
        return [WORK, HOME]

    def events_between(self, start, end, calendars):
        self.calls.append((start, end, calendars))
        return [
            e for e in self.events
            if e.calendar in calendars and e.start_date <= end and e.end_date >= start
        ]

    def event_with_identifier(self, identifier, calendars):
        return next((e for e in self.events if e.identifier == identifier), None)


class _FakeLocationSource:
    def __init__(self, position, address=None):
        self.position = position
        self.address = address

    def current(self):
        return self.position

    def reverse_geocode(self, latitude, longitude):
        return self.address


DAY = date(2025, 10, 6)


@pytest.fixture
def source():
    return _FakeCalendarSource([
        _event(
            "Standup",
            datetime(2025, 10, 6, 9, 0),
            datetime(2025, 10, 6, 9, 15),
            location="Room 4",
            attendees=[
                SimpleNamespace(name="Me", email_address="me@example.com", is_current_user=True),
                SimpleNamespace(name="Ana", email_address="ana@example.com", is_current_user=False),
            ],
        ),
        _event("Offsite", datetime(2025, 10, 6), datetime(2025, 10, 7), is_all_day=True),
        _event("Dinner", datetime(2025, 10, 6, 19, 0), datetime(2025, 10, 6, 21, 0), calendar=HOME),
        _event("Tomorrow", datetime(2025, 10, 7, 10, 0), datetime(2025, 10, 7, 11, 0)),
    ])


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

class TestCalendar:
    def test_all_calendars_by_default(self, source):
        assert Calendar(source).calendar_names() == ["Work", "Home"]

    def test_calendar_filter(self, source):
        assert Calendar(source, ["Home"]).calendar_names() == ["Home"]

    def test_events_for_date_uses_day_bounds(self, source):
        cal = Calendar(source, ["Work"])
        events = cal.get_events_for_date(DAY)
        start, end, _ = source.calls[-1]
        assert start == datetime(2025, 10, 6)
        assert end == datetime(2025, 10, 6, 23, 59, 59, 999000)
        assert [e.title for e in events] == ["Standup", "Offsite"]

    def test_get_by_id(self, source):
        cal = Calendar(source)
        assert cal.get_by_id("id-Dinner").title == "Dinner"
        assert cal.get_by_id("missing") is None

    def test_major_events(self, source):
        cal = Calendar(source)
        long_events = cal.get_major_events_for_date(DAY, lambda e: e.duration_hours >= 2)
        assert [e.title for e in long_events] == ["Offsite", "Dinner"]


class TestCalendarEvent:
    def test_from_native_defaults(self):
        event = CalendarEvent.from_native(
            SimpleNamespace(start_date=datetime(2025, 1, 1), end_date=datetime(2025, 1, 1, 1))
        )
        assert event.title == ""
        assert event.calendar_name == ""
        assert event.attendees == []
        assert not event.has_attendees()

    def test_attendees(self, source):
        event = CalendarEvent.from_native(source.events[0])
        assert event.calendar_name == "Work"
        assert event.attendee_names() == ["Me", "Ana"]
        assert event.attendee_emails() == ["me@example.com", "ana@example.com"]
        assert [a.name for a in event.other_attendees()] == ["Ana"]

    def test_to_markdown(self, source):
        standup = CalendarEvent.from_native(source.events[0])
        offsite = CalendarEvent.from_native(source.events[1])
        assert standup.to_markdown() == "- 9:00 AM Standup (Room 4)"
        assert offsite.to_markdown() == "- All day Offsite"

    def test_agenda_written_into_note(self, source, tmp_path):
        note = Note.open(tmp_path, "2025-10-06.md", folder="daily")
        agenda = note.sections.add("Agenda", level=2)
        for event in Calendar(source, ["Work"]).get_events_for_date(DAY):
            agenda.append(event.to_markdown())
        note.save()
        assert (tmp_path / "daily" / "2025-10-06.md").read_text(encoding="utf-8") == (
            "## Agenda\n- 9:00 AM Standup (Room 4)\n- All day Offsite"
        )


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

class TestLocation:
    def test_coordinates_from_dict_and_object(self):
        assert Coordinates.from_native({"latitude": 1, "longitude": 2}) == Coordinates(1.0, 2.0, 0.0)
        native = SimpleNamespace(latitude=1.5, longitude=2.5, altitude=10)
        assert Coordinates.from_native(native) == Coordinates(1.5, 2.5, 10.0)

    def test_address_display(self):
        address = Address.from_native({"locality": "Lyon", "country": "France", "postal_code": 69001})
        assert address.display() == "Lyon, France"
        assert address.postal_code == "69001"

    def test_to_frontmatter_with_address(self):
        location = Location(_FakeLocationSource(
            {"latitude": 45.76, "longitude": 4.83, "altitude": 170},
            SimpleNamespace(locality="Lyon", administrative_area="Rhône", country="France"),
        ))
        assert location.to_frontmatter() == {
            "latitude": 45.76,
            "longitude": 4.83,
            "altitude": 170.0,
            "location": "Lyon, Rhône, France",
        }

    def test_to_frontmatter_without_address(self):
        location = Location(_FakeLocationSource({"latitude": 0, "longitude": 0}))
        values = location.to_frontmatter()
        assert "location" not in values
        assert location.address() is None

    def test_values_fit_frontmatter(self, tmp_path):
        location = Location(_FakeLocationSource(
            {"latitude": 45.76, "longitude": 4.83},
            {"locality": "Lyon"},
        ))
        note = Note.open(tmp_path, "x.md")
        note.set_frontmatter(location.to_frontmatter())
        assert note.frontmatter.to_string() == (
            "---\nlatitude: 45.76\nlongitude: 4.83\naltitude: 0.0\nlocation: \"Lyon\"\n---"
        )


class TestPackageExports:
    def test_top_level_names(self):
        import vault_notes

        assert vault_notes.Calendar is Calendar
        assert vault_notes.CalendarEvent is CalendarEvent
        assert vault_notes.Location is Location
