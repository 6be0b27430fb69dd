"""
Calendar access for notes.

The device calendar is reached through a CalendarSource. Its native event
objects are wrapped in CalendarEvent so the rest of the code works with plain
attributes, and event details end up in notes as ordinary text.

A native event is expected to expose ``title``, ``start_date``,
``end_date``, ``is_all_day``, ``location``, ``notes``, ``identifier``,
``calendar`` (with a ``title``) and ``attendees`` (each with ``name``,
``email_address`` and ``is_current_user``). Missing attributes fall back to
empty values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, List, Optional, Protocol, Sequence, Union

from vault_notes.constants import EMPTY
from vault_notes.utils.dates import end_of_day, start_of_day, to_time_12h


class CalendarSource(Protocol):
    """The device calendar service."""

    def for_events(self) -> List[Any]: ...

    def events_between(self, start: datetime, end: datetime, calendars: Sequence[Any]) -> List[Any]: ...

    def event_with_identifier(self, identifier: str, calendars: Sequence[Any]) -> Optional[Any]: ...


@dataclass
class Attendee:
    name: str = EMPTY
    email_address: str = EMPTY
    is_current_user: bool = False

    @classmethod
    def from_native(cls, native: Any) -> Attendee:
        return cls(
            name=getattr(native, "name", None) or EMPTY,
            email_address=getattr(native, "email_address", None) or EMPTY,
            is_current_user=bool(getattr(native, "is_current_user", False)),
        )


@dataclass
class CalendarEvent:
    """A calendar event reduced to the fields notes care about."""

    title: str
    start_date: datetime
    end_date: datetime
    is_all_day: bool = False
    location: str = EMPTY
    notes: str = EMPTY
    calendar_name: str = EMPTY
    id: Optional[str] = None
    attendees: List[Attendee] = field(default_factory=list)

    @classmethod
    def from_native(cls, native: Any) -> CalendarEvent:
        calendar = getattr(native, "calendar", None)
        return cls(
            title=getattr(native, "title", None) or EMPTY,
            start_date=native.start_date,
            end_date=native.end_date,
            is_all_day=bool(getattr(native, "is_all_day", False)),
            location=getattr(native, "location", None) or EMPTY,
            notes=getattr(native, "notes", None) or EMPTY,
            calendar_name=getattr(calendar, "title", EMPTY) if calendar else EMPTY,
            id=getattr(native, "identifier", None),
            attendees=[Attendee.from_native(a) for a in getattr(native, "attendees", None) or []],
        )

    @property
    def duration_hours(self) -> float:
        return (self.end_date - self.start_date).total_seconds() / 3600

    def is_major_event(self, predicate: Callable[[CalendarEvent], bool]) -> bool:
        return bool(predicate(self))

    def attendee_names(self) -> List[str]:
        return [a.name for a in self.attendees if a.name]

    def attendee_emails(self) -> List[str]:
        return [a.email_address for a in self.attendees if a.email_address]

    def has_attendees(self) -> bool:
        return bool(self.attendees)

    def other_attendees(self) -> List[Attendee]:
        return [a for a in self.attendees if not a.is_current_user]

    def to_markdown(self) -> str:
        """Agenda bullet, e.g. ``- 9:00 AM Standup (Room 4)``."""
        when = "All day" if self.is_all_day else to_time_12h(self.start_date)
        line = f"- {when} {self.title}"
        if self.location:
            line += f" ({self.location})"
        return line


class Calendar:
    """
    Events from a set of device calendars.

    With no names given every event calendar is used; otherwise only the
    calendars whose titles are listed.
    """

    def __init__(self, source: CalendarSource, calendar_names: Optional[Sequence[str]] = None) -> None:
        self._source = source
        all_calendars = source.for_events()
        if calendar_names:
            self.calendars = [c for c in all_calendars if getattr(c, "title", None) in calendar_names]
        else:
            self.calendars = list(all_calendars)

    def calendar_names(self) -> List[str]:
        return [getattr(c, "title", EMPTY) for c in self.calendars]

    def get_events_between(self, start: datetime, end: datetime) -> List[CalendarEvent]:
        natives = self._source.events_between(start, end, self.calendars)
        return [CalendarEvent.from_native(n) for n in natives]

    def get_events_for_date(self, day: Union[date, datetime]) -> List[CalendarEvent]:
        return self.get_events_between(start_of_day(day), end_of_day(day))

    def get_todays_events(self) -> List[CalendarEvent]:
        return self.get_events_for_date(datetime.now())

    def get_by_id(self, identifier: str) -> Optional[CalendarEvent]:
        native = self._source.event_with_identifier(identifier, self.calendars)
        return CalendarEvent.from_native(native) if native else None

    def get_major_events(
        self,
        start: datetime,
        end: datetime,
        predicate: Callable[[CalendarEvent], bool],
    ) -> List[CalendarEvent]:
        return [e for e in self.get_events_between(start, end) if e.is_major_event(predicate)]

    def get_major_events_for_date(
        self,
        day: Union[date, datetime],
        predicate: Callable[[CalendarEvent], bool],
    ) -> List[CalendarEvent]:
        return [e for e in self.get_events_for_date(day) if e.is_major_event(predicate)]
