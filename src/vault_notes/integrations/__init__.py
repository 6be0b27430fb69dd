"""Adapters for device services whose results are written into notes."""

from .calendar import Attendee, Calendar, CalendarEvent, CalendarSource
from .location import Address, Coordinates, Location, LocationSource

__all__ = [
    "Attendee",
    "Calendar",
    "CalendarEvent",
    "CalendarSource",
    "Address",
    "Coordinates",
    "Location",
    "LocationSource",
]
