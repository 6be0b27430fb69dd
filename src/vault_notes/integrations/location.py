"""
Device location for notes.

Wraps a LocationSource and turns its answers into plain values that can be
stored in front matter (numbers and strings only).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

from vault_notes.constants import EMPTY


class LocationSource(Protocol):
    """The device location / geocoding service."""

    def current(self) -> Any: ...

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[Any]: ...


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float
    altitude: float = 0.0

    @classmethod
    def from_native(cls, native: Any) -> Coordinates:
        if isinstance(native, dict):
            return cls(
                latitude=float(native["latitude"]),
                longitude=float(native["longitude"]),
                altitude=float(native.get("altitude") or 0.0),
            )
        return cls(
            latitude=float(native.latitude),
            longitude=float(native.longitude),
            altitude=float(getattr(native, "altitude", 0.0) or 0.0),
        )


@dataclass(frozen=True)
class Address:
    name: str = EMPTY
    thoroughfare: str = EMPTY
    locality: str = EMPTY
    administrative_area: str = EMPTY
    postal_code: str = EMPTY
    country: str = EMPTY

    @classmethod
    def from_native(cls, native: Any) -> Address:
        def pick(attr: str) -> str:
            value = native.get(attr) if isinstance(native, dict) else getattr(native, attr, None)
            return str(value) if value else EMPTY

        return cls(**{name: pick(name) for name in cls.__dataclass_fields__})

    def display(self) -> str:
        """``Locality, Area, Country`` with empty parts left out."""
        parts = [self.locality, self.administrative_area, self.country]
        return ", ".join(p for p in parts if p)


class Location:
    def __init__(self, source: LocationSource) -> None:
        self._source = source

    def current(self) -> Coordinates:
        return Coordinates.from_native(self._source.current())

    def address(self, coords: Optional[Coordinates] = None) -> Optional[Address]:
        coords = coords or self.current()
        native = self._source.reverse_geocode(coords.latitude, coords.longitude)
        return Address.from_native(native) if native else None

    def to_frontmatter(self) -> Dict[str, Union[str, float]]:
        """
        Current position as front matter values.

        ``location`` is only included when the address could be resolved.
        """
        coords = self.current()
        values: Dict[str, Union[str, float]] = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "altitude": coords.altitude,
        }
        address = self.address(coords)
        if address and address.display():
            values["location"] = address.display()
        return values
