"""
Task items written into note sections.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from vault_notes.constants import PRIORITY_TO_EMOJI
from vault_notes.models.tags import Tags
from vault_notes.utils.dates import parse_date
from vault_notes.utils.formatting import render_task


def _as_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    dt = parse_date(value)
    return dt.date() if dt else None


@dataclass
class NoteTask:
    """
    A checkbox task line.

    Dates may be given as ``date``, ``datetime`` or ISO strings; they are
    stored as ``date``. ``priority`` is one of highest, high, medium, low,
    lowest or None.
    """

    description: str
    completed: bool = False
    due_date: Optional[date] = None
    scheduled_date: Optional[date] = None
    start_date: Optional[date] = None
    priority: Optional[str] = None
    tags: Tags = field(default_factory=Tags)

    def __post_init__(self) -> None:
        self.description = self.description.strip()
        self.due_date = _as_date(self.due_date)
        self.scheduled_date = _as_date(self.scheduled_date)
        self.start_date = _as_date(self.start_date)
        if not isinstance(self.tags, Tags):
            self.tags = Tags(self.tags)
        if self.priority is not None:
            self.priority = self.priority.lower()
            if self.priority not in PRIORITY_TO_EMOJI:
                raise ValueError(f"Unknown task priority: {self.priority!r}")

    @property
    def priority_symbol(self) -> str:
        return PRIORITY_TO_EMOJI.get(self.priority or "", "")

    def to_markdown(self) -> str:
        return render_task(self)

    def __str__(self) -> str:
        return self.to_markdown()
