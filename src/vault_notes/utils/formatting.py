"""
Canonical task line formatting.

This module is the single source of truth for how a task is written back
into a note body. The emoji and checkbox markers follow the Obsidian Tasks
plugin so task queries in the vault keep working on notes we write.

Line layout:
    - [ ] <description> 📅 <due> ⏳ <scheduled> 🛫 <start> <priority> #tag ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from vault_notes.constants import (
    CHECKBOX,
    CHECKBOX_COMPLETED,
    DATE_TO_EMOJI,
    PRIORITY_TO_EMOJI,
    SPACE,
)
from vault_notes.utils.dates import to_iso

if TYPE_CHECKING:
    from vault_notes.models.task import NoteTask


def render_checkbox(completed: bool) -> str:
    return CHECKBOX_COMPLETED if completed else CHECKBOX


def render_task(task: NoteTask) -> str:
    """Render a task as a single markdown line."""
    parts: List[str] = [render_checkbox(task.completed), task.description]

    for name, value in (
        ("due", task.due_date),
        ("scheduled", task.scheduled_date),
        ("start", task.start_date),
    ):
        if value:
            parts.append(f"{DATE_TO_EMOJI[name]} {to_iso(value)}")

    if task.priority:
        parts.append(PRIORITY_TO_EMOJI[task.priority])

    if not task.tags.is_empty():
        parts.append(task.tags.to_inline_string())

    return SPACE.join(part for part in parts if part)
