"""
Parser for task lines inside note sections.

Reverses utils.formatting.render_task: a line such as

    - [x] Ship release 📅 2025-10-05 ⏫ #work

becomes a NoteTask. Markers are always at the end of the line, so the
description is everything before the earliest marker.
"""

import re
from typing import List, Optional

from vault_notes.constants import EMOJI_TO_DATE, EMOJI_TO_PRIORITY
from vault_notes.models.tags import Tags
from vault_notes.models.task import NoteTask

_TASK_LINE = re.compile(r"^\s*- \[(.)\] (.+)$")

_DATE_EMOJI = "|".join(re.escape(e) for e in EMOJI_TO_DATE)
_PRIORITY_EMOJI = "|".join(re.escape(e) for e in EMOJI_TO_PRIORITY)
# Groups: (1)=date emoji, (2)=ISO date, (3)=priority emoji, (4)=tag name
_MARKER = re.compile(
    rf"({_DATE_EMOJI})\s+(\d{{4}}-\d{{2}}-\d{{2}})|({_PRIORITY_EMOJI})|#([\w/-]+)"
)


def _mask_wikilinks(text: str) -> str:
    """Blank out [[...]] so '#' section links are not read as tags."""
    return re.sub(r"\[\[.*?\]\]", lambda m: " " * len(m.group()), text)


def parse_task_line(line: str) -> Optional[NoteTask]:
    """Return a NoteTask for a checkbox line, or None for any other line."""
    m = _TASK_LINE.match(line)
    if not m:
        return None

    checkbox, content = m.group(1), m.group(2)
    dates = {}
    priority = None
    tags = Tags()
    earliest = len(content)

    for marker in _MARKER.finditer(_mask_wikilinks(content)):
        if marker.group(1):
            dates[EMOJI_TO_DATE[marker.group(1)]] = marker.group(2)
        elif marker.group(3):
            priority = EMOJI_TO_PRIORITY[marker.group(3)]
        elif marker.group(4):
            tags.add(marker.group(4))
        earliest = min(earliest, marker.start())

    return NoteTask(
        description=content[:earliest].strip(),
        completed=checkbox.lower() == "x",
        due_date=dates.get("due"),
        scheduled_date=dates.get("scheduled"),
        start_date=dates.get("start"),
        priority=priority,
        tags=tags,
    )


def parse_tasks(text: str) -> List[NoteTask]:
    """Parse every task line in a block of text, in order."""
    tasks = []
    for line in text.split("\n"):
        task = parse_task_line(line)
        if task is not None:
            tasks.append(task)
    return tasks
